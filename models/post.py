from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class Like(BaseModel):
    user: str


class Comment(BaseModel):
    id: str
    user: str
    text: str
    name: str
    avatar: Optional[str] = None
    date: datetime


class Post(BaseModel):
    id: Optional[str] = None
    user: str
    text: str
    name: str
    avatar: Optional[str] = None
    likes: List[Like] = []
    comments: List[Comment] = []
    date: datetime

    def to_document(self) -> dict:
        """Firestore representation; the document id is not stored as a field"""
        return self.model_dump(exclude={"id"})


class PostRequest(BaseModel):
    text: str = Field(min_length=1)


class CommentRequest(BaseModel):
    text: str = Field(min_length=1)


class MessageResponse(BaseModel):
    msg: str
