import logging
from typing import List, Optional

import firebase_admin
from firebase_admin import firestore as fs
from google.api_core.exceptions import InvalidArgument
from google.cloud import firestore

from models.post import Post, Like, Comment
from models.user import UserProfile

logger = logging.getLogger(__name__)


class FirestoreDB:
    def __init__(self, app: firebase_admin.App, posts_collection: str = "posts", users_collection: str = "users"):
        self.db = fs.client(app)
        self.posts_collection = posts_collection
        self.users_collection = users_collection

    def collection(self, name: str):
        return self.db.collection(name)

    def _get_post_snapshot(self, post_id: str):
        """
        Fetch a post snapshot, treating ids Firestore cannot address the same as missing ones
        """
        try:
            snapshot = self.collection(self.posts_collection).document(post_id).get()
        except (ValueError, InvalidArgument) as e:
            logger.debug("Invalid post id %r: %s", post_id, e)
            return None
        if not snapshot.exists:
            return None
        return snapshot

    def get_user_profile(self, user_id: str) -> Optional[UserProfile]:
        """Get the display name and avatar of a user"""
        snapshot = self.collection(self.users_collection).document(user_id).get()
        if not snapshot.exists:
            return None
        data = snapshot.to_dict()
        return UserProfile(id=snapshot.id, name=data.get("name", ""), avatar=data.get("avatar"))

    def get_all_posts(self) -> List[Post]:
        """Get all posts sorted by creation date descending"""
        posts_ref = self.collection(self.posts_collection).order_by(
            "date", direction=firestore.Query.DESCENDING
        ).stream()
        return [Post(id=doc.id, **doc.to_dict()) for doc in posts_ref]

    def get_post(self, post_id: str) -> Optional[Post]:
        """Get a post by ID"""
        snapshot = self._get_post_snapshot(post_id)
        if snapshot is None:
            return None
        return Post(id=snapshot.id, **snapshot.to_dict())

    def create_post(self, post: Post) -> Post:
        """Create a new post and return it with its generated ID"""
        new_post_ref = self.collection(self.posts_collection).document()
        new_post_ref.set(post.to_document())
        return post.model_copy(update={"id": new_post_ref.id})

    def delete_post(self, post_id: str):
        """Delete a post together with its embedded likes and comments"""
        self.collection(self.posts_collection).document(post_id).delete()

    def update_likes(self, post_id: str, likes: List[Like]):
        """Overwrite the embedded like list of a post"""
        self.collection(self.posts_collection).document(post_id).update({
            "likes": [like.model_dump() for like in likes]
        })

    def update_comments(self, post_id: str, comments: List[Comment]):
        """Overwrite the embedded comment list of a post"""
        self.collection(self.posts_collection).document(post_id).update({
            "comments": [comment.model_dump() for comment in comments]
        })
