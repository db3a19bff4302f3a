from datetime import datetime, timezone
from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from dependencies import get_current_user, get_post_service
from main import app
from models.post import Post, Like, Comment
from models.user import User, UserProfile
from services.posts import PostService


class InMemoryFirestoreDB:
    """Dict-backed stand-in for FirestoreDB with the same method surface"""

    def __init__(self):
        self.users: Dict[str, UserProfile] = {}
        self.posts: Dict[str, Post] = {}
        self._next_id = 1

    def add_user(self, user_id: str, name: str, avatar: Optional[str] = None) -> UserProfile:
        profile = UserProfile(id=user_id, name=name, avatar=avatar)
        self.users[user_id] = profile
        return profile

    def get_user_profile(self, user_id: str) -> Optional[UserProfile]:
        return self.users.get(user_id)

    def get_all_posts(self) -> List[Post]:
        return sorted(self.posts.values(), key=lambda post: post.date, reverse=True)

    def get_post(self, post_id: str) -> Optional[Post]:
        return self.posts.get(post_id)

    def create_post(self, post: Post) -> Post:
        post = post.model_copy(update={"id": f"post{self._next_id}"})
        self._next_id += 1
        self.posts[post.id] = post
        return post

    def delete_post(self, post_id: str):
        del self.posts[post_id]

    def update_likes(self, post_id: str, likes: List[Like]):
        self.posts[post_id] = self.posts[post_id].model_copy(update={"likes": list(likes)})

    def update_comments(self, post_id: str, comments: List[Comment]):
        self.posts[post_id] = self.posts[post_id].model_copy(update={"comments": list(comments)})


@pytest.fixture
def db():
    db = InMemoryFirestoreDB()
    db.add_user("alice", "Alice", "https://example.com/alice.png")
    db.add_user("bob", "Bob", "https://example.com/bob.png")
    return db


@pytest.fixture
def service(db):
    return PostService(db)


@pytest.fixture
def make_post(db):
    """Insert a post directly into the store"""

    def _make_post(user: str = "alice", text: str = "hello", date: datetime = None, **fields) -> Post:
        profile = db.get_user_profile(user)
        post = Post(
            user=user,
            text=text,
            name=profile.name,
            avatar=profile.avatar,
            date=date or datetime.now(timezone.utc),
            **fields,
        )
        return db.create_post(post)

    return _make_post


@pytest.fixture
def current_user():
    """Mutable caller identity used by the client fixture"""
    return User(user_id="alice", email="alice@example.com")


@pytest.fixture
def client(service, current_user):
    app.dependency_overrides[get_post_service] = lambda: service
    app.dependency_overrides[get_current_user] = lambda: current_user
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()
