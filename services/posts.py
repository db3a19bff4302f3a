import html
import logging
import uuid
from datetime import datetime, timezone
from typing import List

import bleach

from models.post import Post, Like, Comment
from models.user import UserProfile
from services.errors import (
    AlreadyLikedError,
    CommentNotFoundError,
    EmptyTextError,
    NotAuthorizedError,
    NotLikedError,
    PostNotFoundError,
    ProfileNotFoundError,
)
from services.firestore import FirestoreDB

logger = logging.getLogger(__name__)


def clean_text(text: str) -> str:
    """
    Strip markup from user text. Characters such as & and < are kept as typed
    rather than stored as HTML entities.
    """
    cleaned = html.unescape(bleach.clean(text, tags=set(), strip=True, strip_comments=True))
    if not cleaned:
        raise EmptyTextError()
    return cleaned


class PostService:
    """
    Post and engagement rules on top of the Firestore collections.

    Every mutation is a read-modify-write of one post document. Concurrent
    likes or comments on the same post are not serialized and can overwrite
    each other.
    """

    def __init__(self, db: FirestoreDB, delete_comment_by_id: bool = False):
        self.db = db
        self.delete_comment_by_id = delete_comment_by_id

    def _get_profile(self, user_id: str) -> UserProfile:
        profile = self.db.get_user_profile(user_id)
        if profile is None:
            raise ProfileNotFoundError(f"No profile for user {user_id}")
        return profile

    def create_post(self, user_id: str, text: str) -> Post:
        """Create a post owned by the caller with a snapshot of their name and avatar"""
        text = clean_text(text)
        profile = self._get_profile(user_id)
        post = Post(
            user=user_id,
            text=text,
            name=profile.name,
            avatar=profile.avatar,
            likes=[],
            comments=[],
            date=datetime.now(timezone.utc),
        )
        post = self.db.create_post(post)
        logger.info("User %s created post %s", user_id, post.id)
        return post

    def get_posts(self) -> List[Post]:
        """All posts, most recent first"""
        return self.db.get_all_posts()

    def get_post(self, post_id: str) -> Post:
        post = self.db.get_post(post_id)
        if post is None:
            raise PostNotFoundError()
        return post

    def delete_post(self, user_id: str, post_id: str):
        post = self.get_post(post_id)
        if post.user != user_id:
            logger.warning("User %s tried to delete post %s owned by %s", user_id, post_id, post.user)
            raise NotAuthorizedError()

        self.db.delete_post(post_id)
        logger.info("User %s deleted post %s", user_id, post_id)

    def like_post(self, user_id: str, post_id: str) -> List[Like]:
        """Add the caller's like at the front of the like list"""
        post = self.get_post(post_id)
        if any(like.user == user_id for like in post.likes):
            raise AlreadyLikedError()

        likes = [Like(user=user_id)] + post.likes
        self.db.update_likes(post_id, likes)
        return likes

    def unlike_post(self, user_id: str, post_id: str) -> List[Like]:
        """Remove the first like of the caller from the like list"""
        post = self.get_post(post_id)
        owners = [like.user for like in post.likes]
        if user_id not in owners:
            raise NotLikedError()

        likes = list(post.likes)
        del likes[owners.index(user_id)]
        self.db.update_likes(post_id, likes)
        return likes

    def add_comment(self, user_id: str, post_id: str, text: str) -> List[Comment]:
        """Add a comment at the front of the comment list"""
        text = clean_text(text)
        post = self.get_post(post_id)
        profile = self._get_profile(user_id)

        comment = Comment(
            id=uuid.uuid4().hex,
            user=user_id,
            text=text,
            name=profile.name,
            avatar=profile.avatar,
            date=datetime.now(timezone.utc),
        )
        comments = [comment] + post.comments
        self.db.update_comments(post_id, comments)
        return comments

    def delete_comment(self, user_id: str, post_id: str, comment_id: str) -> List[Comment]:
        """
        Delete a comment authored by the caller.

        Unless ``delete_comment_by_id`` is set, the removed entry is the first
        comment written by the caller, which is not necessarily the comment
        identified by ``comment_id``.
        """
        post = self.get_post(post_id)

        comment = next((c for c in post.comments if c.id == comment_id), None)
        if comment is None:
            raise CommentNotFoundError()
        if comment.user != user_id:
            logger.warning("User %s tried to delete comment %s on post %s", user_id, comment_id, post_id)
            raise NotAuthorizedError()

        if self.delete_comment_by_id:
            remove_index = [c.id for c in post.comments].index(comment_id)
        else:
            remove_index = [c.user for c in post.comments].index(user_id)

        comments = list(post.comments)
        del comments[remove_index]
        self.db.update_comments(post_id, comments)
        return comments
