from typing import List

from fastapi import APIRouter

from dependencies import Posts, CurrentUser
from models.post import Post, Like, Comment, PostRequest, CommentRequest, MessageResponse

router = APIRouter()


@router.post("")
def create_post(service: Posts, post_data: PostRequest, current_user: CurrentUser) -> Post:
    """Create a new post"""
    return service.create_post(current_user.user_id, post_data.text)


@router.get("")
def get_posts(service: Posts, current_user: CurrentUser) -> List[Post]:
    """Get all posts, most recent first"""
    return service.get_posts()


@router.get("/{post_id}")
def get_post(service: Posts, post_id: str, current_user: CurrentUser) -> Post:
    """Get a post by ID"""
    return service.get_post(post_id)


@router.delete("/{post_id}")
def delete_post(service: Posts, post_id: str, current_user: CurrentUser) -> MessageResponse:
    """Delete a post owned by the current user"""
    service.delete_post(current_user.user_id, post_id)
    return MessageResponse(msg="Post removed")


@router.put("/like/{post_id}")
def like_post(service: Posts, post_id: str, current_user: CurrentUser) -> List[Like]:
    return service.like_post(current_user.user_id, post_id)


@router.put("/unlike/{post_id}")
def unlike_post(service: Posts, post_id: str, current_user: CurrentUser) -> List[Like]:
    return service.unlike_post(current_user.user_id, post_id)


@router.put("/comment/{post_id}")
def add_comment(
        service: Posts,
        post_id: str,
        comment: CommentRequest,
        current_user: CurrentUser
) -> List[Comment]:
    """Add a comment to a post"""
    return service.add_comment(current_user.user_id, post_id, comment.text)


@router.delete("/comment/{post_id}/{comment_id}")
def delete_comment(
        service: Posts,
        post_id: str,
        comment_id: str,
        current_user: CurrentUser
) -> List[Comment]:
    """Delete a comment written by the current user"""
    return service.delete_comment(current_user.user_id, post_id, comment_id)
