from typing import Optional


class PostError(Exception):
    """Base class for errors surfaced to the caller with a status code and message"""

    status_code = 500
    message = "Server Error!"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        if message:
            self.message = message

    def to_content(self) -> dict:
        return {"msg": self.message}


class EmptyTextError(PostError):
    """Text that is empty once markup has been stripped"""

    status_code = 400
    message = "Text is required"

    def to_content(self) -> dict:
        return {"errors": [{"msg": self.message, "param": "text", "location": "body", "value": None}]}


class AlreadyLikedError(PostError):
    status_code = 400
    message = "Post already liked"


class NotLikedError(PostError):
    status_code = 400
    message = "Post has not been liked yet"


class NotAuthorizedError(PostError):
    status_code = 401
    message = "User is not authorized"


class PostNotFoundError(PostError):
    status_code = 404
    message = "Post Not Found"


class CommentNotFoundError(PostError):
    status_code = 404
    message = "Comment does not exists"


class ProfileNotFoundError(LookupError):
    """Raised when the authenticated caller has no profile document"""
