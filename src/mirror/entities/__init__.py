"""Entity package: mirrored placeholder records and their read-time aggregates."""

from ._base import DomainId, MirroredDocument
from .comment import Comment
from .post import Post, PostWithComments
from .user import User, UserWithPosts

__all__ = [
    "Comment",
    "DomainId",
    "MirroredDocument",
    "Post",
    "PostWithComments",
    "User",
    "UserWithPosts",
]
