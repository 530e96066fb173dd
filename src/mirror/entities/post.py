"""Entity: Post."""

from typing import Any

from pydantic import Field

from ._base import MirroredDocument
from .comment import Comment


class Post(MirroredDocument):
    """A post written by a user."""

    userId: Any = Field(default=None, description="Author user id")
    title: Any = None
    body: Any = None


class PostWithComments(Post):
    """Read-time projection of a post with its comments. Never persisted."""

    comments: list[Comment] = Field(default_factory=list)

    def to_document(self):
        document = super().to_document()
        document["comments"] = [comment.to_document() for comment in self.comments]
        return document
