"""Entity: Comment."""

from typing import Any

from pydantic import Field

from ._base import MirroredDocument


class Comment(MirroredDocument):
    """A comment left on a post."""

    postId: Any = Field(default=None, description="Owning post id")
    name: Any = None
    email: Any = None
    body: Any = None
