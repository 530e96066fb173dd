"""Entity: User."""

from typing import Any

from pydantic import Field

from ._base import MirroredDocument
from .post import PostWithComments


class User(MirroredDocument):
    """A user of the placeholder API.

    ``id`` is the domain key used for all addressing; it is distinct from the
    storage engine's own identity, which is never exposed. The remaining
    fields are named for readability only. Their values, nested ``address``
    and ``company`` objects included, are kept exactly as received.
    """

    name: Any = None
    username: Any = None
    email: Any = None
    address: Any = None
    phone: Any = None
    website: Any = None
    company: Any = None


class UserWithPosts(User):
    """Read-time projection of a user with posts and their comments."""

    posts: list[PostWithComments] = Field(default_factory=list)

    def to_document(self):
        document = super().to_document()
        document["posts"] = [post.to_document() for post in self.posts]
        return document
