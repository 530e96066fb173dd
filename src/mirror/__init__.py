"""Placeholder mirror service.

Mirrors the JSONPlaceholder users, posts and comments into a document store
and serves nested read, create and delete operations over that data.
"""

__version__ = "0.1.0"
