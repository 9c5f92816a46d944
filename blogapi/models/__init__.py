"""ORM models. Importing this package registers every table on `Base.metadata`."""

from blogapi.models.user import User
from blogapi.models.post import Post

__all__ = ["User", "Post"]
