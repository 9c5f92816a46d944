"""
Blog API — Post Request/Response Schemas
==========================================

What:  Pydantic models for the /posts routes.

Request bodies deliberately have no `user_id` field: unknown keys are
ignored, so a client cannot choose the owner of a post it creates.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class PostWrite(BaseModel):
    """Body of POST /posts and PATCH /posts/{id}."""
    title: str = Field(description="Post title")
    content: str = Field(description="Post body")


class PostResponse(BaseModel):
    """A stored post, including the metadata the store generates."""
    id: int
    user_id: int
    title: str
    content: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class PostMutationResponse(BaseModel):
    message: str
    blog: PostResponse


class MessageResponse(BaseModel):
    message: str
