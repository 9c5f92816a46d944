"""
Blog API — Post Store
=======================

What:  Query wrappers for the `posts` table, one statement per operation.
How:   Methods take the request's AsyncSession, commit their own writes,
       and raise typed exceptions (NotFoundError, StoreError) that the
       global handlers map to responses.
Who:   The /posts route handlers.

Ownership rules:
    create  → owner is the caller, never the request body
    update  → owner is overwritten with the caller, no ownership check
    delete  → only the owner's row is deleted; "missing" and "not yours"
              are indistinguishable to the caller
"""

import logging
from typing import List

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.exceptions import NotFoundError, StoreError
from blogapi.models.post import Post

logger = logging.getLogger(__name__)

DELETE_REFUSED_MESSAGE = "Blog post not found or not authorized to delete"


class PostStore:
    """Stateless CRUD for posts."""

    async def list_for_user(self, db: AsyncSession, user_id: int) -> List[Post]:
        """
        All posts owned by `user_id`, oldest first (ascending id).

        Query plan:
            SELECT * FROM posts WHERE user_id = :uid ORDER BY id
            → idx_posts_user_id
        """
        try:
            result = await db.execute(
                select(Post).where(Post.user_id == user_id).order_by(Post.id)
            )
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing posts for user %s: %s", user_id, str(e))
            raise StoreError(detail=str(e), context={"user_id": user_id})

    async def get(self, db: AsyncSession, post_id: int) -> Post:
        """
        Raises:
            NotFoundError: no post with that id (→ 404)
            StoreError: query execution failed (→ 500)
        """
        try:
            result = await db.execute(select(Post).where(Post.id == post_id))
            post = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching post %s: %s", post_id, str(e))
            raise StoreError(detail=str(e), context={"post_id": post_id})

        if post is None:
            raise NotFoundError(resource_id=post_id)
        return post

    async def create(self, db: AsyncSession, owner_id: int, title: str, content: str) -> Post:
        post = Post(user_id=owner_id, title=title, content=content)
        try:
            db.add(post)
            await db.flush()
            # Load created_at (server default) before the row leaves the session
            await db.refresh(post)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Database error creating post for user %s: %s", owner_id, str(e))
            raise StoreError(detail=str(e), context={"user_id": owner_id})

        logger.info("Post %s created by user %s", post.id, owner_id)
        return post

    async def update(
        self,
        db: AsyncSession,
        post_id: int,
        owner_id: int,
        title: str,
        content: str,
    ) -> Post:
        """
        UPDATE posts SET title, content, user_id = :caller WHERE id = :id RETURNING *

        Whoever patches a post becomes its owner.

        Raises:
            NotFoundError: no row matched the id
            StoreError: statement failed
        """
        stmt = (
            update(Post)
            .where(Post.id == post_id)
            .values(title=title, content=content, user_id=owner_id)
            .returning(Post)
        )
        try:
            result = await db.execute(stmt)
            post = result.scalar_one_or_none()
            if post is None:
                await db.rollback()
            else:
                await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Database error updating post %s: %s", post_id, str(e))
            raise StoreError(detail=str(e), context={"post_id": post_id})

        if post is None:
            raise NotFoundError(resource_id=post_id)
        logger.info("Post %s updated by user %s", post_id, owner_id)
        return post

    async def delete_owned(self, db: AsyncSession, post_id: int, owner_id: int) -> None:
        """
        DELETE FROM posts WHERE id = :id AND user_id = :caller

        Ownership check and delete are one statement, so the row cannot
        change hands between them.

        Raises:
            NotFoundError: nothing deleted; same message whether the post is
                missing or owned by someone else
            StoreError: statement failed
        """
        stmt = (
            delete(Post)
            .where(Post.id == post_id, Post.user_id == owner_id)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await db.execute(stmt)
            deleted = result.rowcount
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Database error deleting post %s: %s", post_id, str(e))
            raise StoreError(detail=str(e), context={"post_id": post_id})

        if not deleted:
            logger.info("Delete of post %s refused for user %s", post_id, owner_id)
            raise NotFoundError(resource_id=post_id, message=DELETE_REFUSED_MESSAGE)


post_store = PostStore()
