"""
Feed service for DevSync.

Post lifecycle, like-set membership and comment append/remove. Every read
returns posts with the owner and each comment author joined in as profile
summaries.
"""

import logging
from typing import Any, Dict, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from devsync.database import get_session
from devsync.errors import conflict, handles_store_errors, not_found, unauthorized
from devsync.models import Comment, Post, PostLike, parse_id
from devsync.services.authorization import authorize

logger = logging.getLogger(__name__)

POST_NOT_FOUND = "Post not found"
COMMENT_NOT_FOUND = "Comment not found"


def _joined_posts(db):
    """Post query with owner, likes and comment authors eagerly loaded."""
    return db.query(Post).options(
        selectinload(Post.owner),
        selectinload(Post.likes),
        selectinload(Post.comments).selectinload(Comment.author),
    )


def _load_post(db, post_id: Any, joined: bool = False) -> Optional[Post]:
    key = parse_id(post_id)
    if key is None:
        return None
    query = _joined_posts(db) if joined else db.query(Post)
    return query.filter(Post.id == key).first()


@handles_store_errors
def create_post(owner_id: int, content: str, image: Optional[str] = None) -> Dict[str, Any]:
    """
    Publish a post owned by owner_id.

    Content is expected to be validated by the caller.

    Returns:
        {"post": dict} with the owner joined and empty likes/comments
    """
    db = get_session()
    try:
        post = Post(owner_id=owner_id, content=content, image=image or None)
        db.add(post)
        db.commit()

        post = _load_post(db, post.id, joined=True)
        logger.info("Account %s created post %s", owner_id, post.id)
        return {"post": post.to_dict()}
    finally:
        db.close()


@handles_store_errors
def list_feed() -> Dict[str, Any]:
    """
    Every post, newest first, fully joined.

    Returns:
        {"posts": [dict], "count": int}
    """
    db = get_session()
    try:
        posts = _joined_posts(db).order_by(Post.created_at.desc(), Post.id.desc()).all()
        return {"posts": [p.to_dict() for p in posts], "count": len(posts)}
    finally:
        db.close()


@handles_store_errors
def get_post(post_id: Any) -> Dict[str, Any]:
    """
    One post, fully joined.

    Returns:
        {"post": dict}, or not_found for unknown or malformed ids
    """
    db = get_session()
    try:
        post = _load_post(db, post_id, joined=True)
        if not post:
            return not_found(POST_NOT_FOUND)
        return {"post": post.to_dict()}
    finally:
        db.close()


@handles_store_errors
def delete_post(acting_id: int, post_id: Any) -> Dict[str, Any]:
    """
    Permanently remove a post together with its likes and comments.

    Only the post's owner may delete it.
    """
    db = get_session()
    try:
        post = _load_post(db, post_id)
        if not post:
            return not_found(POST_NOT_FOUND)

        if not authorize(acting_id, post.owner_id):
            logger.warning("Account %s denied deleting post %s", acting_id, post.id)
            return unauthorized()

        removed_id = post.id
        db.delete(post)
        db.commit()

        logger.info("Account %s deleted post %s", acting_id, removed_id)
        return {"message": "Post removed", "id": removed_id}
    finally:
        db.close()


@handles_store_errors
def like_post(acting_id: int, post_id: Any) -> Dict[str, Any]:
    """
    Add the acting account to a post's like-set.

    Returns:
        {"likes": [account ids]}, or conflict if already liked
    """
    db = get_session()
    try:
        post = _load_post(db, post_id)
        if not post:
            return not_found(POST_NOT_FOUND)

        if acting_id in post.like_ids:
            return conflict("Post already liked")

        db.add(PostLike(post_id=post.id, account_id=acting_id))
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            return conflict("Post already liked")

        return {"likes": post.like_ids}
    finally:
        db.close()


@handles_store_errors
def unlike_post(acting_id: int, post_id: Any) -> Dict[str, Any]:
    """
    Remove the acting account from a post's like-set.

    Returns:
        {"likes": [account ids]}, or conflict if not yet liked
    """
    db = get_session()
    try:
        post = _load_post(db, post_id)
        if not post:
            return not_found(POST_NOT_FOUND)

        like = db.query(PostLike).filter(
            PostLike.post_id == post.id,
            PostLike.account_id == acting_id,
        ).first()
        if not like:
            return conflict("Post has not yet been liked")

        db.delete(like)
        db.commit()

        return {"likes": post.like_ids}
    finally:
        db.close()


@handles_store_errors
def add_comment(acting_id: int, post_id: Any, text: str) -> Dict[str, Any]:
    """
    Prepend a comment by the acting account to a post.

    Returns:
        {"comments": [dict]} most recent first, authors joined
    """
    db = get_session()
    try:
        post = _load_post(db, post_id)
        if not post:
            return not_found(POST_NOT_FOUND)

        db.add(Comment(post_id=post.id, author_id=acting_id, text=text))
        db.commit()

        return {"comments": post.comments_to_list()}
    finally:
        db.close()


@handles_store_errors
def delete_comment(acting_id: int, post_id: Any, comment_id: Any) -> Dict[str, Any]:
    """
    Remove one comment from a post.

    Only the comment's author may delete it; owning the post grants nothing.
    The remaining comments keep their order.

    Returns:
        {"comments": [dict]} after removal
    """
    db = get_session()
    try:
        post = _load_post(db, post_id)
        if not post:
            return not_found(POST_NOT_FOUND)

        comment_key = parse_id(comment_id)
        comment = None
        if comment_key is not None:
            comment = db.query(Comment).filter(
                Comment.id == comment_key,
                Comment.post_id == post.id,
            ).first()
        if not comment:
            return not_found(COMMENT_NOT_FOUND)

        if not authorize(acting_id, comment.author_id):
            logger.warning(
                "Account %s denied deleting comment %s on post %s",
                acting_id, comment.id, post.id,
            )
            return unauthorized()

        db.delete(comment)
        db.commit()

        logger.info("Account %s deleted comment %s on post %s", acting_id, comment_key, post.id)
        return {"comments": post.comments_to_list()}
    finally:
        db.close()
