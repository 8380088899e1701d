import logging
import threading
from typing import List, Optional
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from blog.core.exceptions import ConstraintError, UnavailableError
from blog.db.models.post import Post
from blog.db.session import db_lock


class PostStore:
    """Owns the posts table.

    Every call holds the shared lock for its whole transaction, so a post is
    either fully visible with both image paths or not visible at all.
    """

    def __init__(self, db: Session, lock: threading.Lock = db_lock):
        self.db = db
        self.lock = lock

    def insert(
        self,
        content: str,
        user: str,
        avatar_path: Optional[str] = None,
        thumbnail_path: Optional[str] = None,
    ) -> Post:
        with self.lock:
            try:
                new_post = Post(
                    content=content,
                    user=user,
                    avatar_url=avatar_path,
                    thumbnail_url=thumbnail_path,
                )
                self.db.add(new_post)
                self.db.commit()
                # Pull the server assigned id and created_at
                self.db.refresh(new_post)
                return new_post
            except IntegrityError as e:
                self.db.rollback()
                logging.error(f"Post rejected by table constraints: {str(e)}")
                raise ConstraintError(f"Post violates table constraints: {e.orig}") from e
            except SQLAlchemyError as e:
                self.db.rollback()
                logging.error(f"Database error: {str(e)}")
                raise UnavailableError(f"Database unavailable: {e}") from e

    def list_all(self) -> List[Post]:
        with self.lock:
            try:
                return (
                    self.db.query(Post)
                    .order_by(Post.created_at.desc(), Post.id.desc())
                    .all()
                )
            except SQLAlchemyError as e:
                self.db.rollback()
                logging.error(f"Database error: {str(e)}")
                raise UnavailableError(f"Database unavailable: {e}", detail="Failed to load posts") from e
