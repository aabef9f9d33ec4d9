"""
Post creation and feed queries. Every list is newest first.
"""
import logging
from typing import List

from sqlalchemy import func, select

from minisocial.database import Store
from minisocial.errors import NotFoundError, ValidationError
from minisocial.models import Post, User, canonical_username
from minisocial.utils.validators import normalize_text

logger = logging.getLogger(__name__)


def _newest_first(statement):
    # id breaks timestamp ties so the order is total
    return statement.order_by(Post.timestamp.desc(), Post.id.desc())


class FeedService:

    def __init__(self, store: Store):
        self.store = store

    def create_post(self, username, text, image=None) -> dict:
        username = normalize_text(username)
        text = normalize_text(text)
        if not username or not text:
            raise ValidationError("Username and text are required.")
        if image is not None and not isinstance(image, str):
            raise ValidationError("Image must be a URL string.")
        image = normalize_text(image)

        with self.store.session() as session:
            username = canonical_username(session, username)
            post = Post(username=username, text=text, image=image)
            session.add(post)
            session.flush()
            logger.info(f"Post {post.id} created by '{username}'")
            return post.to_dict()

    def list_global(self) -> List[dict]:
        with self.store.session() as session:
            posts = session.execute(_newest_first(select(Post))).scalars().all()
            return [post.to_dict() for post in posts]

    def list_by_user(self, username) -> List[dict]:
        username = normalize_text(username)
        if not username:
            return []
        with self.store.session() as session:
            posts = session.execute(
                _newest_first(select(Post).where(func.lower(Post.username) == username.lower()))
            ).scalars().all()
            return [post.to_dict() for post in posts]

    def list_followed(self, username) -> List[dict]:
        """
        Posts by the accounts ``username`` follows plus their own, in the
        same order as the global feed.
        """
        username = normalize_text(username)
        if not username:
            raise NotFoundError("User not found.")
        with self.store.session() as session:
            user = session.execute(
                select(User).where(func.lower(User.username) == username.lower())
            ).scalar_one_or_none()
            if not user:
                raise NotFoundError("User not found.")
            authors = {name.lower() for name in user.following}
            authors.add(user.username.lower())
            posts = session.execute(
                _newest_first(select(Post).where(func.lower(Post.username).in_(authors)))
            ).scalars().all()
            return [post.to_dict() for post in posts]
