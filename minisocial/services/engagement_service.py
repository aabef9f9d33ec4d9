"""
Likes on posts.
"""
import logging

from sqlalchemy import select

from minisocial.database import Store
from minisocial.errors import NotFoundError, ValidationError
from minisocial.models import Post, PostLike, canonical_username
from minisocial.utils.validators import normalize_text, parse_post_id

logger = logging.getLogger(__name__)


class EngagementService:

    def __init__(self, store: Store):
        self.store = store

    def toggle_like(self, post_id, username) -> dict:
        """
        Like the post if ``username`` has not liked it yet, otherwise unlike.
        Returns the post as stored after the change.
        """
        post_id = parse_post_id(post_id)
        username = normalize_text(username)
        if not username:
            raise ValidationError("Username is required.")

        with self.store.session() as session:
            exists = session.execute(
                select(Post.id).where(Post.id == post_id)
            ).scalar_one_or_none()
            username = canonical_username(session, username)
        if exists is None:
            raise NotFoundError("Post not found.")

        liked = self.store.toggle_membership(
            PostLike, casefold=("username",), post_id=post_id, username=username
        )
        logger.info(f"'{username}' {'liked' if liked else 'unliked'} post {post_id}")

        with self.store.session() as session:
            post = session.get(Post, post_id)
            return post.to_dict()
