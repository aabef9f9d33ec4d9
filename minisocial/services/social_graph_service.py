"""
Follow graph: user lookup and the follow/unfollow toggle.
"""
import logging
from typing import Optional

from sqlalchemy import func, select

from minisocial.database import Store
from minisocial.errors import NotFoundError, ValidationError
from minisocial.models import Follow, User
from minisocial.utils.validators import normalize_text

logger = logging.getLogger(__name__)


class SocialGraphService:

    def __init__(self, store: Store):
        self.store = store

    def get_user(self, username) -> dict:
        """Public profile (username + following) or NotFoundError."""
        username = normalize_text(username)
        if not username:
            raise NotFoundError("User not found.")
        with self.store.session() as session:
            user = self._find_user(session, username)
            if not user:
                raise NotFoundError("User not found.")
            return user.to_public_dict()

    def toggle_follow(self, follower, target) -> dict:
        """
        Follow ``target`` if ``follower`` does not follow it yet, otherwise
        unfollow. Returns the follower's public record after the change so
        callers can redraw from it.
        """
        follower = normalize_text(follower)
        target = normalize_text(target)
        if not follower or not target:
            raise ValidationError("Required fields missing.")

        with self.store.session() as session:
            follower_user = self._find_user(session, follower)
            if not follower_user:
                raise NotFoundError("Follower not found.")
            follower_id = follower_user.id
            target_user = self._find_user(session, target)
            # Self-follow is not rejected.
            if target_user:
                target = target_user.username

        now_following = self.store.toggle_membership(
            Follow,
            casefold=("followed_username",),
            follower_id=follower_id,
            followed_username=target,
        )
        logger.info(
            f"'{follower}' {'followed' if now_following else 'unfollowed'} '{target}'"
        )

        with self.store.session() as session:
            return session.get(User, follower_id).to_public_dict()

    @staticmethod
    def _find_user(session, username: str) -> Optional[User]:
        return session.execute(
            select(User).where(func.lower(User.username) == username.lower())
        ).scalar_one_or_none()
