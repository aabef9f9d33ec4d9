"""
Database models for accounts, the follow graph, posts and likes.
"""
from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    func,
    select,
)
from sqlalchemy.orm import relationship

from minisocial.database import Base


def utcnow():
    """Naive UTC now; SQLite drops tzinfo so everything is stored naive."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def isoformat(value):
    if value is None:
        return None
    return value.isoformat(timespec="milliseconds") + "Z"


class User(Base):
    """
    Account record. Username and email are unique regardless of case.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    username = Column(String(64), nullable=False)
    email = Column(String(255), nullable=True)
    password_hash = Column(String(128), nullable=True)
    reset_token = Column(String(128), nullable=True, index=True)
    reset_token_expiry = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    follows = relationship(
        "Follow",
        order_by="Follow.id",
        lazy="selectin",
        cascade="all, delete-orphan",
    )

    @property
    def following(self):
        return [follow.followed_username for follow in self.follows]

    def to_public_dict(self):
        # Never include password_hash or the reset token fields here.
        return {
            "username": self.username,
            "following": self.following,
        }

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}')>"


Index("ix_users_username_lower", func.lower(User.__table__.c.username), unique=True)
Index("ix_users_email_lower", func.lower(User.__table__.c.email), unique=True)


class Follow(Base):
    """One entry of a user's following set."""

    __tablename__ = "follows"

    id = Column(Integer, primary_key=True)
    follower_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    followed_username = Column(String(64), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)


# Usernames in a set are compared ignoring case, like account names.
Index(
    "uq_follows_pair_lower",
    Follow.__table__.c.follower_id,
    func.lower(Follow.__table__.c.followed_username),
    unique=True,
)


class Post(Base):
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True)
    username = Column(String(64), nullable=False, index=True)
    text = Column(Text, nullable=False)
    image = Column(String(2048), nullable=True)
    timestamp = Column(DateTime, nullable=False, default=utcnow, index=True)

    like_rows = relationship(
        "PostLike",
        order_by="PostLike.id",
        lazy="selectin",
        cascade="all, delete-orphan",
    )

    @property
    def likes(self):
        return [like.username for like in self.like_rows]

    def to_dict(self):
        return {
            "id": self.id,
            "username": self.username,
            "text": self.text,
            "image": self.image,
            "timestamp": isoformat(self.timestamp),
            "likes": self.likes,
        }

    def __repr__(self):
        return f"<Post(id={self.id}, username='{self.username}')>"


class PostLike(Base):
    """One entry of a post's likes set."""

    __tablename__ = "post_likes"

    id = Column(Integer, primary_key=True)
    post_id = Column(Integer, ForeignKey("posts.id"), nullable=False, index=True)
    username = Column(String(64), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)


Index(
    "uq_post_likes_pair_lower",
    PostLike.__table__.c.post_id,
    func.lower(PostLike.__table__.c.username),
    unique=True,
)


def canonical_username(session, username):
    """Stored spelling of ``username`` when such an account exists, else ``username``."""
    stored = session.execute(
        select(User.username).where(func.lower(User.username) == username.lower())
    ).scalar_one_or_none()
    return stored or username
