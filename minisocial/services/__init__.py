"""
Service layer exports.
"""
from dataclasses import dataclass

from flask import current_app

from minisocial.database import Store

from .auth_service import AuthService
from .engagement_service import EngagementService
from .feed_service import FeedService
from .social_graph_service import SocialGraphService

EXTENSION_KEY = "minisocial"


@dataclass
class Services:
    store: Store
    auth: AuthService
    social_graph: SocialGraphService
    engagement: EngagementService
    feed: FeedService


def build_services(store: Store, mail_client, config) -> Services:
    return Services(
        store=store,
        auth=AuthService(store, mail_client, config),
        social_graph=SocialGraphService(store),
        engagement=EngagementService(store),
        feed=FeedService(store),
    )


def get_services() -> Services:
    """Services bound to the current Flask app."""
    return current_app.extensions[EXTENSION_KEY]


__all__ = [
    "AuthService",
    "EngagementService",
    "FeedService",
    "SocialGraphService",
    "Services",
    "build_services",
    "get_services",
]
