from datetime import datetime, timedelta

import pytest

from minisocial.errors import NotFoundError, ValidationError
from minisocial.models import Post


def _add_posts(services, rows):
    base = datetime(2024, 1, 1, 12, 0, 0)
    with services.store.session() as session:
        for username, text, minutes in rows:
            session.add(Post(username=username, text=text, timestamp=base + timedelta(minutes=minutes)))


class TestCreatePost:
    def test_create_post(self, services):
        post = services.feed.create_post("alice", "hello", "https://example.com/a.png")

        assert post["id"] > 0
        assert post["username"] == "alice"
        assert post["text"] == "hello"
        assert post["image"] == "https://example.com/a.png"
        assert post["likes"] == []
        assert post["timestamp"].endswith("Z")

    def test_empty_image_is_stored_as_null(self, services):
        assert services.feed.create_post("alice", "hello", "")["image"] is None

    @pytest.mark.parametrize(
        "username, text, image",
        [(None, "hello", None), ("alice", "", None), ("alice", "   ", None), ("alice", "hi", 5)],
    )
    def test_invalid_post(self, services, username, text, image):
        with pytest.raises(ValidationError):
            services.feed.create_post(username, text, image)

    def test_author_is_stored_under_registered_spelling(self, services, register):
        register("alice")

        post = services.feed.create_post("ALICE", "hello")

        assert post["username"] == "alice"
        assert [p["id"] for p in services.feed.list_by_user("alice")] == [post["id"]]


class TestListing:
    def test_global_is_newest_first(self, services):
        _add_posts(services, [("alice", "b", 5), ("bob", "a", 1), ("carol", "c", 9), ("alice", "d", 3)])

        texts = [post["text"] for post in services.feed.list_global()]

        assert texts == ["c", "b", "d", "a"]

    def test_global_timestamps_strictly_descending(self, services):
        _add_posts(services, [(f"user{i}", str(i), (i * 7) % 11) for i in range(11)])

        stamps = [post["timestamp"] for post in services.feed.list_global()]

        assert stamps == sorted(stamps, reverse=True)
        assert len(set(stamps)) == len(stamps)

    def test_by_user(self, services):
        _add_posts(services, [("alice", "a1", 1), ("bob", "b1", 2), ("alice", "a2", 3)])

        texts = [post["text"] for post in services.feed.list_by_user("Alice")]

        assert texts == ["a2", "a1"]

    def test_by_unknown_user_is_empty(self, services):
        assert services.feed.list_by_user("nobody") == []

    def test_empty_store(self, services):
        assert services.feed.list_global() == []


class TestFollowedFeed:
    def test_includes_followed_and_self_excludes_others(self, services, register):
        for name in ("alice", "bob", "carol"):
            register(name)
        services.social_graph.toggle_follow("alice", "bob")
        _add_posts(services, [("alice", "mine", 1), ("bob", "bobs", 2), ("carol", "carols", 3)])

        texts = [post["text"] for post in services.feed.list_followed("alice")]

        assert texts == ["bobs", "mine"]

    def test_matches_filtered_global_feed(self, services, register):
        for name in ("alice", "bob", "carol", "dave"):
            register(name)
        services.social_graph.toggle_follow("alice", "bob")
        services.social_graph.toggle_follow("alice", "dave")
        authors = ("alice", "bob", "carol", "dave")
        _add_posts(services, [
            (name, f"{name}{i}", i * 4 + j)
            for j, name in enumerate(authors)
            for i in range(3)
        ])
        following = {"bob", "dave", "alice"}

        expected = [p for p in services.feed.list_global() if p["username"] in following]

        assert services.feed.list_followed("alice") == expected

    def test_followed_authors_match_ignoring_case(self, services, register):
        register("alice")
        services.social_graph.toggle_follow("alice", "carol")
        register("Carol")
        _add_posts(services, [("Carol", "from carol", 1), ("ALICE", "mine", 2), ("dave", "not followed", 3)])

        texts = [post["text"] for post in services.feed.list_followed("alice")]

        assert texts == ["mine", "from carol"]

    def test_unknown_user(self, services):
        with pytest.raises(NotFoundError):
            services.feed.list_followed("nobody")
