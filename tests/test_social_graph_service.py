import pytest

from minisocial.errors import NotFoundError, ValidationError
from minisocial.models import Follow


def test_toggle_follow_adds_then_removes(services, register):
    register("alice")
    register("bobby")

    followed = services.social_graph.toggle_follow("alice", "bobby")
    unfollowed = services.social_graph.toggle_follow("alice", "bobby")

    assert followed == {"username": "alice", "following": ["bobby"]}
    assert unfollowed == {"username": "alice", "following": []}


def test_toggle_twice_restores_original_following(services, register):
    for name in ("alice", "bobby", "carol", "dave1"):
        register(name)
    services.social_graph.toggle_follow("alice", "bobby")
    services.social_graph.toggle_follow("alice", "carol")
    original = services.social_graph.get_user("alice")["following"]

    services.social_graph.toggle_follow("alice", "dave1")
    services.social_graph.toggle_follow("alice", "dave1")

    assert services.social_graph.get_user("alice")["following"] == original


def test_following_keeps_insertion_order(services, register):
    for name in ("alice", "bobby", "carol"):
        register(name)

    services.social_graph.toggle_follow("alice", "carol")
    result = services.social_graph.toggle_follow("alice", "bobby")

    assert result["following"] == ["carol", "bobby"]


def test_target_is_canonicalised_to_stored_username(services, register):
    register("alice")
    register("Bobby")

    result = services.social_graph.toggle_follow("ALICE", "bobby")

    assert result == {"username": "alice", "following": ["Bobby"]}


def test_target_need_not_exist(services, register):
    register("alice")

    assert services.social_graph.toggle_follow("alice", "ghost")["following"] == ["ghost"]


def test_self_follow_is_allowed(services, register):
    register("alice")

    assert services.social_graph.toggle_follow("alice", "alice")["following"] == ["alice"]


def test_unknown_follower(services):
    with pytest.raises(NotFoundError):
        services.social_graph.toggle_follow("nobody", "alice")


@pytest.mark.parametrize("follower, target", [(None, "bobby"), ("alice", ""), ("alice", 3)])
def test_missing_fields(services, register, follower, target):
    register("alice")

    with pytest.raises(ValidationError):
        services.social_graph.toggle_follow(follower, target)


def test_follow_before_registration_toggles_off_under_any_case(services, register):
    register("alice")
    services.social_graph.toggle_follow("alice", "carol")
    register("Carol")

    result = services.social_graph.toggle_follow("alice", "Carol")

    assert result["following"] == []
    with services.store.session() as session:
        assert session.query(Follow).count() == 0


def test_unregistered_target_matches_ignoring_case(services, register):
    register("alice")
    services.social_graph.toggle_follow("alice", "ghost")

    assert services.social_graph.toggle_follow("alice", "GHOST")["following"] == []


def test_duplicate_rows_never_stored(services, register):
    register("alice")
    services.social_graph.toggle_follow("alice", "bobby")

    with services.store.session() as session:
        assert session.query(Follow).count() == 1


def test_get_user_hides_secrets(services, register):
    register("alice", email="alice@example.com")

    user = services.social_graph.get_user("Alice")

    assert user == {"username": "alice", "following": []}


def test_get_unknown_user(services):
    with pytest.raises(NotFoundError):
        services.social_graph.get_user("nobody")
