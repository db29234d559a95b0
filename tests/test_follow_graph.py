import uuid

import pytest

from app.core.errors import AlreadyExists, Conflict, InvalidTarget, NotFound, SelfFollowRejected
from app.models import Follow, Role
from app.services import follow_graph


def test_follow_creates_edge(db_session, member, trainer):
    edge = follow_graph.follow(db_session, member.id, trainer.id)

    assert edge.follower_id == member.id
    assert edge.following_id == trainer.id
    assert follow_graph.is_following(db_session, member.id, trainer.id)


def test_follow_twice_is_conflict(db_session, member, trainer):
    follow_graph.follow(db_session, member.id, trainer.id)

    with pytest.raises(AlreadyExists) as exc:
        follow_graph.follow(db_session, member.id, trainer.id)
    assert isinstance(exc.value, Conflict)
    assert exc.value.status_code == 400
    assert db_session.query(Follow).count() == 1


def test_follow_unfollow_then_not_following(db_session, member, trainer):
    follow_graph.follow(db_session, member.id, trainer.id)
    follow_graph.unfollow(db_session, member.id, trainer.id)

    assert follow_graph.is_following(db_session, member.id, trainer.id) is False


@pytest.mark.parametrize("role", [Role.USER, Role.TRAINER])
def test_self_follow_rejected_for_any_role(db_session, make_account, role):
    account = make_account(role)

    with pytest.raises(SelfFollowRejected) as exc:
        follow_graph.follow(db_session, account.id, account.id)
    assert exc.value.status_code == 400


def test_following_a_non_trainer_is_invalid_target(db_session, make_account, member):
    other = make_account(Role.USER)

    with pytest.raises(InvalidTarget) as exc:
        follow_graph.follow(db_session, member.id, other.id)
    assert exc.value.status_code == 400


def test_follow_unknown_account_is_not_found(db_session, member):
    with pytest.raises(NotFound):
        follow_graph.follow(db_session, member.id, uuid.uuid4())


def test_trainer_can_follow_another_trainer(db_session, make_account, trainer):
    other = make_account(Role.TRAINER)

    follow_graph.follow(db_session, trainer.id, other.id)

    assert follow_graph.is_following(db_session, trainer.id, other.id)


def test_unfollow_without_edge_is_not_found(db_session, member, trainer):
    with pytest.raises(NotFound):
        follow_graph.unfollow(db_session, member.id, trainer.id)


def test_is_following_never_fails(db_session, member):
    assert follow_graph.is_following(db_session, member.id, uuid.uuid4()) is False


def test_concurrent_duplicate_surfaces_as_already_exists(db_session, member, trainer, monkeypatch):
    follow_graph.follow(db_session, member.id, trainer.id)
    # pretend the pre-check ran before the other request committed
    monkeypatch.setattr(follow_graph, "is_following", lambda *a, **kw: False)

    with pytest.raises(AlreadyExists):
        follow_graph.follow(db_session, member.id, trainer.id)
    assert db_session.query(Follow).count() == 1


def test_list_following_newest_first(db_session, make_account, member):
    first = make_account(Role.TRAINER)
    second = make_account(Role.TRAINER)
    follow_graph.follow(db_session, member.id, first.id)
    follow_graph.follow(db_session, member.id, second.id)

    trainers = follow_graph.list_following(db_session, member.id)

    assert [t.id for t in trainers] == [second.id, first.id]


def test_list_followers_newest_first(db_session, make_account, trainer):
    a = make_account(Role.USER)
    b = make_account(Role.USER)
    follow_graph.follow(db_session, a.id, trainer.id)
    follow_graph.follow(db_session, b.id, trainer.id)

    followers = follow_graph.list_followers(db_session, trainer.id)

    assert [f.id for f in followers] == [b.id, a.id]


def test_list_followers_of_non_trainer_is_not_found(db_session, member):
    with pytest.raises(NotFound):
        follow_graph.list_followers(db_session, member.id)
    with pytest.raises(NotFound):
        follow_graph.list_followers(db_session, uuid.uuid4())
