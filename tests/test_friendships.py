"""Friendship graph tests."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from sandycal.core.errors import ConflictError, NotFoundError, StorageError, ValidationError
from sandycal.models import Friendship
from sandycal.services.friendship_service import (
    add_friend,
    are_friends,
    list_friend_ids,
    list_friends,
    remove_friend,
    search_users_by_phone,
)


def _edge_count(db):
    return db.execute(select(func.count()).select_from(Friendship)).scalar_one()


def test_add_friend_is_symmetric(db, make_user):
    a, b = make_user("A"), make_user("B")
    add_friend(db, a.id, b.id)

    assert are_friends(db, a.id, b.id)
    assert are_friends(db, b.id, a.id)
    assert _edge_count(db) == 2
    assert list_friend_ids(db, a.id) == [b.id]
    assert list_friend_ids(db, b.id) == [a.id]


def test_add_friend_twice_conflicts(db, make_user):
    a, b = make_user(), make_user()
    add_friend(db, a.id, b.id)
    with pytest.raises(ConflictError):
        add_friend(db, a.id, b.id)
    with pytest.raises(ConflictError):
        add_friend(db, b.id, a.id)
    assert _edge_count(db) == 2


def test_cannot_befriend_self(db, make_user):
    a = make_user()
    with pytest.raises(ValidationError):
        add_friend(db, a.id, a.id)
    with pytest.raises(ValidationError):
        remove_friend(db, a.id, a.id)
    assert are_friends(db, a.id, a.id) is False
    assert _edge_count(db) == 0


def test_add_unknown_user_is_not_found(db, make_user):
    a = make_user()
    with pytest.raises(NotFoundError):
        add_friend(db, a.id, a.id + 1000)
    assert _edge_count(db) == 0


def test_missing_ids_are_rejected(db, make_user):
    a = make_user()
    with pytest.raises(ValidationError):
        add_friend(db, None, a.id)
    with pytest.raises(ValidationError):
        add_friend(db, a.id, None)


def test_constraint_violation_rolls_back_both_rows(db, make_user):
    """If the reverse row already exists the insert fails as a whole."""
    a, b = make_user(), make_user()
    db.add(Friendship(user_id=b.id, friend_id=a.id))
    db.commit()

    with pytest.raises(ConflictError):
        add_friend(db, a.id, b.id)

    assert not are_friends(db, a.id, b.id)
    assert _edge_count(db) == 1


def test_remove_friend_removes_both_rows(db, make_user):
    a, b = make_user(), make_user()
    add_friend(db, a.id, b.id)
    remove_friend(db, b.id, a.id)

    assert not are_friends(db, a.id, b.id)
    assert not are_friends(db, b.id, a.id)
    assert _edge_count(db) == 0


def test_remove_missing_friendship_is_noop(db, make_user):
    a, b, c = make_user(), make_user(), make_user()
    add_friend(db, a.id, b.id)

    remove_friend(db, a.id, c.id)

    assert _edge_count(db) == 2
    assert are_friends(db, a.id, b.id)


def test_list_friends_newest_first(db, make_user):
    me = make_user("Me")
    first, second, third = make_user("First"), make_user("Second"), make_user("Third")
    for friend in (first, second, third):
        add_friend(db, me.id, friend.id)

    links = list_friends(db, me.id)
    assert [link.friend.name for link in links] == ["Third", "Second", "First"]
    assert all(link.created_at is not None for link in links)
    assert list_friends(db, first.id)[0].friend_id == me.id


def test_search_excludes_self_friends_and_unverified(db, make_user):
    me = make_user(phone="+15550100001")
    friend = make_user(phone="+15550100002")
    stranger = make_user(phone="+15550100003")
    make_user(phone="+15550100004", verified=False)
    make_user(phone="+15559999999")
    add_friend(db, me.id, friend.id)

    results = search_users_by_phone(db, me.id, "555010")

    assert [u.id for u in results] == [stranger.id]


def test_search_is_limited_and_ordered(db, make_user):
    me = make_user(phone="+15550200000")
    others = [make_user(phone=f"+1555030{i:04d}") for i in range(12)]

    results = search_users_by_phone(db, me.id, "5550300")

    assert len(results) == 10
    assert [u.id for u in results] == [u.id for u in others[:10]]
    assert [u.id for u in search_users_by_phone(db, me.id, "5550300")] == [u.id for u in results]


def test_search_treats_wildcards_literally(db, make_user):
    me = make_user()
    make_user(phone="+15550400001")
    assert search_users_by_phone(db, me.id, "%") == []
    assert search_users_by_phone(db, me.id, "_") == []
    assert search_users_by_phone(db, me.id, "   ") == []


def test_are_friends_rejects_missing_ids(db, make_user):
    a = make_user()
    with pytest.raises(ValidationError):
        are_friends(db, None, a.id)
    with pytest.raises(ValidationError):
        are_friends(db, a.id, 0)


def _fail(*args, **kwargs):
    raise OperationalError("SELECT", {}, Exception("disk I/O error"))


def test_read_failure_is_storage_error(db, make_user, monkeypatch):
    a, b = make_user(), make_user()
    monkeypatch.setattr(db, "execute", _fail)

    with pytest.raises(StorageError):
        list_friend_ids(db, a.id)
    with pytest.raises(StorageError):
        list_friends(db, a.id)
    with pytest.raises(StorageError):
        are_friends(db, a.id, b.id)
    with pytest.raises(StorageError):
        search_users_by_phone(db, a.id, "555")


def test_failed_add_commit_writes_nothing(db, make_user, monkeypatch):
    a, b = make_user(), make_user()
    monkeypatch.setattr(db, "commit", _fail)

    with pytest.raises(StorageError):
        add_friend(db, a.id, b.id)

    assert _edge_count(db) == 0


def test_failed_remove_commit_keeps_both_rows(db, make_user, monkeypatch):
    a, b = make_user(), make_user()
    add_friend(db, a.id, b.id)
    monkeypatch.setattr(db, "commit", _fail)

    with pytest.raises(StorageError):
        remove_friend(db, a.id, b.id)

    assert _edge_count(db) == 2
    assert are_friends(db, a.id, b.id)
    assert are_friends(db, b.id, a.id)
