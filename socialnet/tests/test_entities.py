from datetime import datetime, timedelta
import pytest
from socialnet.entities import (
    User,
    Friendship,
    Message,
    BlogEntry,
    MessageSent,
    SendFailure,
    canonical_pair,
)

ANN = User('Ann', 'pw', 'Ann', 'A')
BOB = User('Bob', 'pw', 'Bob', 'B')
ZACK = User('Zack', 'pw', 'Zack', 'Z')


@pytest.mark.parametrize('a,b', [(ANN, ZACK), (ZACK, ANN), (BOB, ANN), (ANN, ANN)])
def test_friendship_equal_in_either_order(a, b):
    assert Friendship(a, b) == Friendship(b, a)
    assert hash(Friendship(a, b)) == hash(Friendship(b, a))


def test_friendship_is_stored_smaller_username_first():
    f = Friendship(ZACK, ANN)
    assert f.user1 is ANN
    assert f.user2 is ZACK
    assert f.usernames == ('Ann', 'Zack')


def test_friendship_is_immutable():
    f = Friendship(ANN, ZACK)
    with pytest.raises(AttributeError):
        f.user1 = BOB


def test_friendship_collapses_in_sets():
    assert len({Friendship(ANN, ZACK), Friendship(ZACK, ANN), Friendship(ANN, BOB)}) == 2


def test_friendship_other_and_involves():
    f = Friendship(ANN, ZACK)
    assert f.other('Ann') == ZACK
    assert f.other('Zack') == ANN
    assert f.involves('Zack')
    assert not f.involves('Bob')
    with pytest.raises(ValueError):
        f.other('Bob')


def test_self_friendship_can_be_built():
    f = Friendship(ANN, ANN)
    assert f.usernames == ('Ann', 'Ann')


def test_usernames_are_case_sensitive():
    # 'Z' sorts before 'a' by code point
    assert canonical_pair('ann', 'Zack') == ('Zack', 'ann')
    assert User('ann') != User('Ann')


def test_user_identity_is_username_only():
    assert User('Ann', 'x', 'Ann', 'A', False) == User('Ann', 'y', 'Other', 'Name', True)
    assert hash(User('Ann', 'x')) == hash(User('Ann', 'y'))
    assert sorted([ZACK, ANN, BOB]) == [ANN, BOB, ZACK]


def test_user_repr_hides_password():
    assert 'secret' not in repr(User('Ann', 'secret'))


def test_messages_sort_newest_first():
    now = datetime(2026, 1, 1, 12, 0, 0)
    older = Message(1, 'Ann', 'Zack', 's', 'b', timestamp=now - timedelta(minutes=5))
    newer = Message(2, 'Zack', 'Ann', 's', 'b', timestamp=now)
    same_time_later_id = Message(3, 'Ann', 'Zack', 's', 'b', timestamp=now)
    assert sorted([older, newer, same_time_later_id]) == [same_time_later_id, newer, older]


def test_message_identity_is_id():
    assert Message(7, 'Ann', 'Zack', 'a', 'b') == Message(7, 'Bob', 'Ann', 'c', 'd', read_status=True)


def test_blog_entries_sort_newest_id_first():
    entries = [BlogEntry(1, 'Ann'), BlogEntry(3, 'Bob'), BlogEntry(2, 'Ann')]
    assert [e.entry_id for e in sorted(entries)] == [3, 2, 1]


def test_send_outcome_codes():
    assert MessageSent(42).code == 42
    assert SendFailure.NOT_FRIENDS.code == -1
    assert SendFailure.PARTY_MISSING.code == -2
    assert SendFailure.STORE_FAILURE.code == 0
