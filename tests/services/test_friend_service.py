# tests/services/test_friend_service.py
"""Tests for friend requests, friendships and blocks."""

from __future__ import annotations

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from tingling.models import BlockedUser, FriendRequest, FriendRequestStatus, Friendship
from tingling.services import friend_service
from tingling.services.errors import ConflictError, InvalidOperationError, NotFoundError


def _count(db_session, model) -> int:
    return db_session.execute(select(func.count()).select_from(model)).scalar_one()


def _befriend(db_session, first, second) -> None:
    request = friend_service.send_friend_request(db_session, first.id, second.id)
    friend_service.respond_to_friend_request(db_session, request.id, FriendRequestStatus.ACCEPTED)


class TestSendFriendRequest:
    def test_creates_pending_request(self, db_session, test_user, other_user):
        request = friend_service.send_friend_request(db_session, test_user.id, other_user.id)

        assert request.id is not None
        assert request.sender_id == test_user.id
        assert request.receiver_id == other_user.id
        assert request.status is FriendRequestStatus.PENDING

    def test_unknown_user(self, db_session, test_user):
        with pytest.raises(NotFoundError, match="One or both users do not exist"):
            friend_service.send_friend_request(db_session, test_user.id, "ting-0000")
        assert _count(db_session, FriendRequest) == 0

    def test_self_request_rejected(self, db_session, test_user):
        with pytest.raises(InvalidOperationError):
            friend_service.send_friend_request(db_session, test_user.id, test_user.id)

    def test_duplicate_in_either_direction(self, db_session, test_user, other_user):
        friend_service.send_friend_request(db_session, test_user.id, other_user.id)

        with pytest.raises(ConflictError, match="Friend request already exists"):
            friend_service.send_friend_request(db_session, test_user.id, other_user.id)
        with pytest.raises(ConflictError, match="Friend request already exists"):
            friend_service.send_friend_request(db_session, other_user.id, test_user.id)
        assert _count(db_session, FriendRequest) == 1

    def test_crossed_request_committed_concurrently(self, db_session, test_user, other_user, monkeypatch):
        # The other side's request lands after this call's duplicate check.
        db_session.add(FriendRequest(sender_id=other_user.id, receiver_id=test_user.id))
        db_session.commit()

        real_find = friend_service._find_request
        lookups = []

        def find_after_first_miss(db, user_a, user_b):
            lookups.append((user_a, user_b))
            return None if len(lookups) == 1 else real_find(db, user_a, user_b)

        monkeypatch.setattr(friend_service, "_find_request", find_after_first_miss)

        with pytest.raises(ConflictError, match="Friend request already exists"):
            friend_service.send_friend_request(db_session, test_user.id, other_user.id)
        assert len(lookups) == 2
        assert _count(db_session, FriendRequest) == 1

    def test_rejected_request_still_blocks_new_ones(self, db_session, test_user, other_user):
        request = friend_service.send_friend_request(db_session, test_user.id, other_user.id)
        friend_service.respond_to_friend_request(db_session, request.id, FriendRequestStatus.REJECTED)

        with pytest.raises(ConflictError):
            friend_service.send_friend_request(db_session, other_user.id, test_user.id)

    def test_already_friends(self, db_session, test_user, other_user):
        # Friendship stored in the reverse order of the new request.
        db_session.add(Friendship(user1_id=other_user.id, user2_id=test_user.id))
        db_session.commit()

        with pytest.raises(ConflictError, match="Users are already friends"):
            friend_service.send_friend_request(db_session, test_user.id, other_user.id)

    @pytest.mark.parametrize("blocker_is_sender", [True, False])
    def test_blocked_pair(self, db_session, test_user, other_user, blocker_is_sender):
        if blocker_is_sender:
            friend_service.block_user(db_session, test_user.id, other_user.id)
        else:
            friend_service.block_user(db_session, other_user.id, test_user.id)

        with pytest.raises(ConflictError, match="Cannot send friend request to blocked user"):
            friend_service.send_friend_request(db_session, test_user.id, other_user.id)


class TestRespondToFriendRequest:
    def test_accept_creates_one_friendship(self, db_session, test_user, other_user):
        request = friend_service.send_friend_request(db_session, test_user.id, other_user.id)

        answered = friend_service.respond_to_friend_request(
            db_session, request.id, FriendRequestStatus.ACCEPTED
        )

        assert answered.status is FriendRequestStatus.ACCEPTED
        assert answered.updated_at >= answered.created_at
        friendships = db_session.scalars(select(Friendship)).all()
        assert len(friendships) == 1
        assert (friendships[0].user1_id, friendships[0].user2_id) == (test_user.id, other_user.id)

    def test_reject_creates_no_friendship(self, db_session, test_user, other_user):
        request = friend_service.send_friend_request(db_session, test_user.id, other_user.id)

        answered = friend_service.respond_to_friend_request(
            db_session, request.id, FriendRequestStatus.REJECTED
        )

        assert answered.status is FriendRequestStatus.REJECTED
        assert _count(db_session, Friendship) == 0

    @pytest.mark.parametrize(
        "first, second",
        [
            (FriendRequestStatus.ACCEPTED, FriendRequestStatus.REJECTED),
            (FriendRequestStatus.REJECTED, FriendRequestStatus.ACCEPTED),
            (FriendRequestStatus.ACCEPTED, FriendRequestStatus.ACCEPTED),
        ],
    )
    def test_second_response_fails(self, db_session, test_user, other_user, first, second):
        request = friend_service.send_friend_request(db_session, test_user.id, other_user.id)
        friend_service.respond_to_friend_request(db_session, request.id, first)

        with pytest.raises(ConflictError, match="already been responded to"):
            friend_service.respond_to_friend_request(db_session, request.id, second)
        assert _count(db_session, Friendship) == (1 if first is FriendRequestStatus.ACCEPTED else 0)

    def test_unknown_request(self, db_session):
        with pytest.raises(NotFoundError, match="Friend request not found"):
            friend_service.respond_to_friend_request(db_session, 999, FriendRequestStatus.ACCEPTED)

    def test_pending_is_not_a_response(self, db_session, test_user, other_user):
        request = friend_service.send_friend_request(db_session, test_user.id, other_user.id)
        with pytest.raises(InvalidOperationError):
            friend_service.respond_to_friend_request(db_session, request.id, FriendRequestStatus.PENDING)


def test_accepted_request_makes_both_users_friends(db_session, test_user, other_user):
    request = friend_service.send_friend_request(db_session, test_user.id, other_user.id)
    assert request.status is FriendRequestStatus.PENDING

    friend_service.respond_to_friend_request(db_session, request.id, FriendRequestStatus.ACCEPTED)

    assert [u.id for u in friend_service.get_friends(db_session, test_user.id)] == [other_user.id]
    assert [u.id for u in friend_service.get_friends(db_session, other_user.id)] == [test_user.id]


def test_get_friends_deduplicates_both_orderings(db_session, test_user, other_user, third_user):
    db_session.add_all(
        [
            Friendship(user1_id=test_user.id, user2_id=other_user.id),
            Friendship(user1_id=other_user.id, user2_id=test_user.id),
            Friendship(user1_id=third_user.id, user2_id=test_user.id),
        ]
    )
    db_session.commit()

    friends = friend_service.get_friends(db_session, test_user.id)
    assert sorted(u.id for u in friends) == sorted([other_user.id, third_user.id])


def test_get_friends_empty(db_session, test_user):
    assert friend_service.get_friends(db_session, test_user.id) == []


def test_get_friend_requests_only_pending_received(db_session, test_user, other_user, third_user, make_user):
    incoming = friend_service.send_friend_request(db_session, other_user.id, test_user.id)
    answered = friend_service.send_friend_request(db_session, third_user.id, test_user.id)
    friend_service.respond_to_friend_request(db_session, answered.id, FriendRequestStatus.REJECTED)
    outgoing_target = make_user("Outgoing")
    friend_service.send_friend_request(db_session, test_user.id, outgoing_target.id)
    latest = friend_service.send_friend_request(db_session, make_user("Latest").id, test_user.id)

    pending = friend_service.get_friend_requests(db_session, test_user.id)
    assert [r.id for r in pending] == [latest.id, incoming.id]


class TestBlocking:
    @pytest.mark.parametrize("reverse", [False, True])
    def test_block_removes_friendship_in_either_order(self, db_session, test_user, other_user, reverse):
        if reverse:
            db_session.add(Friendship(user1_id=other_user.id, user2_id=test_user.id))
        else:
            db_session.add(Friendship(user1_id=test_user.id, user2_id=other_user.id))
        db_session.commit()

        block = friend_service.block_user(db_session, test_user.id, other_user.id)

        assert (block.blocker_id, block.blocked_id) == (test_user.id, other_user.id)
        assert _count(db_session, Friendship) == 0
        assert _count(db_session, BlockedUser) == 1
        assert not friend_service.are_friends(db_session, test_user.id, other_user.id)

    def test_block_leaves_pending_request(self, db_session, test_user, other_user):
        request = friend_service.send_friend_request(db_session, other_user.id, test_user.id)

        friend_service.block_user(db_session, test_user.id, other_user.id)

        db_session.refresh(request)
        assert request.status is FriendRequestStatus.PENDING

    def test_block_twice_returns_existing_row(self, db_session, test_user, other_user):
        first = friend_service.block_user(db_session, test_user.id, other_user.id)
        second = friend_service.block_user(db_session, test_user.id, other_user.id)

        assert first.id == second.id
        assert _count(db_session, BlockedUser) == 1

    def test_block_unknown_user_violates_integrity(self, db_session, test_user):
        with pytest.raises(IntegrityError):
            friend_service.block_user(db_session, test_user.id, "ting-0000")
        assert _count(db_session, BlockedUser) == 0

    def test_block_self(self, db_session, test_user):
        with pytest.raises(InvalidOperationError):
            friend_service.block_user(db_session, test_user.id, test_user.id)

    def test_unblock(self, db_session, test_user, other_user):
        friend_service.block_user(db_session, test_user.id, other_user.id)

        assert friend_service.unblock_user(db_session, test_user.id, other_user.id) is True
        assert friend_service.unblock_user(db_session, test_user.id, other_user.id) is False
        assert not friend_service.is_blocked(db_session, test_user.id, other_user.id)

    def test_unblock_is_directed(self, db_session, test_user, other_user):
        friend_service.block_user(db_session, test_user.id, other_user.id)

        assert friend_service.unblock_user(db_session, other_user.id, test_user.id) is False
        assert friend_service.is_blocked(db_session, other_user.id, test_user.id)
