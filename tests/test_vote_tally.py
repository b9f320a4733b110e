"""Tests for venue vote tallies and the vote toggle."""

import pytest

from nightout.models.venues import VenueTally, VoteType
from nightout.services.vote_tally import (
    VoteAction,
    VoteActionKind,
    apply_vote,
    compute_tally,
)

VOTES = [
    {"venue_id": "v1", "user_id": "u1", "vote_type": "upvote"},
    {"venue_id": "v1", "user_id": "u2", "vote_type": "downvote"},
    {"venue_id": "v1", "user_id": "u3", "vote_type": "upvote"},
    {"venue_id": "v2", "user_id": "u1", "vote_type": "downvote"},
]


def test_single_upvote_by_current_user():
    votes = [{"venue_id": "V1", "user_id": "U1", "vote_type": "upvote"}]
    tally = compute_tally(votes, "V1", "U1")
    assert tally == VenueTally(upvotes=1, downvotes=0, user_vote=VoteType.UPVOTE)


def test_counts_only_requested_venue():
    tally = compute_tally(VOTES, "v1", "u2")
    assert tally.upvotes == 2
    assert tally.downvotes == 1
    assert tally.user_vote is VoteType.DOWNVOTE


@pytest.mark.parametrize("venue_id", ["v1", "v2", "v3"])
def test_counts_add_up_to_venue_records(venue_id):
    tally = compute_tally(VOTES, venue_id, "u1")
    expected = len([v for v in VOTES if v["venue_id"] == venue_id])
    assert tally.upvotes + tally.downvotes == expected


def test_empty_votes():
    assert compute_tally([], "v1", "u1") == VenueTally(
        upvotes=0, downvotes=0, user_vote=None
    )


def test_no_vote_from_current_user():
    assert compute_tally(VOTES, "v2", "u3").user_vote is None


def test_anonymous_caller_has_no_vote():
    assert compute_tally(VOTES, "v1", None).user_vote is None


def test_is_idempotent():
    assert compute_tally(VOTES, "v1", "u1") == compute_tally(VOTES, "v1", "u1")


def test_unknown_vote_type_is_ignored():
    votes = [
        {"venue_id": "v1", "user_id": "u1", "vote_type": "sideways"},
        {"venue_id": "v1", "user_id": "u2", "vote_type": "upvote"},
        {"venue_id": "v1", "user_id": "u3"},
    ]
    tally = compute_tally(votes, "v1", "u1")
    assert tally.upvotes == 1
    assert tally.downvotes == 0
    assert tally.user_vote is None


def test_same_vote_retracts():
    assert apply_vote(VoteType.UPVOTE, VoteType.UPVOTE) == VoteAction.retract()
    assert apply_vote(VoteType.DOWNVOTE, VoteType.DOWNVOTE).kind is VoteActionKind.RETRACT


def test_no_existing_vote_upserts():
    assert apply_vote(None, VoteType.DOWNVOTE) == VoteAction.upsert(VoteType.DOWNVOTE)


def test_opposite_vote_replaces():
    action = apply_vote(VoteType.UPVOTE, VoteType.DOWNVOTE)
    assert action.kind is VoteActionKind.UPSERT
    assert action.vote_type is VoteType.DOWNVOTE
