"""
Scavenger-hunt leaderboard aggregation.

Input rows are approved challenge_completions for a single event. Points
live on the parent challenge; callers either copy them onto the row as
"points" or leave the PostgREST embed ({"challenges": {"points": n}}) in
place.
"""

from typing import Any, Dict, Iterable, List, Mapping

from nightout.models.challenges import LeaderboardEntry


def completion_points(completion: Mapping[str, Any]) -> int:
    """
    Points a completion is worth, 0 when missing or malformed.

    Numeric strings count; fractional values are truncated toward zero.
    """
    points = completion.get("points")
    if points is None:
        challenge = completion.get("challenges")
        if isinstance(challenge, Mapping):
            points = challenge.get("points")

    if isinstance(points, bool):
        return 0
    try:
        return int(float(points))
    except (TypeError, ValueError, OverflowError):
        return 0


def compute_leaderboard(
    completions: Iterable[Mapping[str, Any]],
) -> List[LeaderboardEntry]:
    """
    Group completions by user, total their points and rank them.

    Ranks are sequential (1, 2, 3, ...) in sorted order; users with equal
    totals keep the order in which they first appear in ``completions``.
    """
    totals: Dict[str, Dict[str, int]] = {}

    for completion in completions:
        user_id = completion.get("user_id")
        if not user_id:
            continue
        group = totals.setdefault(user_id, {"total_points": 0, "completed_count": 0})
        group["completed_count"] += 1
        group["total_points"] += completion_points(completion)

    # sorted() is stable, so ties keep first-seen order
    ranked = sorted(totals.items(), key=lambda item: item[1]["total_points"], reverse=True)

    return [
        LeaderboardEntry(
            user_id=user_id,
            total_points=group["total_points"],
            completed_count=group["completed_count"],
            rank=rank,
        )
        for rank, (user_id, group) in enumerate(ranked, start=1)
    ]
