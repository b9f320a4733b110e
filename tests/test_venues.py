"""Tests for venues and venue voting."""

import httpx
import pytest

from nightout.services.places_service import PlacesService
from nightout.services.venue_service import format_start_time


@pytest.fixture
def event(supabase, user_id):
    return supabase.seed(
        "events",
        [{
            "user_id": user_id,
            "title": "Birthday drinks",
            "event_date": "2026-11-06T20:00:00+00:00",
            "status": "planning",
            "is_private": False,
            "is_scavenger_hunt": False,
        }],
    )[0]


@pytest.fixture
def venue(client, api_base, auth_headers, event):
    r = client.post(
        f"{api_base}/venues/",
        headers=auth_headers,
        json={
            "name": " The Crown ",
            "address": "1 High Street",
            "latitude": 51.5,
            "longitude": -0.12,
            "start_time": "21:30",
            "utc_offset_minutes": 60,
            "event_id": event["id"],
        },
    )
    assert r.status_code == 201, r.text
    return r.json()


def _vote(client, api_base, headers, event, venue, vote_type):
    r = client.post(
        f"{api_base}/events/{event['id']}/venues/{venue['id']}/vote",
        headers=headers,
        json={"vote_type": vote_type},
    )
    assert r.status_code == 200, r.text
    return r.json()


def test_format_start_time():
    assert format_start_time("21:30", 60) == "21:30:00+01:00"
    assert format_start_time("07:05", -330) == "07:05:00-05:30"
    assert format_start_time("00:00", 0) == "00:00:00+00:00"


def test_format_start_time_rejects_out_of_range():
    with pytest.raises(ValueError):
        format_start_time("25:00", 0)


def test_add_venue(venue, event):
    assert venue["name"] == "The Crown"
    assert venue["status"] == "pending"
    assert venue["start_time"] == "21:30:00+01:00"
    assert venue["event_id"] == event["id"]


def test_add_venue_requires_name(client, api_base, auth_headers, supabase):
    r = client.post(
        f"{api_base}/venues/",
        headers=auth_headers,
        json={
            "name": "  ",
            "address": "1 High Street",
            "latitude": 51.5,
            "longitude": -0.12,
            "start_time": "21:30",
        },
    )
    assert r.status_code == 400


def test_get_venue(client, api_base, auth_headers, venue):
    r = client.get(f"{api_base}/venues/{venue['id']}", headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["place_details"] is None


def test_get_venue_survives_place_details_failure(
    client, api_base, auth_headers, supabase, event, monkeypatch
):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>Gateway login</html>")

    monkeypatch.setattr(
        "nightout.services.venue_service.places_service",
        PlacesService(api_key="test-key", transport=httpx.MockTransport(handler)),
    )
    [venue] = supabase.seed(
        "venues",
        [{
            "event_id": event["id"],
            "name": "The Crown",
            "address": "1 High Street",
            "status": "pending",
            "google_place_id": "place-123",
        }],
    )

    r = client.get(f"{api_base}/venues/{venue['id']}", headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["name"] == "The Crown"
    assert r.json()["place_details"] is None


def test_get_venue_with_place_details(
    client, api_base, auth_headers, supabase, event, monkeypatch
):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={"status": "OK", "result": {"name": "The Crown", "rating": 4.5}},
        )

    monkeypatch.setattr(
        "nightout.services.venue_service.places_service",
        PlacesService(api_key="test-key", transport=httpx.MockTransport(handler)),
    )
    [venue] = supabase.seed(
        "venues",
        [{"event_id": event["id"], "name": "The Crown", "address": "1 High Street", "google_place_id": "place-123"}],
    )

    r = client.get(f"{api_base}/venues/{venue['id']}", headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["place_details"]["rating"] == 4.5


def test_vote_toggle_flow(client, api_base, auth_headers, supabase, event, venue):
    tally = _vote(client, api_base, auth_headers, event, venue, "upvote")
    assert tally == {"upvotes": 1, "downvotes": 0, "user_vote": "upvote"}

    # Same vote again retracts it
    tally = _vote(client, api_base, auth_headers, event, venue, "upvote")
    assert tally == {"upvotes": 0, "downvotes": 0, "user_vote": None}
    assert supabase.tables["venue_votes"] == []

    # Opposite vote replaces the existing one
    _vote(client, api_base, auth_headers, event, venue, "upvote")
    tally = _vote(client, api_base, auth_headers, event, venue, "downvote")
    assert tally == {"upvotes": 0, "downvotes": 1, "user_vote": "downvote"}
    assert len(supabase.tables["venue_votes"]) == 1


def test_venue_list_includes_tallies(
    client, api_base, auth_headers, other_headers, event, venue
):
    _vote(client, api_base, auth_headers, event, venue, "upvote")
    _vote(client, api_base, other_headers, event, venue, "downvote")

    r = client.get(f"{api_base}/events/{event['id']}/venues", headers=other_headers)
    assert r.status_code == 200
    [listed] = r.json()
    assert listed["id"] == venue["id"]
    assert listed["upvotes"] == 1
    assert listed["downvotes"] == 1
    assert listed["user_vote"] == "downvote"


def test_vote_rejects_venue_from_other_event(
    client, api_base, auth_headers, supabase, user_id, venue
):
    other_event = supabase.seed(
        "events",
        [{"user_id": user_id, "title": "Other", "event_date": "2026-12-01", "is_private": False}],
    )[0]
    r = client.post(
        f"{api_base}/events/{other_event['id']}/venues/{venue['id']}/vote",
        headers=auth_headers,
        json={"vote_type": "upvote"},
    )
    assert r.status_code == 404


def test_vote_rejects_unknown_vote_type(client, api_base, auth_headers, event, venue):
    r = client.post(
        f"{api_base}/events/{event['id']}/venues/{venue['id']}/vote",
        headers=auth_headers,
        json={"vote_type": "sideways"},
    )
    assert r.status_code == 422
