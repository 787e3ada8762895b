from __future__ import annotations

from eventrec.recommendations.mapping import map_db_event_to_event, safe_json_parse

FULL_ROW = {
    "id": "e1",
    "title": "Rock no Parque",
    "artists": '["Xutos & Pontapés"]',
    "venue_name": "Parque Eduardo VII",
    "venue_address": "Av. da Liberdade",
    "venue_city": "Lisboa",
    "venue_capacity": 20000,
    "date": "2027-06-12T20:00:00Z",
    "end_date": "2027-06-12T23:30:00Z",
    "image": "https://cdn.example.com/e1.jpg",
    "description": "Open air rock night",
    "category": "music",
    "ticket_types": '[{"id": "ga", "name": "General", "price": 25, "available": 100}]',
    "is_sold_out": False,
    "is_featured": True,
    "duration": 210,
    "promoter_id": "p1",
    "promoters": {
        "id": "p1",
        "name": "Lisboa Live",
        "image": "",
        "description": "Concerts",
        "verified": True,
        "followers_count": 1200,
    },
    "tags": '["rock"]',
    "instagram_link": "https://instagram.com/rocknoparque",
    "facebook_link": None,
    "twitter_link": None,
    "website_link": None,
    "latitude": 38.728,
    "longitude": -9.152,
}


def test_safe_json_parse_fallbacks():
    assert safe_json_parse(None, []) == []
    assert safe_json_parse("{bad", {"x": 1}) == {"x": 1}
    assert safe_json_parse('{"a": 1}', {}) == {"a": 1}
    assert safe_json_parse(3.5, []) == []


def test_full_row_mapping():
    event = map_db_event_to_event(FULL_ROW)
    assert event["id"] == "e1"
    assert event["artists"] == ["Xutos & Pontapés"]
    assert event["venue"] == {
        "id": "venue-e1",
        "name": "Parque Eduardo VII",
        "address": "Av. da Liberdade",
        "city": "Lisboa",
        "capacity": 20000,
    }
    assert event["date"] == "2027-06-12T20:00:00Z"
    assert event["endDate"] == "2027-06-12T23:30:00Z"
    assert event["ticketTypes"] == [{
        "id": "ga",
        "name": "General",
        "price": 25,
        "available": 100,
        "description": None,
        "maxPerPerson": 4,
    }]
    assert event["isFeatured"] is True
    assert event["isSoldOut"] is False
    assert event["promoter"]["name"] == "Lisboa Live"
    assert event["promoter"]["followersCount"] == 1200
    assert event["tags"] == ["rock"]
    assert event["socialLinks"]["instagram"] == "https://instagram.com/rocknoparque"
    assert event["coordinates"] == {"latitude": 38.728, "longitude": -9.152}


def test_sparse_row_mapping():
    event = map_db_event_to_event({"id": "e2", "promoter_id": "p9"})
    assert event["category"] == "other"
    assert event["artists"] == []
    assert event["ticketTypes"] == []
    assert event["tags"] == []
    assert event["date"] is None
    assert event["promoter"] == {
        "id": "p9",
        "name": "Promotor",
        "image": "",
        "description": "",
        "verified": False,
        "followersCount": 0,
    }
    assert "socialLinks" not in event
    assert "coordinates" not in event


def test_coordinates_need_both_values():
    event = map_db_event_to_event({"id": "e3", "latitude": 38.7, "longitude": None})
    assert "coordinates" not in event


def test_malformed_ticket_types_are_ignored():
    event = map_db_event_to_event({"id": "e4", "ticket_types": '["oops", {"name": "VIP"}]'})
    assert event["ticketTypes"] == [{
        "id": "",
        "name": "VIP",
        "price": 0,
        "available": 0,
        "description": None,
        "maxPerPerson": 4,
    }]
