import math

import pytest
import requests

from backend.roadrisk import hospital_lookup
from backend.roadrisk.hospital_lookup import (
    eta_minutes,
    fetch_hospital_candidates,
    find_nearest_hospital,
    parse_overpass_elements,
    rank_candidates,
)

MIRRORS = ["https://mirror-a.test/api/interpreter", "https://mirror-b.test/api/interpreter"]

PAYLOAD = {
    "elements": [
        {"type": "node", "lat": 12.99, "lon": 77.61, "tags": {"name": "Far Hospital"}},
        {"type": "way", "center": {"lat": 12.975, "lon": 77.595}, "tags": {"name": "Near Hospital"}},
        {"type": "node", "lat": 12.971, "lon": 77.591, "tags": {}},
    ]
}


class FakeResponse:
    def __init__(self, payload=None, status=200):
        self._payload = payload
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


def _mirror_stub(monkeypatch, responses):
    """responses: url -> FakeResponse or exception instance"""
    calls = []

    def _post(url, data=None, timeout=None):
        calls.append((url, timeout))
        outcome = responses[url]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    monkeypatch.setattr(hospital_lookup.requests, "post", _post)
    return calls


@pytest.mark.parametrize("km,minutes", [(0, 2), (1, 5), (2, 7), (2.3, 8), (0.1, 3)])
def test_eta_minutes(km, minutes):
    assert eta_minutes(km) == minutes


def test_parse_overpass_elements_drops_unnamed():
    candidates = parse_overpass_elements(PAYLOAD)
    assert [c["name"] for c in candidates] == ["Far Hospital", "Near Hospital"]
    assert candidates[1] == {"name": "Near Hospital", "lat": 12.975, "lng": 77.595}


def test_parse_overpass_elements_rejects_malformed_payload():
    with pytest.raises(ValueError):
        parse_overpass_elements({"remark": "runtime error"})


def test_rank_candidates_orders_by_distance():
    ranked = rank_candidates(12.97, 77.59, parse_overpass_elements(PAYLOAD))
    assert ranked[0]["name"] == "Near Hospital"
    assert ranked[0]["distance_km"] < ranked[1]["distance_km"]


def test_falls_through_to_next_mirror(monkeypatch):
    calls = _mirror_stub(monkeypatch, {
        MIRRORS[0]: requests.Timeout("slow"),
        MIRRORS[1]: FakeResponse(PAYLOAD),
    })
    candidates = fetch_hospital_candidates(12.97, 77.59, urls=MIRRORS, timeout=3)
    assert len(candidates) == 2
    assert calls == [(MIRRORS[0], 3), (MIRRORS[1], 3)]


def test_http_error_and_bad_json_fall_through(monkeypatch):
    _mirror_stub(monkeypatch, {
        MIRRORS[0]: FakeResponse(PAYLOAD, status=504),
        MIRRORS[1]: FakeResponse(None),
    })
    assert fetch_hospital_candidates(12.97, 77.59, urls=MIRRORS) is None


def test_first_good_mirror_wins(monkeypatch):
    calls = _mirror_stub(monkeypatch, {
        MIRRORS[0]: FakeResponse(PAYLOAD),
        MIRRORS[1]: requests.ConnectionError("unused"),
    })
    fetch_hospital_candidates(12.97, 77.59, urls=MIRRORS)
    assert [url for url, _ in calls] == [MIRRORS[0]]


def test_find_nearest_hospital_picks_closest(monkeypatch):
    _mirror_stub(monkeypatch, {MIRRORS[0]: FakeResponse(PAYLOAD)})
    hospital = find_nearest_hospital(12.97, 77.59, urls=MIRRORS[:1])
    assert hospital["name"] == "Near Hospital"
    assert hospital["coordinates"] == {"lat": 12.975, "lng": 77.595}
    assert hospital["source"] == "overpass"
    assert hospital["eta"] == f"{eta_minutes(hospital['distance_km'])} mins"


def test_placeholder_when_all_mirrors_fail():
    # requests.post is refused by the autouse conftest fixture
    hospital = find_nearest_hospital(12.97, 77.59, urls=MIRRORS)
    assert hospital["name"] == "City General Hospital"
    assert hospital["coordinates"]["lat"] == pytest.approx(12.98)
    assert hospital["coordinates"]["lng"] == pytest.approx(77.60)
    assert hospital["distance"] == "1.5 km"
    assert hospital["eta"] == "6 mins"
    assert hospital["source"] == "placeholder"


def test_placeholder_when_no_candidates(monkeypatch):
    _mirror_stub(monkeypatch, {MIRRORS[0]: FakeResponse({"elements": []})})
    hospital = find_nearest_hospital(12.97, 77.59, urls=MIRRORS[:1])
    assert hospital["name"] == "City General Hospital"


def test_parse_overpass_elements_drops_non_finite_positions():
    payload = {"elements": [
        {"type": "node", "lat": float("nan"), "lon": 77.6, "tags": {"name": "Broken Hospital"}},
        {"type": "way", "center": {"lat": 12.98, "lon": "Infinity"}, "tags": {"name": "Bad Centre"}},
        {"type": "node", "lat": 12.975, "lon": 77.595, "tags": {"name": "Near Hospital"}},
    ]}
    assert [c["name"] for c in parse_overpass_elements(payload)] == ["Near Hospital"]


@pytest.mark.parametrize("lat,lng", [(float("nan"), 77.59), (12.97, float("inf"))])
def test_find_nearest_hospital_survives_non_finite_position(lat, lng):
    hospital = find_nearest_hospital(lat, lng, urls=[])
    assert hospital["source"] == "placeholder"
    assert all(math.isfinite(v) for v in hospital["coordinates"].values())
    assert math.isfinite(hospital["distance_km"])
    assert hospital["eta"].endswith(" mins")
