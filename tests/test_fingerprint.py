"""
Tests for request fingerprinting.
"""

from datetime import date, datetime, timezone

from shared.analysis.fingerprint import fingerprint, normalize
from shared.contracts.analysis import Constraints


def test_key_order_does_not_matter():
    a = {"task": "climate_guard", "inputs": {"lat": 1.5, "lon": 2.0, "sector": "agri"}}
    b = {"inputs": {"sector": "agri", "lon": 2.0, "lat": 1.5}, "task": "climate_guard"}
    assert fingerprint(a) == fingerprint(b)


def test_nested_key_order_inside_lists_does_not_matter():
    a = {"events": [{"id": "1", "type": "url"}, {"id": "2", "type": "log"}]}
    b = {"events": [{"type": "url", "id": "1"}, {"type": "log", "id": "2"}]}
    assert fingerprint(a) == fingerprint(b)


def test_array_order_matters():
    assert fingerprint({"xs": [1, 2, 3]}) != fingerprint({"xs": [3, 2, 1]})


def test_value_change_changes_digest():
    assert fingerprint({"locale": "fr-TN"}) != fingerprint({"locale": "en"})
    assert fingerprint({"n": 1}) != fingerprint({"n": 2})


def test_digest_is_sha256_hex():
    digest = fingerprint({"a": 1})
    assert len(digest) == 64
    int(digest, 16)


def test_dates_are_normalized_to_iso_strings():
    stamp = datetime(2025, 1, 1, 12, 30, tzinfo=timezone.utc)
    assert normalize({"at": stamp}) == {"at": "2025-01-01T12:30:00+00:00"}
    assert normalize([date(2025, 1, 2)]) == ["2025-01-02"]
    assert fingerprint({"at": stamp}) == fingerprint({"at": "2025-01-01T12:30:00+00:00"})


def test_pydantic_models_hash_like_their_dump():
    constraints = Constraints(max_recos=3)
    as_dict = {"cost_mode": "cheap_fast", "tone": "concise", "max_recos": 3}
    assert fingerprint({"constraints": constraints}) == fingerprint({"constraints": as_dict})


def test_normalize_sorts_keys_and_is_pure():
    value = {"b": {"d": 1, "c": 2}, "a": [3, {"z": 0, "y": 1}]}
    normalized = normalize(value)
    assert list(normalized) == ["a", "b"]
    assert list(normalized["b"]) == ["c", "d"]
    assert list(normalized["a"][1]) == ["y", "z"]
    assert list(value) == ["b", "a"]
