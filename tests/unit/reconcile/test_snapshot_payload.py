"""Unit tests for snapshot payload validation and serialization."""

from __future__ import annotations

import math

import pytest

from core.errors import MalformedSnapshotError
from core.types import Dataset, Entity, Owner
from reconcile.reconciler import merge_payload
from reconcile.snapshot_payload import (
    dataset_to_payload,
    deserialize,
    normalize_entity,
    parse_snapshot,
    serialize,
)
from tests.fixture_paths import fixture_path, load_fixture_json


def test_parse_snapshot_reads_fixture_owners() -> None:
    """Parser should key owners by userId in snapshot order."""
    dataset = parse_snapshot(load_fixture_json("snapshots/session_a.json"))

    assert list(dataset.owners) == [1001, 1002]
    assert dataset.owners[1001].display_name == "alpha"
    assert dataset.last_update == "2026-10-18 21:04:11"


def test_normalize_entity_applies_defaults() -> None:
    """Missing optional fields should take their documented defaults."""
    entity = normalize_entity({"name": "Los 67"})

    assert entity == Entity(name="Los 67")
    assert entity.rarity == "COMMON"
    assert entity.mutation == "None"
    assert entity.generation == 0.0


def test_normalize_entity_keeps_mutation_sentinel_distinct() -> None:
    """The "None" sentinel should mean unmutated, other labels mutated."""
    plain = normalize_entity({"name": "A", "mutation": "None"})
    mutated = normalize_entity({"name": "A", "mutation": "Gold"})

    assert plain.has_mutation is False
    assert mutated.has_mutation is True


def test_normalize_entity_clamps_invalid_generation() -> None:
    """Negative or non-numeric generation should fall back to zero."""
    negative = normalize_entity({"name": "A", "generation": -4})
    garbage = normalize_entity({"name": "A", "generation": "fast"})

    assert (negative.generation, garbage.generation) == (0.0, 0.0)


def test_normalize_entity_maps_oversized_generation_to_infinity() -> None:
    """Integers beyond float range should not raise; positive ones become inf."""
    huge = normalize_entity({"name": "A", "generation": 10**400})
    huge_negative = normalize_entity({"name": "A", "generation": -(10**400)})

    assert huge.generation == math.inf
    assert huge_negative.generation == 0.0


def test_merge_payload_accepts_400_digit_generation() -> None:
    """A 400-digit generation in JSON text should merge instead of crashing."""
    digits = "1" + "0" * 399
    animal = '{"name": "A", "generation": ' + digits + "}"
    text = '{"players": [{"userId": 1, "animals": [' + animal + "]}]}"

    merged = merge_payload(None, text)

    assert merged is not None
    assert merged.owners[1].entities[0].generation == math.inf


def test_normalize_entity_detects_secret_rarity() -> None:
    """Secret rarity should match case-insensitively."""
    assert normalize_entity({"name": "A", "rarity": "Secret"}).is_secret


def test_parse_snapshot_later_duplicate_player_wins() -> None:
    """Duplicate userIds inside one snapshot should keep the later record."""
    payload = {
        "players": [
            {"userId": 1, "animals": [{"name": "A"}]},
            {"userId": 2},
            {"userId": 1, "animals": [{"name": "B"}]},
        ]
    }

    dataset = parse_snapshot(payload)

    assert list(dataset.owners) == [1, 2]
    assert dataset.owners[1].entities[0].name == "B"


def test_parse_snapshot_accepts_integral_float_ids() -> None:
    """JSON numbers like 12.0 should become integer ids."""
    dataset = parse_snapshot({"players": [{"userId": 12.0}]})

    assert list(dataset.owners) == [12]


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"lastUpdate": "x"},
        {"players": "not-a-list"},
        {"players": {"1": {}}},
    ],
)
def test_parse_snapshot_rejects_bad_players_collection(payload: object) -> None:
    """Missing or mistyped players collection should be reported."""
    with pytest.raises(MalformedSnapshotError) as error_info:
        parse_snapshot(payload)

    assert "players" in str(error_info.value) or "object" in str(error_info.value)


@pytest.mark.parametrize("user_id", [None, "1001", True, 1.5])
def test_parse_snapshot_rejects_non_integer_user_id(user_id: object) -> None:
    """Each player needs a numeric integer userId."""
    with pytest.raises(MalformedSnapshotError, match="userId"):
        parse_snapshot({"players": [{"userId": user_id}]})


def test_parse_snapshot_rejects_non_list_animals() -> None:
    """Animals must be a list when present."""
    with pytest.raises(MalformedSnapshotError, match="animals"):
        parse_snapshot({"players": [{"userId": 1, "animals": {"a": 1}}]})


def test_serialize_roundtrip_reproduces_dataset() -> None:
    """Deserialized text should equal the serialized dataset."""
    dataset = parse_snapshot(load_fixture_json("snapshots/session_a.json"))

    restored = deserialize(serialize(dataset))

    assert restored == dataset
    assert restored is not None and list(restored.owners) == list(dataset.owners)


def test_serialize_roundtrip_keeps_constructor_defaults() -> None:
    """A dataset built with default entity fields should roundtrip unchanged."""
    dataset = Dataset("t", {1: Owner(1, entities=(Entity(name="A"),))})

    restored = deserialize(serialize(dataset))

    assert restored == dataset
    assert restored is not None and restored.owners[1].entities[0].base_name == ""


def test_serialize_roundtrip_keeps_infinite_generation() -> None:
    """An unbounded generation should survive serialization."""
    entity = Entity(name="A", generation=math.inf)
    dataset = Dataset("t", {1: Owner(1, entities=(entity,))})

    assert deserialize(serialize(dataset)) == dataset


def test_export_payload_reimports_equivalently() -> None:
    """Exported payload should parse back into the same owners."""
    entity = Entity(name="Las Sis", base_name="LasSis", traits=("x",))
    owner = Owner(owner_id=3, display_name="c", entities=(entity,))
    dataset = Dataset(last_update="t", owners={3: owner})

    assert parse_snapshot(dataset_to_payload(dataset)).owners == dataset.owners


def test_serialize_absent_state_is_null() -> None:
    """Absent dataset should roundtrip through the null literal."""
    assert deserialize(serialize(None)) is None


def test_deserialize_empty_players_is_absent() -> None:
    """An empty owner set should read back as the absent state."""
    assert deserialize('{"lastUpdate": "t", "players": []}') is None


def test_deserialize_rejects_invalid_json() -> None:
    """Broken JSON text should raise a malformed snapshot error."""
    with pytest.raises(MalformedSnapshotError):
        deserialize(fixture_path("bad/truncated.json").read_text(encoding="utf-8"))
