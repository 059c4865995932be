"""Snapshot payload validation and serialization.

This module converts collector JSON payloads into typed datasets and back.
All optional-field defaults are applied here, once, before data enters
a dataset.
"""

from __future__ import annotations

import json
import math
from typing import Any, Mapping, Sequence

from core.constants import DEFAULT_ENTITY_NAME, DEFAULT_GENERATION, DEFAULT_RARITY, NO_MUTATION
from core.errors import MalformedSnapshotError
from core.types import Dataset, Entity, Owner


def parse_snapshot(payload: object) -> Dataset:
    """Validate a snapshot payload and build a normalized dataset.

    Args:
        payload: Decoded JSON snapshot.

    Returns:
        Dataset holding every player of the snapshot. Players sharing a
        ``userId`` collapse into one owner: the later record wins and
        keeps the earlier record's position.

    Raises:
        MalformedSnapshotError: If the payload shape is invalid.
    """
    if not isinstance(payload, Mapping):
        raise MalformedSnapshotError(
            f"Invalid snapshot: expected JSON object, got {type(payload).__name__}. "
            "Export a snapshot with a top-level 'players' list."
        )
    players = payload.get("players")
    if players is None:
        raise MalformedSnapshotError(
            "Invalid snapshot: missing 'players' collection. "
            "Export a snapshot with a top-level 'players' list."
        )
    if not _is_sequence(players):
        raise MalformedSnapshotError(
            f"Invalid snapshot: 'players' collection must be a list, got {type(players).__name__}. "
            "Export a snapshot with a top-level 'players' list."
        )
    owners: dict[int, Owner] = {}
    for index, player in enumerate(players):
        owner = normalize_owner(player, index)
        owners[owner.owner_id] = owner
    last_update = payload.get("lastUpdate")
    return Dataset(last_update=_optional_text(last_update), owners=owners)


def normalize_owner(payload: object, index: int = 0) -> Owner:
    """Build an owner from one ``players`` element.

    Args:
        payload: Raw player mapping.
        index: Zero-based position inside ``players`` for error context.

    Returns:
        Normalized owner.

    Raises:
        MalformedSnapshotError: If the player or its ``userId`` is invalid.
    """
    if not isinstance(payload, Mapping):
        raise MalformedSnapshotError(
            f"Invalid snapshot: players[{index}] must be an object, got {type(payload).__name__}."
        )
    owner_id = _parse_owner_id(payload.get("userId"), index)
    animals = payload.get("animals")
    if animals is None:
        animals = []
    if not _is_sequence(animals):
        raise MalformedSnapshotError(
            f"Invalid snapshot: players[{index}].animals must be a list, "
            f"got {type(animals).__name__}."
        )
    entities = tuple(
        normalize_entity(animal, index, position) for position, animal in enumerate(animals)
    )
    return Owner(
        owner_id=owner_id,
        display_name=_optional_text(payload.get("username")),
        entities=entities,
    )


def normalize_entity(payload: object, owner_index: int = 0, position: int = 0) -> Entity:
    """Build an entity from one ``animals`` element, applying defaults.

    Args:
        payload: Raw animal mapping.
        owner_index: Position of the parent player for error context.
        position: Position inside ``animals`` for error context.

    Returns:
        Normalized entity.

    Raises:
        MalformedSnapshotError: If the element is not an object.
    """
    if not isinstance(payload, Mapping):
        raise MalformedSnapshotError(
            f"Invalid snapshot: players[{owner_index}].animals[{position}] must be an object, "
            f"got {type(payload).__name__}."
        )
    base_name = _optional_text(payload.get("baseName"))
    name = _optional_text(payload.get("name")) or base_name or DEFAULT_ENTITY_NAME
    return Entity(
        name=name,
        base_name=base_name,
        rarity=_optional_text(payload.get("rarity")) or DEFAULT_RARITY,
        generation=_parse_generation(payload.get("generation")),
        mutation=_optional_text(payload.get("mutation")) or NO_MUTATION,
        traits=_parse_traits(payload.get("traits")),
        slot=_optional_text(payload.get("slot")),
        plot=_optional_text(payload.get("plot")),
        scanned_at=_optional_text(payload.get("scannedAt")),
    )


def dataset_to_payload(dataset: Dataset) -> dict[str, object]:
    """Serialize a dataset into the collector payload shape.

    Args:
        dataset: Dataset to export.

    Returns:
        JSON-safe payload accepted by ``parse_snapshot``.
    """
    return {
        "lastUpdate": dataset.last_update,
        "players": [_owner_to_payload(owner) for owner in dataset.owners.values()],
    }


def serialize(dataset: Dataset | None) -> str:
    """Encode a dataset, or the absent state, as JSON text."""
    if dataset is None:
        return "null"
    return json.dumps(dataset_to_payload(dataset), ensure_ascii=False, indent=2)


def deserialize(text: str) -> Dataset | None:
    """Decode JSON text produced by ``serialize``.

    Args:
        text: Serialized dataset text.

    Returns:
        Parsed dataset, or None for the absent state or an empty owner set.

    Raises:
        MalformedSnapshotError: If the text is not valid JSON or fails validation.
    """
    payload = load_json_text(text)
    if payload is None:
        return None
    dataset = parse_snapshot(payload)
    if not dataset.owners:
        return None
    return dataset


def load_json_text(text: str) -> Any:
    """Decode JSON text, mapping syntax errors to ``MalformedSnapshotError``."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as error:
        raise MalformedSnapshotError(
            f"Invalid snapshot JSON at line {error.lineno}, column {error.colno}: {error.msg}. "
            "Check that the full snapshot was copied."
        ) from error


def _owner_to_payload(owner: Owner) -> dict[str, object]:
    return {
        "userId": owner.owner_id,
        "username": owner.display_name,
        "animals": [_entity_to_payload(entity) for entity in owner.entities],
    }


def _entity_to_payload(entity: Entity) -> dict[str, object]:
    return {
        "name": entity.name,
        "baseName": entity.base_name,
        "rarity": entity.rarity,
        "generation": entity.generation,
        "mutation": entity.mutation,
        "traits": list(entity.traits),
        "slot": entity.slot,
        "plot": entity.plot,
        "scannedAt": entity.scanned_at,
    }


def _parse_owner_id(raw_value: object, index: int) -> int:
    if isinstance(raw_value, bool):
        raise MalformedSnapshotError(
            f"Invalid snapshot: players[{index}].userId must be a number, got boolean."
        )
    if isinstance(raw_value, int):
        return raw_value
    if isinstance(raw_value, float) and raw_value.is_integer():
        return int(raw_value)
    raise MalformedSnapshotError(
        f"Invalid snapshot: players[{index}].userId must be an integer, got {raw_value!r}. "
        "Each player needs a numeric userId."
    )


def _parse_generation(raw_value: object) -> float:
    if raw_value is None or isinstance(raw_value, bool):
        return DEFAULT_GENERATION
    try:
        generation = float(raw_value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return DEFAULT_GENERATION
    except OverflowError:
        # Integers beyond float range keep their sign; generation has no upper bound.
        return math.inf if raw_value > 0 else DEFAULT_GENERATION  # type: ignore[operator]
    if math.isnan(generation) or generation < 0:
        return DEFAULT_GENERATION
    return generation


def _parse_traits(raw_value: object) -> tuple[str, ...]:
    if not _is_sequence(raw_value):
        return ()
    return tuple(str(trait) for trait in raw_value)  # type: ignore[union-attr]


def _optional_text(raw_value: object) -> str:
    if raw_value is None:
        return ""
    return str(raw_value)


def _is_sequence(value: object) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))
