"""Unit tests for the identity registry merge policy."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from core.types import UNKNOWN, Individual, IntakeEvent
from reconcile.identity_registry import IdentityRegistry, add_intake, merge_if_newer

_T1 = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)
_T2 = _T1 + timedelta(days=3)


def test_resolve_inserts_new_candidate() -> None:
    """First sighting of a key should become the canonical record."""
    registry = IdentityRegistry()
    candidate = Individual(animal_id="A1", timestamp=_T1, name="Rex")

    canonical = registry.resolve(candidate)

    assert canonical is candidate and len(registry) == 1


def test_resolve_merges_newer_known_values_and_skips_unknown() -> None:
    """Newer rows should overwrite known values without erasing data."""
    registry = IdentityRegistry()
    registry.resolve(Individual(animal_id="A1", timestamp=_T1, name="Rex", color_1="black"))

    merged = registry.resolve(
        Individual(animal_id="A1", timestamp=_T2, name=UNKNOWN, color_1="brown")
    )

    assert (merged.name, merged.color_1, merged.timestamp) == ("Rex", "brown", _T2)


def test_resolve_ignores_older_candidate() -> None:
    """Rows older than the canonical record should not change attributes."""
    registry = IdentityRegistry()
    registry.resolve(Individual(animal_id="A1", timestamp=_T2, name="Rex"))

    merged = registry.resolve(Individual(animal_id="A1", timestamp=_T1, name="Max"))

    assert (merged.name, merged.timestamp) == ("Rex", _T2)


def test_merge_if_newer_rejects_equal_timestamp() -> None:
    """Equal timestamps should not merge."""
    existing = Individual(animal_id="A1", timestamp=_T1, name="Rex")

    accepted = merge_if_newer(existing, Individual(animal_id="A1", timestamp=_T1, name="Max"))

    assert accepted is False and existing.name == "Rex"


def test_merge_if_newer_advances_timestamp_without_known_values() -> None:
    """A newer all-unknown row should still advance the reference time."""
    existing = Individual(animal_id="A1", timestamp=_T1, kind="Dog")

    merge_if_newer(existing, Individual(animal_id="A1", timestamp=_T2))

    assert (existing.kind, existing.timestamp) == ("Dog", _T2)


def test_merge_if_newer_overwrites_kind() -> None:
    """Kind should follow the same last-writer-wins rule as other attributes."""
    existing = Individual(animal_id="A1", timestamp=_T1, kind="Dog")

    merge_if_newer(existing, Individual(animal_id="A1", timestamp=_T2, kind="Cat"))

    assert existing.kind == "Cat"


def test_registry_iterates_in_key_order() -> None:
    """Iteration should be ascending by identity key."""
    registry = IdentityRegistry()
    for animal_id in ("C3", "A1", "B2"):
        registry.resolve(Individual(animal_id=animal_id, timestamp=_T1))

    assert [individual.animal_id for individual in registry] == ["A1", "B2", "C3"]


def test_events_attach_to_canonical_record() -> None:
    """Events added through the resolved reference should accumulate on one record."""
    registry = IdentityRegistry()
    first = registry.resolve(Individual(animal_id="A1", timestamp=_T1))
    add_intake(first, IntakeEvent(timestamp=_T1))
    second = registry.resolve(Individual(animal_id="A1", timestamp=_T2))
    add_intake(second, IntakeEvent(timestamp=_T2))

    assert len(registry.lookup("A1").intakes) == 2
