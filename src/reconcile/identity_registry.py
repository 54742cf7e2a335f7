"""Identity registry with last-writer-wins merge policy.

This module keeps one canonical record per animal id. Newer source rows
overwrite attributes they know; unknown attributes never erase data.
"""

from __future__ import annotations

from typing import Iterator

from core.types import INDIVIDUAL_ATTRIBUTES, Individual, IntakeEvent, OutcomeEvent, is_known


class IdentityRegistry:
    """Keyed store of canonical individuals.

    Ingestion is single-writer: callers feed rows one at a time and
    must not resolve the same key from concurrent threads.
    """

    def __init__(self) -> None:
        self._individuals: dict[str, Individual] = {}

    def resolve(self, candidate: Individual) -> Individual:
        """Insert a candidate or merge it into the existing record.

        Args:
            candidate: Individual built from one source row.

        Returns:
            The canonical individual for the candidate's key. Events must
            be attached to this reference, not to the candidate.
        """
        existing = self._individuals.get(candidate.animal_id)
        if existing is None:
            self._individuals[candidate.animal_id] = candidate
            return candidate
        merge_if_newer(existing, candidate)
        return existing

    def lookup(self, animal_id: str) -> Individual | None:
        """Return the canonical individual for a key, if any."""
        return self._individuals.get(animal_id)

    def clear(self) -> None:
        """Drop every individual so the registry can be reused."""
        self._individuals.clear()

    def __len__(self) -> int:
        return len(self._individuals)

    def __contains__(self, animal_id: object) -> bool:
        return animal_id in self._individuals

    def __iter__(self) -> Iterator[Individual]:
        """Iterate individuals in ascending key order."""
        for animal_id in sorted(self._individuals):
            yield self._individuals[animal_id]


def merge_if_newer(existing: Individual, candidate: Individual) -> bool:
    """Merge candidate attributes into an existing individual.

    Only a strictly newer candidate is merged. Known candidate values
    overwrite; unknown ones leave the existing value untouched. The
    reference timestamp advances even when no attribute changes.

    Args:
        existing: Canonical individual, mutated in place.
        candidate: Individual built from a later source row.

    Returns:
        Whether the candidate was accepted.
    """
    if candidate.timestamp <= existing.timestamp:
        return False
    for attribute in INDIVIDUAL_ATTRIBUTES:
        value = getattr(candidate, attribute)
        if is_known(value):
            setattr(existing, attribute, value)
    existing.timestamp = candidate.timestamp
    return True


def add_intake(individual: Individual, event: IntakeEvent) -> None:
    """Append an intake in arrival order."""
    individual.intakes.append(event)


def add_outcome(individual: Individual, event: OutcomeEvent) -> None:
    """Append an outcome in arrival order."""
    individual.outcomes.append(event)
