"""
Completion index: training name → the people who completed it.

``build_index(people)`` walks every completion of every person once and
returns a fresh, insertion-ordered ``dict[str, TrainingIndexEntry]``.  The
caller owns the returned mapping for the duration of one run; there is no
module-level state.

Keys are the literal training names from the roster (case-sensitive).
Graduates are tracked by object identity, so two different people who happen
to share a name are still two graduates, while a person who retook a training
is counted once.  ``completion_counts`` keeps how many completion records each
graduate contributed.

Completions hold no reference back to their entry; resolve a completion's
entry with ``lookup(index, completion.name)``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional

from training_reports.models.person import Person

logger = logging.getLogger(__name__)


@dataclass
class TrainingIndexEntry:
    """All graduates of one training.

    Attributes:
        name: Training name, exactly as it appears in the roster.
        completion_counts: Completion records per graduate, keyed by
            ``id(person)``.
    """

    name: str
    _graduates: dict[int, Person] = field(default_factory=dict, repr=False)
    completion_counts: dict[int, int] = field(default_factory=dict, repr=False)

    def add_graduate(self, person: Person) -> None:
        """Record one completion by ``person``; the graduate set is unchanged
        if the person is already in it."""
        key = id(person)
        self._graduates.setdefault(key, person)
        self.completion_counts[key] = self.completion_counts.get(key, 0) + 1

    @property
    def graduates(self) -> list[Person]:
        """Distinct graduates in first-completion order."""
        return list(self._graduates.values())

    @property
    def graduate_count(self) -> int:
        return len(self._graduates)

    def completions_by(self, person: Person) -> int:
        """Number of completion records ``person`` has for this training."""
        return self.completion_counts.get(id(person), 0)

    def __contains__(self, person: object) -> bool:
        return self._graduates.get(id(person)) is person

    def __iter__(self) -> Iterator[Person]:
        return iter(self._graduates.values())


CompletionIndex = dict[str, TrainingIndexEntry]


def build_index(people: Iterable[Person]) -> CompletionIndex:
    """Build the training → graduates index for a roster.

    Args:
        people: The full roster.  Not modified.

    Returns:
        New mapping from training name to ``TrainingIndexEntry``, ordered by
        first encounter.  Empty input yields an empty mapping.
    """
    index: CompletionIndex = {}
    for person in people:
        for completion in person.completions:
            entry = index.get(completion.name)
            if entry is None:
                entry = TrainingIndexEntry(name=completion.name)
                index[completion.name] = entry
            entry.add_graduate(person)

    logger.debug("Built completion index with %d trainings", len(index))
    return index


def lookup(index: CompletionIndex, training_name: str) -> Optional[TrainingIndexEntry]:
    """Return the entry for ``training_name`` (exact match), or ``None``."""
    return index.get(training_name)
