"""Reconciliation of an article's category links against an editor's selection."""

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class CategoryChanges:
    """Links to add and links to drop for one article."""

    to_insert: frozenset[int]
    to_delete: frozenset[int]

    @property
    def is_empty(self) -> bool:
        return not self.to_insert and not self.to_delete


def coerce_category_ids(ids: Iterable[int | str]) -> frozenset[int]:
    """Normalize submitted ids (form values arrive as strings) to a set of ints.

    Raises ValueError on a value that is not an integer.
    """
    return frozenset(int(value) for value in ids)


def plan_category_changes(
    submitted: Iterable[int | str], current: Iterable[int]
) -> CategoryChanges:
    """Compute ``submitted - current`` and ``current - submitted``.

    An empty selection removes every existing link.
    """
    wanted = coerce_category_ids(submitted)
    linked = frozenset(current)
    return CategoryChanges(to_insert=wanted - linked, to_delete=linked - wanted)
