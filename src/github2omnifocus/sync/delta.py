"""Deltas between two keyed collections.

A delta is the set of add and remove operations that, applied to a
"current" collection, make it hold the same items as a "desired" one. In
github2omnifocus the desired state comes from GitHub and the current state
from OmniFocus.

Items are matched on their key. Items sharing a key are also compared on
their tags; a tag mismatch is resolved by removing the current item and
re-adding the desired one, since tags cannot be changed in place.

Everything here is pure: no I/O, no logging, no shared state.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Protocol, TypeVar

from ..models.operation import AddOperation, Operation, RemoveOperation


class Keyed(Protocol):
    """Anything with a stable identity and a set of tags."""

    @property
    def key(self) -> str: ...

    @property
    def tags(self) -> Iterable[str]: ...


K = TypeVar("K", bound=Keyed)
D = TypeVar("D", bound=Keyed)
C = TypeVar("C", bound=Keyed)


def to_keyed(items: Iterable[K]) -> dict[str, K]:
    """Index items by key.

    If two items share a key the later one wins.
    """
    return {item.key: item for item in items}


def normalize_tags(tags: Iterable[str], ignore: Iterable[str] = ()) -> list[str]:
    """Lower-case, drop ignored tags, de-duplicate and sort.

    ``ignore`` is matched case-insensitively.
    """
    ignored = {tag.lower() for tag in ignore}
    return sorted({tag.lower() for tag in tags} - ignored)


def tags_match(desired: Keyed, current: Keyed, ignore_tags: Iterable[str] = ()) -> bool:
    """Whether two items with the same key carry equivalent tags.

    ``ignore_tags`` only applies to ``current``: they are local bookkeeping
    tags the desired side never has.
    """
    return normalize_tags(desired.tags) == normalize_tags(current.tags, ignore_tags)


def delta(
    desired: Mapping[str, D],
    current: Mapping[str, C],
    ignore_tags: Sequence[str] = (),
) -> list[Operation[D, C]]:
    """Operations that bring ``current`` in line with ``desired``.

    - key only in desired: add it
    - key in both with different tags: remove the current item, then add
      the desired one
    - key only in current: remove it

    The result is a set in spirit; order across keys is not meaningful.
    """
    ops: list[Operation[D, C]] = []

    for key, wanted in desired.items():
        if key not in current:
            ops.append(AddOperation(wanted))
        elif not tags_match(wanted, current[key], ignore_tags):
            ops.append(RemoveOperation(current[key]))
            ops.append(AddOperation(wanted))

    for key, existing in current.items():
        if key not in desired:
            ops.append(RemoveOperation(existing))

    return ops
