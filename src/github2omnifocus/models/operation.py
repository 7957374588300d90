"""Add and remove operations produced by the delta algorithm."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

D = TypeVar("D")
C = TypeVar("C")


class OperationType(str, Enum):
    """Whether an operation adds or removes an item."""

    ADD = "add"
    REMOVE = "remove"


@dataclass(frozen=True)
class AddOperation(Generic[D]):
    """Add a desired item that current lacks (or whose tags changed)."""

    item: D

    @property
    def type(self) -> OperationType:
        return OperationType.ADD


@dataclass(frozen=True)
class RemoveOperation(Generic[C]):
    """Remove a current item that desired lacks (or whose tags changed)."""

    item: C

    @property
    def type(self) -> OperationType:
        return OperationType.REMOVE


Operation = AddOperation[D] | RemoveOperation[C]
