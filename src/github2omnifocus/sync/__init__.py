"""Reconciliation of GitHub state into OmniFocus."""

from .delta import Keyed, delta, normalize_tags, tags_match, to_keyed
from .engine import SyncEngine

__all__ = [
    "Keyed",
    "SyncEngine",
    "delta",
    "normalize_tags",
    "tags_match",
    "to_keyed",
]
