"""Tests for the delta algorithm."""

import pytest

from github2omnifocus.models import (
    AddOperation,
    GitHubItem,
    OmnifocusTask,
    OperationType,
    RemoveOperation,
)
from github2omnifocus.sync.delta import delta, normalize_tags, tags_match, to_keyed


def item(key: str, *labels: str, repo: str = "") -> GitHubItem:
    return GitHubItem(key=key, title=f"Title of {key}", labels=list(labels), repo=repo)


def task(key: str, *tags: str, task_id: str | None = None) -> OmnifocusTask:
    return OmnifocusTask(id=task_id or f"id-{key}", name=f"{key} Title of {key}", tags=list(tags))


def summarize(ops) -> set[tuple[str, str]]:
    """Operations as an order-free set of (type, key)."""
    return {(op.type.value, op.item.key) for op in ops}


def apply(ops, current: dict[str, OmnifocusTask], bookkeeping: list[str]):
    """Apply operations the way the executor does: removes, then adds."""
    state = dict(current)
    for op in ops:
        if isinstance(op, RemoveOperation):
            del state[op.item.key]
    for op in ops:
        if isinstance(op, AddOperation):
            state[op.item.key] = task(op.item.key, *bookkeeping, *op.item.tags)
    return state


class TestToKeyed:
    """Tests for building keyed collections."""

    def test_empty(self):
        """Empty input gives an empty mapping."""
        assert to_keyed([]) == {}

    def test_keys_by_item_key(self):
        """Each item is indexed under its key."""
        a, b = item("a/b#1"), item("a/b#2")
        assert to_keyed([a, b]) == {"a/b#1": a, "a/b#2": b}

    def test_later_duplicate_wins(self):
        """A later item with the same key overwrites an earlier one."""
        first = item("a/b#1", "bug")
        second = item("a/b#1", "urgent")
        keyed = to_keyed([first, second])
        assert keyed == {"a/b#1": second}

    def test_all_duplicates_collapse(self):
        """A sequence of one repeated key gives a single entry."""
        keyed = to_keyed([task("a/b#1", task_id=str(n)) for n in range(5)])
        assert list(keyed) == ["a/b#1"]
        assert keyed["a/b#1"].id == "4"

    def test_tasks_keyed_by_name_prefix(self):
        """Tasks are keyed by the first word of their name."""
        t = OmnifocusTask(id="x", name="a/b#3 foo bar foo")
        assert to_keyed([t]) == {"a/b#3": t}


class TestNormalizeTags:
    """Tests for tag normalization."""

    def test_lowercases_and_sorts(self):
        assert normalize_tags(["Bug", "a/b", "Urgent"]) == ["a/b", "bug", "urgent"]

    def test_removes_ignored_case_insensitively(self):
        assert normalize_tags(["bug", "Assigned", "GitHub"], ["assigned", "github"]) == ["bug"]

    def test_deduplicates(self):
        """Duplicate tags, including case variants, count once."""
        assert normalize_tags(["bug", "Bug", "bug"]) == ["bug"]

    def test_empty(self):
        assert normalize_tags([]) == []
        assert normalize_tags([], ["assigned"]) == []


class TestTagsMatch:
    """Tests for tag equivalence of two items with the same key."""

    def test_case_insensitive(self):
        """Desired "Bug" equals current "bug"."""
        assert tags_match(item("a/b#1", "Bug"), task("a/b#1", "bug"))

    def test_ignore_applies_to_current_only(self):
        """An ignored tag on the desired side still counts."""
        assert tags_match(item("a/b#1", "bug"), task("a/b#1", "bug", "assigned"), ["assigned"])
        assert not tags_match(item("a/b#1", "bug", "assigned"), task("a/b#1", "bug"), ["assigned"])

    def test_different_tags(self):
        assert not tags_match(item("a/b#1", "urgent"), task("a/b#1", "bug"))


class TestDeltaScenarios:
    """Tests for the reference scenarios."""

    def test_missing_in_current_is_added(self):
        desired = to_keyed([item("a/b#1", "bug", repo="a/b")])
        ops = delta(desired, {})
        assert summarize(ops) == {("add", "a/b#1")}
        assert ops[0].item is desired["a/b#1"]

    def test_same_tags_is_noop(self):
        ops = delta(to_keyed([item("a/b#1", "bug")]), to_keyed([task("a/b#1", "bug")]), [])
        assert ops == []

    def test_ignored_bookkeeping_tag_is_noop(self):
        ops = delta(
            to_keyed([item("a/b#1", "bug")]),
            to_keyed([task("a/b#1", "bug", "assigned")]),
            ["assigned"],
        )
        assert ops == []

    def test_extra_in_current_is_removed(self):
        current = to_keyed([task("a/b#2", "bug")])
        ops = delta({}, current)
        assert summarize(ops) == {("remove", "a/b#2")}
        assert ops[0].item is current["a/b#2"]

    def test_changed_tags_remove_then_add(self):
        desired = to_keyed([item("a/b#1", "urgent")])
        current = to_keyed([task("a/b#1", "bug")])
        ops = delta(desired, current)

        assert ops == [RemoveOperation(current["a/b#1"]), AddOperation(desired["a/b#1"])]
        assert [op.type for op in ops] == [OperationType.REMOVE, OperationType.ADD]

    def test_both_empty(self):
        assert delta({}, {}) == []
        assert delta({}, {}, ["assigned"]) == []

    def test_ignore_list_is_case_insensitive(self):
        ops = delta(
            to_keyed([item("a/b#1", "bug")]),
            to_keyed([task("a/b#1", "bug", "GitHub")]),
            ["GITHUB"],
        )
        assert ops == []

    def test_items_with_no_tags(self):
        ops = delta(to_keyed([item("a/b#1")]), to_keyed([task("a/b#1")]))
        assert ops == []

    def test_operations_carry_concrete_payloads(self):
        """Adds carry GitHub items and removes carry OmniFocus tasks."""
        ops = delta(
            to_keyed([item("a/b#1", "urgent"), item("a/b#3")]),
            to_keyed([task("a/b#1", "bug"), task("a/b#2")]),
        )
        for op in ops:
            if isinstance(op, AddOperation):
                assert isinstance(op.item, GitHubItem)
            else:
                assert isinstance(op.item, OmnifocusTask)


class TestDeltaProperties:
    """Tests for convergence and idempotence."""

    BOOKKEEPING = ["github", "assigned"]

    @pytest.fixture
    def desired(self):
        return to_keyed(
            [
                item("a/b#1", "bug", repo="a/b"),
                item("a/b#2", "Urgent", repo="a/b"),
                item("c/d#7", repo="c/d"),
                item("c/d#8", "enhancement", repo="c/d"),
            ]
        )

    @pytest.fixture
    def current(self):
        return to_keyed(
            [
                task("a/b#1", "github", "assigned", "bug", "a/b"),  # unchanged
                task("a/b#2", "github", "assigned", "bug", "a/b"),  # tags changed
                task("x/y#9", "github", "assigned", "x/y"),  # gone from GitHub
                OmnifocusTask(id="odd", name="no-key-here", tags=["github", "assigned"]),
            ]
        )

    def test_expected_operations(self, desired, current):
        ops = delta(desired, current, self.BOOKKEEPING)
        assert summarize(ops) == {
            ("remove", "a/b#2"),
            ("add", "a/b#2"),
            ("add", "c/d#7"),
            ("add", "c/d#8"),
            ("remove", "x/y#9"),
            ("remove", "no-key-here"),
        }

    def test_convergence(self, desired, current):
        """Applying the delta gives desired's keys and normalized tags."""
        state = apply(delta(desired, current, self.BOOKKEEPING), current, self.BOOKKEEPING)

        assert set(state) == set(desired)
        for key, wanted in desired.items():
            assert normalize_tags(state[key].tags, self.BOOKKEEPING) == normalize_tags(wanted.tags)

    def test_idempotence(self, desired, current):
        """A second delta against the converged state is empty."""
        state = apply(delta(desired, current, self.BOOKKEEPING), current, self.BOOKKEEPING)
        assert delta(desired, state, self.BOOKKEEPING) == []

    def test_no_spurious_operations(self, desired):
        """Identical keys and equivalent tags produce nothing."""
        current = to_keyed(
            task(key, "GitHub", "ASSIGNED", *(tag.upper() for tag in wanted.tags))
            for key, wanted in desired.items()
        )
        assert delta(desired, current, self.BOOKKEEPING) == []

    def test_unchanged_key_emits_nothing(self, desired, current):
        ops = delta(desired, current, self.BOOKKEEPING)
        assert "a/b#1" not in {op.item.key for op in ops}
