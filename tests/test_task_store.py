# tests/test_task_store.py

from __future__ import annotations

import pytest

from task_planner.tasks.task_store import TaskStore

from .fakes import make_task


def test_store_keeps_insertion_order() -> None:
    store = TaskStore([make_task("b"), make_task("a")])

    assert [t.id for t in store.list_tasks()] == ["b", "a"]
    assert "a" in store and len(store) == 2


def test_duplicate_ids_are_rejected() -> None:
    store = TaskStore([make_task("a")])

    with pytest.raises(ValueError):
        store.add(make_task("a"))
    with pytest.raises(ValueError):
        TaskStore([make_task("x"), make_task("x")])


def test_remove_returns_task_or_none() -> None:
    store = TaskStore([make_task("a")])

    assert store.remove("a") is not None
    assert store.remove("a") is None
    assert store.get("a") is None
