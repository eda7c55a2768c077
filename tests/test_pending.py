"""Tests for roost.states.pending — declarations waiting on a parent."""

from roost.states.pending import PendingQueue
from roost.states.types import StateDeclaration


class TestPendingQueue:
    def test_empty(self) -> None:
        queue = PendingQueue()
        assert len(queue) == 0
        assert queue.waiting() == {}
        assert queue.pop("missing") == []

    def test_add_tracks_names(self) -> None:
        queue = PendingQueue()
        queue.add("a", StateDeclaration("a.b"))
        assert "a.b" in queue
        assert "a" not in queue
        assert len(queue) == 1

    def test_pop_keeps_arrival_order(self) -> None:
        queue = PendingQueue()
        first, second = StateDeclaration("a.x"), StateDeclaration("a.y")
        queue.add("a", first)
        queue.add("a", second)

        assert queue.pop("a") == [first, second]
        assert "a.x" not in queue
        assert queue.pop("a") == []

    def test_waiting_groups_by_parent(self) -> None:
        queue = PendingQueue()
        queue.add("a", StateDeclaration("a.x"))
        queue.add("b", StateDeclaration("b.y"))
        queue.add("a", StateDeclaration("a.z"))

        assert queue.waiting() == {"a": ("a.x", "a.z"), "b": ("b.y",)}
