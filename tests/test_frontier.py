import pytest

from gridwalk.engine.frontier import FifoFrontier, LifoFrontier, PriorityFrontier


def test_fifo_and_lifo_order() -> None:
    fifo = FifoFrontier()
    lifo = LifoFrontier()
    for coord in [(0, 0), (1, 0), (2, 0)]:
        fifo.push(coord)
        lifo.push(coord)

    assert [fifo.pop() for _ in range(3)] == [(0, 0), (1, 0), (2, 0)]
    assert [lifo.pop() for _ in range(3)] == [(2, 0), (1, 0), (0, 0)]
    assert len(fifo) == len(lifo) == 0


def test_priority_ties_follow_discovery_order() -> None:
    frontier = PriorityFrontier()
    frontier.push((3, 3), 2.0)
    frontier.push((1, 1), 1.0)
    frontier.push((2, 2), 1.0)
    frontier.push((0, 0), 1.0)

    assert [frontier.pop() for _ in range(4)] == [(1, 1), (2, 2), (0, 0), (3, 3)]


def test_priority_update_keeps_discovery_rank() -> None:
    frontier = PriorityFrontier()
    frontier.push((0, 0), 5.0)
    frontier.push((1, 1), 3.0)
    frontier.update((0, 0), 3.0)
    frontier.update((1, 1), 4.0)

    assert len(frontier) == 2
    assert (0, 0) in frontier
    assert frontier.pop() == (0, 0)
    assert frontier.pop() == (1, 1)
    assert (0, 0) not in frontier


def test_priority_pop_skips_stale_entries_and_empties() -> None:
    frontier = PriorityFrontier()
    frontier.push((0, 0), 9.0)
    frontier.update((0, 0), 1.0)

    assert frontier.pop() == (0, 0)
    with pytest.raises(IndexError):
        frontier.pop()
