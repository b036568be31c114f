"""Tests for the cone traversal state machine."""

from __future__ import annotations

import numpy as np
import pytest
from test_base import brute_force_itemsets

from conemine import (
    ConeTraversal,
    FrequentItemset,
    ResultCollector,
    Transition,
    build_index,
    enumerate_frequent_itemsets,
    rank_items,
)
from conemine.support import itemset_support


def _traversal(rows, min_support) -> ConeTraversal:
    index = build_index(rows)
    return ConeTraversal(rank_items(index, min_support), index, min_support)


def _pairs(results) -> list[tuple[tuple[int, ...], int]]:
    return [(entry.itemset, entry.support) for entry in results]


# ---------------------------------------------------------------------------
# Initial state and single transitions
# ---------------------------------------------------------------------------


class TestInitialState:
    def test_seeded_with_top_item(self, gap_rows) -> None:
        traversal = _traversal(gap_rows, 1)
        assert traversal.cone.items == [1]
        assert len(traversal.cone.postings) == 1
        assert traversal.cursor == 0
        assert traversal.skip == 2
        assert not traversal.done
        assert traversal.steps == 0

    def test_empty_rank_order_starts_done(self) -> None:
        traversal = ConeTraversal([], {}, 1)
        assert traversal.done
        assert list(traversal) == []
        assert len(traversal.run()) == 0

    def test_step_after_done(self) -> None:
        traversal = ConeTraversal([], {}, 1)
        with pytest.raises(RuntimeError, match="already reached"):
            traversal.step()

    def test_invalid_threshold(self, gap_rows) -> None:
        index = build_index(gap_rows)
        with pytest.raises(ValueError, match="min_support"):
            ConeTraversal(rank_items(index, 1), index, 0)


class TestDecide:
    def test_extend_when_support_exceeds(self, gap_rows) -> None:
        traversal = _traversal(gap_rows, 1)
        assert traversal.decide(3) is Transition.EXTEND

    def test_single_item_below_threshold_moves_base(self, gap_rows) -> None:
        traversal = _traversal(gap_rows, 1)
        assert traversal.decide(1) is Transition.RESEED_BASE

    def test_terminal_wins_over_extend(self) -> None:
        traversal = _traversal([[4], [4]], 1)
        assert traversal.decide(100) is Transition.TERMINAL

    def test_extend_then_siblings(self, gap_rows) -> None:
        traversal = _traversal(gap_rows, 1)

        traversal.apply(Transition.EXTEND)
        assert traversal.cone.items == [1, 2]
        assert traversal.cursor == 1

        assert traversal.decide(1) is Transition.RESEED_SIBLING
        traversal.apply(Transition.RESEED_SIBLING)
        assert traversal.cone.items == [1, 3]
        assert traversal.skip == 3
        assert traversal.cursor == 2

        traversal.apply(Transition.RESEED_SIBLING)
        assert traversal.cone.items == [1, 4]
        assert traversal.skip == 4
        assert traversal.cursor == 3

        # second item is the last ranked item: no sibling left
        assert traversal.decide(1) is Transition.RESEED_BASE
        # last item is the last ranked item: cannot extend either
        assert traversal.decide(5) is Transition.RESEED_BASE

    def test_reseed_base_resets_skip(self, gap_rows) -> None:
        traversal = _traversal(gap_rows, 1)
        traversal.apply(Transition.EXTEND)
        traversal.apply(Transition.RESEED_SIBLING)
        traversal.apply(Transition.RESEED_BASE)
        assert traversal.cone.items == [2]
        assert traversal.skip == 2
        assert traversal.cursor == 1

    def test_sibling_keeps_postings_in_step(self, gap_rows) -> None:
        index = build_index(gap_rows)
        traversal = ConeTraversal(rank_items(index, 1), index, 1)
        traversal.apply(Transition.EXTEND)
        traversal.apply(Transition.EXTEND)
        traversal.apply(Transition.RESEED_SIBLING)
        assert traversal.cone.items == [1, 3]
        assert [p.tolist() for p in traversal.cone.postings] == [index[1].tolist(), index[3].tolist()]

    def test_terminal_sets_done(self) -> None:
        traversal = _traversal([[4], [4]], 1)
        traversal.apply(Transition.TERMINAL)
        assert traversal.done


# ---------------------------------------------------------------------------
# Full runs
# ---------------------------------------------------------------------------


class TestRun:
    def test_example_trace(self, example_rows) -> None:
        steps = list(_traversal(example_rows, 1))
        assert [(s.itemset, s.support, s.accepted, s.transition) for s in steps] == [
            ((1,), 3, True, Transition.EXTEND),
            ((1, 2), 2, True, Transition.EXTEND),
            ((1, 2, 3), 1, True, Transition.RESEED_SIBLING),
            ((1, 3), 2, True, Transition.RESEED_BASE),
            ((2,), 3, True, Transition.EXTEND),
            ((2, 3), 2, True, Transition.RESEED_BASE),
            ((3,), 3, True, Transition.TERMINAL),
        ]

    def test_rejected_cone_is_not_emitted(self, gap_rows) -> None:
        steps = list(_traversal(gap_rows, 1))
        rejected = [s for s in steps if not s.accepted]
        assert [(s.itemset, s.support) for s in rejected] == [((1, 2, 3), 0)]
        assert len(steps) == 11

    def test_gap_results(self, gap_rows) -> None:
        index = build_index(gap_rows)
        results = enumerate_frequent_itemsets(index, rank_items(index, 1), 1)
        assert _pairs(results) == [
            ((1,), 3),
            ((1, 2), 2),
            ((1, 3), 1),
            ((1, 4), 2),
            ((2,), 3),
            ((2, 3), 1),
            ((2, 4), 2),
            ((3,), 3),
            ((3, 4), 1),
            ((4,), 3),
        ]

    def test_sibling_jump_skips_deeper_combinations(self, gap_rows) -> None:
        index = build_index(gap_rows)
        found = {frozenset(e.itemset) for e in enumerate_frequent_itemsets(index, rank_items(index, 1), 1)}
        expected = brute_force_itemsets(gap_rows, 1)
        assert set(expected) - found == {frozenset({1, 2, 4})}

    def test_boundary_acceptance_is_inclusive(self, boundary_rows) -> None:
        steps = list(_traversal(boundary_rows, 2))
        by_itemset = {s.itemset: s for s in steps}
        assert by_itemset[(2, 3)].support == 2
        assert by_itemset[(2, 3)].accepted
        assert by_itemset[(2, 3)].transition is Transition.RESEED_BASE
        assert not by_itemset[(1, 2, 3)].accepted

    def test_results_are_frequent_itemsets(self, example_rows) -> None:
        index = build_index(example_rows)
        results = enumerate_frequent_itemsets(index, rank_items(index, 1), 1)
        assert all(isinstance(entry, FrequentItemset) for entry in results)

    def test_run_appends_to_collector(self, example_rows) -> None:
        collector = ResultCollector()
        collector.emit((99,), 42)
        returned = _traversal(example_rows, 1).run(collector)
        assert returned is collector
        assert collector[0] == ((99,), 42)
        assert len(collector) == 8

    def test_plain_sequence_rank_order(self, example_rows) -> None:
        index = build_index(example_rows)
        results = enumerate_frequent_itemsets(index, [3, 2, 1], 1)
        assert _pairs(results)[0] == ((3,), 3)
        assert _pairs(results)[1] == ((3, 2), 2)

    def test_emitted_cones_are_snapshots(self, example_rows) -> None:
        traversal = _traversal(example_rows, 1)
        first = traversal.step()
        assert first.itemset == (1,)
        assert traversal.cone.items == [1, 2]
        assert first.itemset == (1,)


# ---------------------------------------------------------------------------
# Properties on random tables
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("seed", [0, 1, 2, 3])
@pytest.mark.parametrize("min_support", [1, 3, 8])
def test_acceptance_correctness(seed, min_support) -> None:
    rng = np.random.default_rng(seed)
    rows = [np.flatnonzero(row).tolist() for row in rng.random((40, 9)) < 0.4]
    index = build_index(rows)
    results = enumerate_frequent_itemsets(index, rank_items(index, min_support), min_support)

    expected = brute_force_itemsets(rows, min_support)
    for entry in results:
        assert entry.support >= min_support
        assert entry.support == itemset_support(index, entry.itemset)
        assert expected[frozenset(entry.itemset)] == entry.support


@pytest.mark.parametrize("seed", [0, 1, 2])
def test_termination_bound(seed) -> None:
    rng = np.random.default_rng(seed)
    rows = [np.flatnonzero(row).tolist() for row in rng.random((80, 15)) < 0.5]
    index = build_index(rows)
    for min_support in (1, 10, 30):
        order = rank_items(index, min_support)
        traversal = ConeTraversal(order, index, min_support)
        traversal.run()
        n = len(order)
        assert traversal.done
        assert traversal.steps <= n**3 + n


def test_prefixes_are_antimonotone(random_rows) -> None:
    index = build_index(random_rows)
    for entry in enumerate_frequent_itemsets(index, rank_items(index, 5), 5):
        for k in range(1, len(entry.itemset)):
            assert itemset_support(index, entry.itemset[:k]) >= entry.support


def test_base_position_never_decreases(random_rows) -> None:
    index = build_index(random_rows)
    order = rank_items(index, 10)
    positions = [order.position(step.itemset[0]) for step in ConeTraversal(order, index, 10)]
    assert positions == sorted(positions)
