from __future__ import annotations

import random
import unittest
from collections import Counter

from fairlottery.exceptions import DrawInProgress, NoCandidates
from fairlottery.models import Order
from fairlottery.prize_draw import (
    DrawingEngine,
    DrawState,
    congratulation_message,
    eligible,
    remaining_chances,
)
from fairlottery.prize_draw.messages import TEMPLATES


def _order(index: int, *, is_winner: bool = False, created_by=None) -> Order:
    return Order(
        id=f"o-{index}",
        client_name=f"Client {index}",
        order_value=float(index),
        ticket_number=f"#{index:03d}-1000",
        created_at=index,
        is_winner=is_winner,
        created_by=created_by,
    )


class EligibilityTests(unittest.TestCase):
    def test_excludes_exactly_the_winners(self):
        orders = [_order(1), _order(2, is_winner=True), _order(3), _order(4, is_winner=True)]
        candidates = eligible(orders)
        self.assertEqual([o.id for o in candidates], ["o-1", "o-3"])
        self.assertEqual(remaining_chances(orders), 2)

    def test_empty_ledger(self):
        self.assertEqual(eligible([]), [])
        self.assertEqual(remaining_chances([]), 0)


class DrawingEngineTests(unittest.TestCase):
    def test_single_candidate_always_wins(self):
        engine = DrawingEngine(rng=random.Random(1))
        only = _order(1)
        for _ in range(20):
            self.assertEqual(engine.select([only]), only)
            engine.settle()

    def test_empty_candidates_refused_without_state_change(self):
        engine = DrawingEngine()
        with self.assertRaises(NoCandidates):
            engine.select([])
        self.assertIs(engine.state, DrawState.IDLE)
        self.assertIsNone(engine.last_result)

    def test_state_machine_and_single_flight(self):
        engine = DrawingEngine(rng=random.Random(5))
        candidates = [_order(1), _order(2)]
        self.assertIs(engine.state, DrawState.IDLE)

        winner = engine.select(candidates)
        self.assertIs(engine.state, DrawState.SPINNING)
        self.assertTrue(engine.is_spinning)
        with self.assertRaises(DrawInProgress):
            engine.select(candidates)

        self.assertEqual(engine.settle(), winner)
        self.assertIs(engine.state, DrawState.SETTLED)
        self.assertEqual(engine.last_result.winner, winner)
        self.assertEqual(engine.last_result.candidate_count, 2)
        self.assertEqual(candidates[engine.last_result.index], winner)

        engine.select(candidates)
        engine.reset()
        self.assertIs(engine.state, DrawState.IDLE)
        self.assertIsNone(engine.last_result)

    def test_settle_without_selection_fails(self):
        with self.assertRaises(RuntimeError):
            DrawingEngine().settle()

    def test_never_returns_a_previous_winner(self):
        orders = [_order(1), _order(2, is_winner=True), _order(3)]
        engine = DrawingEngine(rng=random.Random(9))
        candidates = eligible(orders)
        self.assertEqual(len(candidates), 2)
        for _ in range(200):
            winner = engine.select(candidates)
            engine.settle()
            self.assertIn(winner.id, {"o-1", "o-3"})

    def test_selection_is_uniform(self):
        k = 4
        trials = 20_000
        candidates = [_order(i) for i in range(k)]
        engine = DrawingEngine(rng=random.Random(20240601))
        counts: Counter[str] = Counter()
        for _ in range(trials):
            counts[engine.select(candidates).id] += 1
            engine.settle()

        expected = trials / k
        chi_square = sum((counts[c.id] - expected) ** 2 / expected for c in candidates)
        # Critical value for 3 degrees of freedom at p = 0.001.
        self.assertLess(chi_square, 16.27)
        self.assertEqual(sum(counts.values()), trials)

    def test_select_index_range(self):
        engine = DrawingEngine(rng=random.Random(2))
        seen = {engine.select_index(3) for _ in range(300)}
        self.assertEqual(seen, {0, 1, 2})
        with self.assertRaises(NoCandidates):
            engine.select_index(0)


class CongratulationMessageTests(unittest.TestCase):
    def test_fills_in_client_and_exhibitor(self):
        order = _order(1, created_by="Stoisko 7")
        message = congratulation_message(order, random.Random(4))
        self.assertIn("Client 1", message)
        self.assertIn("Stoisko 7", message)
        self.assertNotIn("{", message)

    def test_unknown_exhibitor_fallback(self):
        message = congratulation_message(_order(2), random.Random(4))
        self.assertIn("Dostawca", message)

    def test_braces_in_names_are_kept_verbatim(self):
        order = _order(3, created_by="{client}")
        order.client_name = "{exhibitor}"
        for seed in range(len(TEMPLATES)):
            message = congratulation_message(order, random.Random(seed))
            self.assertIn("{exhibitor}", message)
            self.assertIn("{client}", message)


if __name__ == "__main__":
    unittest.main()
