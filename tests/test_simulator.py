import unittest

from tag_game import Simulator, GameConfig
from tag_game.simulator import BatchResult, SimulationResult


class SimulatorTests(unittest.TestCase):
    def test_idle_runner_is_eventually_tagged(self):
        sim = Simulator(GameConfig(max_ticks=50))
        result, events = sim.run_single_round(False, "idle", seed=5, log_actions=True)

        self.assertEqual(result.outcome, "tagged")
        self.assertEqual(result.human_moves, 0)
        # Un Cercatore raggiunge l'angolo in al più N-1 tick
        self.assertLessEqual(result.ticks, 9)
        self.assertEqual(events[0]["type"], "round_start")
        self.assertEqual(events[-1]["type"], "round_end")

    def test_round_aborted_after_max_ticks(self):
        # Cercatore fermo contro Fuggitivi che scappano negli angoli
        sim = Simulator(GameConfig(max_ticks=30))
        results = [sim.run_single_round(True, "idle", seed=s)[0] for s in range(10)]

        for r in results:
            self.assertIn(r.outcome, ("caught", "aborted"))
            self.assertLessEqual(r.ticks, 30)
        self.assertTrue(any(r.outcome == "aborted" for r in results))

    def test_same_seed_gives_same_round(self):
        sim = Simulator()
        first, _ = sim.run_single_round(True, "random", seed=11)
        second, _ = sim.run_single_round(True, "random", seed=11)
        self.assertEqual(
            (first.outcome, first.ticks, first.human_moves),
            (second.outcome, second.ticks, second.human_moves)
        )

    def test_unknown_policy_raises(self):
        with self.assertRaises(ValueError):
            Simulator().run_single_round(True, "oracle")

    def test_batch_kpis(self):
        sim = Simulator(GameConfig(max_ticks=40))
        batch = sim.run_batch(False, "greedy", num_rounds=20, base_seed=0, verbose=False)

        self.assertEqual(len(batch.results), 20)
        kpis = batch.kpis
        outcomes = kpis["outcomes"]
        self.assertAlmostEqual(
            outcomes["caught_rate"] + outcomes["tagged_rate"] + outcomes["aborted_rate"], 1.0
        )
        self.assertEqual(outcomes["caught_rate"], 0)
        self.assertLessEqual(kpis["duration"]["max_ticks"], 40)
        self.assertEqual(kpis["performance"]["total_rounds"], 20)

    def test_kpis_of_empty_batch(self):
        batch = BatchResult(total_rounds=0, human_role="runner", policy="idle")
        self.assertEqual(Simulator().calculate_kpis(batch), {})

    def test_kpis_count_outcomes(self):
        def make(outcome, ticks, overlap=False):
            return SimulationResult(
                round_id="x", human_role="seeker", policy="idle", outcome=outcome,
                ticks=ticks, human_moves=0, spawn_overlap=overlap, duration_ms=1.0
            )

        batch = BatchResult(total_rounds=4, human_role="seeker", policy="idle", results=[
            make("caught", 0, overlap=True),
            make("caught", 4),
            make("aborted", 10),
            make("tagged", 2),
        ])
        kpis = Simulator().calculate_kpis(batch)

        self.assertEqual(kpis["outcomes"]["caught_rate"], 0.5)
        self.assertEqual(kpis["outcomes"]["aborted_rate"], 0.25)
        self.assertEqual(kpis["duration"]["avg_ticks"], 4)
        self.assertEqual(kpis["duration"]["avg_ticks_to_contact"], 2)
        self.assertEqual(kpis["duration"]["avg_seconds"], 2.0)
        self.assertEqual(kpis["spawn"]["spawn_overlap_rate"], 0.25)


if __name__ == "__main__":
    unittest.main()
