import unittest

from tag_game.engine import (
    Actor, Role, Mode, Direction, RoundState, ChaseAgent, GreedyPolicy, RandomPolicy,
    HumanPolicy, PolicyFactory
)


def playing_state(*actors, board_size=10):
    return RoundState(
        board_size=board_size,
        mode=Mode.PLAYING,
        actors=list(actors),
        human_role=actors[0].role
    )


class ChaseAgentTests(unittest.TestCase):
    def setUp(self):
        self.agent = ChaseAgent()

    def test_seeker_step_points_toward_target(self):
        seeker = Actor(1, 3, 3, Role.SEEKER)
        self.assertEqual(self.agent.step(seeker, (5, 1)), (1, -1))
        self.assertEqual(self.agent.move(seeker, (5, 1), 10).position, (4, 2))

    def test_runner_step_points_away_from_target(self):
        runner = Actor(1, 3, 3, Role.RUNNER)
        self.assertEqual(self.agent.step(runner, (5, 1)), (-1, 1))

    def test_aligned_axis_does_not_move(self):
        seeker = Actor(1, 4, 7, Role.SEEKER)
        runner = Actor(2, 4, 7, Role.RUNNER)
        self.assertEqual(self.agent.step(seeker, (4, 2)), (0, -1))
        self.assertEqual(self.agent.step(runner, (4, 2)), (0, 1))

    def test_move_keeps_role_and_id(self):
        runner = Actor(3, 0, 0, Role.RUNNER)
        moved = self.agent.move(runner, (5, 5), 10)
        self.assertEqual(moved, Actor(3, 0, 0, Role.RUNNER))


class PolicyTests(unittest.TestCase):
    def test_idle_policy_never_moves(self):
        state = playing_state(Actor(0, 0, 0, Role.SEEKER), Actor(1, 5, 5, Role.RUNNER))
        self.assertIsNone(HumanPolicy().choose_direction(state))

    def test_random_policy_is_reproducible(self):
        state = playing_state(Actor(0, 0, 0, Role.SEEKER), Actor(1, 5, 5, Role.RUNNER))
        first = [RandomPolicy(seed=3).choose_direction(state) for _ in range(5)]
        second = [RandomPolicy(seed=3).choose_direction(state) for _ in range(5)]
        self.assertEqual(first, second)
        self.assertTrue(all(isinstance(d, Direction) for d in first))

    def test_greedy_seeker_chases_nearest_runner_on_longer_axis(self):
        state = playing_state(
            Actor(0, 2, 2, Role.SEEKER),
            Actor(1, 9, 9, Role.RUNNER),
            Actor(2, 3, 6, Role.RUNNER),
        )
        self.assertEqual(GreedyPolicy().choose_direction(state), Direction.DOWN)

    def test_greedy_runner_flees_along_open_axis_at_wall(self):
        state = playing_state(
            Actor(0, 9, 5, Role.RUNNER),
            Actor(1, 6, 4, Role.SEEKER),
        )
        self.assertEqual(GreedyPolicy().choose_direction(state), Direction.DOWN)

    def test_greedy_runner_cornered_still_moves(self):
        state = playing_state(
            Actor(0, 9, 9, Role.RUNNER),
            Actor(1, 7, 7, Role.SEEKER),
        )
        self.assertIn(GreedyPolicy(seed=1).choose_direction(state), (Direction.UP, Direction.LEFT))

    def test_greedy_without_opponents_stays(self):
        state = playing_state(Actor(0, 4, 4, Role.SEEKER))
        self.assertIsNone(GreedyPolicy().choose_direction(state))


class PolicyFactoryTests(unittest.TestCase):
    def test_lists_and_creates_policies(self):
        factory = PolicyFactory()
        self.assertEqual(factory.list_policies(), ["idle", "random", "greedy"])
        self.assertIsInstance(factory.create_policy("greedy"), GreedyPolicy)

    def test_unknown_policy_raises(self):
        with self.assertRaises(ValueError):
            PolicyFactory().create_policy("telepathic")


if __name__ == "__main__":
    unittest.main()
