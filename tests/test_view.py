import unittest
from unittest.mock import patch

import pygame

from tag_game.view import PygameClock


class PygameClockTests(unittest.TestCase):
    @patch("tag_game.view.pygame.time.set_timer")
    def test_rounds_reuse_one_event_type(self, set_timer):
        clock = PygameClock()
        event_type = clock.event_type
        ticks = []

        for _ in range(5):
            handle = clock.schedule_interval(500, lambda: ticks.append(1))
            handle.cancel()

        self.assertEqual(clock.event_type, event_type)
        self.assertEqual({c.args[0] for c in set_timer.call_args_list}, {event_type})

    @patch("tag_game.view.pygame.time.set_timer")
    def test_stale_cancel_keeps_new_timer(self, set_timer):
        clock = PygameClock()
        ticks = []
        old = clock.schedule_interval(500, lambda: ticks.append("old"))
        clock.schedule_interval(500, lambda: ticks.append("new"))

        old.cancel()

        self.assertTrue(clock.dispatch(pygame.event.Event(clock.event_type)))
        self.assertEqual(ticks, ["new"])
        set_timer.assert_called_with(clock.event_type, 500)

    @patch("tag_game.view.pygame.time.set_timer")
    def test_other_events_are_not_ticks(self, set_timer):
        clock = PygameClock()
        ticks = []
        clock.schedule_interval(500, lambda: ticks.append(1))

        self.assertFalse(clock.dispatch(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_UP)))
        self.assertEqual(ticks, [])


if __name__ == "__main__":
    unittest.main()
