import unittest

from tag_game.engine import ManualClock, ManualInput


class ManualClockTests(unittest.TestCase):
    def test_fires_once_per_elapsed_interval(self):
        clock = ManualClock()
        calls = []
        clock.schedule_interval(500, lambda: calls.append(clock.now_ms))

        clock.advance(1600)

        self.assertEqual(calls, [500, 1000, 1500])
        self.assertEqual(clock.now_ms, 1600)

    def test_cancel_is_idempotent_and_stops_callbacks(self):
        clock = ManualClock()
        calls = []
        handle = clock.schedule_interval(100, lambda: calls.append(1))

        clock.advance(100)
        handle.cancel()
        handle.cancel()
        clock.advance(1000)

        self.assertEqual(calls, [1])
        self.assertEqual(clock.active_timers, 0)

    def test_callback_may_cancel_its_own_timer(self):
        clock = ManualClock()
        calls = []

        def callback():
            calls.append(clock.now_ms)
            handle.cancel()

        handle = clock.schedule_interval(250, callback)
        clock.advance(2000)

        self.assertEqual(calls, [250])

    def test_rejects_non_positive_interval(self):
        with self.assertRaises(ValueError):
            ManualClock().schedule_interval(0, lambda: None)


class ManualInputTests(unittest.TestCase):
    def test_listeners_receive_keys_until_removed(self):
        source = ManualInput()
        keys = []
        source.add_listener(keys.append)
        source.add_listener(keys.append)

        source.press("ArrowUp")
        source.remove_listener(keys.append)
        source.press("ArrowDown")

        self.assertEqual(keys, ["ArrowUp"])
        self.assertEqual(source.listeners, [])


if __name__ == "__main__":
    unittest.main()
