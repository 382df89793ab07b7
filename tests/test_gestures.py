"""
Test cases for click detection and the gesture session controller with
synthetic landmark sequences.
"""
import asyncio
import unittest
import sys
from pathlib import Path

# Add project root and tests dir to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent))

from airscroll.config import Cfg, ClickConfig
from airscroll.controller_mock import MockController, RecordingSink, dispatch
from airscroll.gestures import ClickGesture, GestureSessionController
from airscroll.types import ControllerProto, GestureMode, GestureSink, Orientation, PoseClass
from synthetic import fist, frame_times, point_hand, scroll_hand


def summarize(result):
    cursor = (result.cursor.x, result.cursor.y) if result.cursor else None
    return (result.mode, result.pose, result.scroll_delta, cursor, result.click is not None)


class TestClickGesture(unittest.TestCase):
    """Test depth push click detection."""

    def setUp(self):
        self.click = ClickGesture(ClickConfig())

    def test_needs_minimum_samples(self):
        self.assertIsNone(self.click.update(0.0, 0.0))
        self.assertIsNone(self.click.update(-1.0, 0.1))

    def test_push_fires_click_and_clears_ring(self):
        self.assertIsNone(self.click.update(0.0, 0.0))
        self.assertIsNone(self.click.update(-0.03, 0.1))
        cmd = self.click.update(-0.07, 0.2)
        self.assertIsNotNone(cmd)
        self.assertEqual(cmd.timestamp, 0.2)
        self.assertEqual(len(self.click.depth_samples), 0)

    def test_small_push_does_not_click(self):
        for i, z in enumerate([0.0, -0.02, -0.04, -0.05, -0.055]):
            self.assertIsNone(self.click.update(z, i * 0.1))

    def test_pulling_back_does_not_click(self):
        for i, z in enumerate([0.0, 0.05, 0.1, 0.2]):
            self.assertIsNone(self.click.update(z, i * 0.1))

    def test_sustained_push_fires_once_per_cooldown(self):
        clicks = []
        for i, t in enumerate(frame_times(11)):
            if self.click.update(-0.05 * i, t) is not None:
                clicks.append(t)
        # Second click only once the full second has elapsed
        self.assertEqual(clicks, [0.25, 1.25])

    def test_cooldown_ignores_push_magnitude(self):
        for i, z in enumerate([0.0, -0.05, -0.1]):
            self.click.update(z, i * 0.1)
        self.assertIsNotNone(self.click.last_click_time)
        for i, z in enumerate([0.0, -2.0, -5.0, -9.0]):
            self.assertIsNone(self.click.update(z, 0.3 + i * 0.1))
        self.assertTrue(self.click.cooldown_active(0.9))

    def test_ring_is_bounded(self):
        for i in range(20):
            self.click.update(0.0, i * 0.1)
        self.assertEqual(len(self.click.depth_samples), 5)


class TestScrollPath(unittest.TestCase):
    """Test the scroll path of the session controller."""

    def setUp(self):
        self.sink = RecordingSink()
        self.controller = GestureSessionController(Cfg(), sink=self.sink)

    def run_scroll(self, n, step, horizontal=True, start=0.0, offset=0):
        results = []
        for i, t in enumerate(frame_times(n, start)):
            hand = scroll_hand(horizontal=horizontal, dy=(offset + i) * step)
            results.append(self.controller.process_frame(hand, t))
        return results

    def test_warm_up_is_idle(self):
        results = self.run_scroll(4, 0.02)
        for r in results:
            self.assertEqual(r.mode, GestureMode.IDLE)
            self.assertTrue(r.warming_up)
            self.assertIsNone(r.scroll)
        self.assertEqual(len(self.controller.state.history), 0)
        self.assertEqual(self.sink.scrolls, [])

    def test_downward_under_horizontal_scrolls(self):
        results = self.run_scroll(12, 0.02)
        # Frames 4..7 fill the history, frame 8 has the fifth sample
        for r in results[4:8]:
            self.assertEqual(r.mode, GestureMode.IDLE)
            self.assertFalse(r.warming_up)
            self.assertEqual(r.scroll_delta, 0.0)
        for r in results[8:]:
            self.assertEqual(r.mode, GestureMode.SCROLLING)
            self.assertAlmostEqual(r.scroll_delta, 0.02, delta=0.001)
            self.assertEqual(r.orientation, Orientation.HORIZONTAL)

    def test_upward_under_horizontal_is_rejected(self):
        results = self.run_scroll(12, -0.02)
        for r in results[8:]:
            self.assertEqual(r.mode, GestureMode.SCROLLING)
            self.assertEqual(r.scroll_delta, 0.0)

    def test_upward_under_vertical_scrolls(self):
        results = self.run_scroll(12, -0.02, horizontal=False)
        for r in results[8:]:
            self.assertEqual(r.mode, GestureMode.SCROLLING)
            self.assertAlmostEqual(r.scroll_delta, -0.02, delta=0.001)

    def test_downward_under_vertical_is_rejected(self):
        results = self.run_scroll(12, 0.02, horizontal=False)
        for r in results[8:]:
            self.assertEqual(r.mode, GestureMode.SCROLLING)
            self.assertEqual(r.scroll_delta, 0.0)

    def test_orientation_flip_suppresses_scroll(self):
        self.run_scroll(9, 0.02)
        self.assertEqual(len(self.controller.state.history), 5)

        results = self.run_scroll(5, 0.0, horizontal=False, start=1.125)
        for r in results[:4]:
            self.assertEqual(r.mode, GestureMode.TRANSITION)
            self.assertTrue(r.in_transition)
            self.assertIsNone(r.scroll)
        self.assertFalse(results[4].in_transition)
        self.assertNotEqual(results[4].mode, GestureMode.TRANSITION)
        self.assertEqual(len(self.controller.state.history), 6)

    def test_flip_during_warm_up_reports_transition(self):
        self.run_scroll(3, 0.0)
        self.controller.process_frame(fist(), 0.375)
        r = self.controller.process_frame(scroll_hand(horizontal=False), 0.5)
        self.assertEqual(r.mode, GestureMode.TRANSITION)
        self.assertTrue(r.warming_up)
        self.assertTrue(r.in_transition)

    def test_history_callback_follows_buffer(self):
        self.run_scroll(10, 0.02)
        self.assertEqual(len(self.sink.histories), 6)
        self.assertEqual([len(h) for h in self.sink.histories], [1, 2, 3, 4, 5, 6])
        self.assertEqual(len(self.sink.scrolls), 6)

    def test_new_session_ignores_earlier_opposite_motion(self):
        # First session moves up, then the hand closes
        self.run_scroll(10, -0.02)
        self.controller.process_frame(fist(), 1.25)

        # Second session: up during warm-up, then steadily down
        offsets = [0.0, -0.02, -0.04, -0.06, -0.04, -0.02, 0.0, 0.02, 0.04]
        start = 1.375
        results = []
        for dy, t in zip(offsets, frame_times(len(offsets), start)):
            results.append(self.controller.process_frame(scroll_hand(dy=dy), t))
            if len(results) == 5:
                history = self.controller.state.snapshot()
                self.assertEqual(len(history), 1)
                self.assertAlmostEqual(history[0].y, 0.26)

        for r in results[:4]:
            self.assertTrue(r.warming_up)
        self.assertEqual(results[-1].mode, GestureMode.SCROLLING)
        self.assertAlmostEqual(results[-1].scroll_delta, 0.02, delta=0.001)

        history = self.controller.state.snapshot()
        self.assertEqual(len(history), 5)
        self.assertTrue(all(p.timestamp >= start + 0.5 for p in history))
        ys = [p.y for p in history]
        self.assertEqual(ys, sorted(ys))

    def test_history_never_exceeds_capacity(self):
        self.run_scroll(80, 0.001)
        self.assertEqual(len(self.controller.state.history), 50)


class TestPointerPath(unittest.TestCase):
    """Test the pointing path of the session controller."""

    def setUp(self):
        self.sink = RecordingSink()
        self.controller = GestureSessionController(Cfg(), sink=self.sink)

    def test_push_sequence_clicks_once(self):
        zs = [0.0, -0.02, -0.05, -0.08, -0.10]
        results = [self.controller.process_frame(point_hand(tip_z=z), t)
                   for z, t in zip(zs, frame_times(5))]

        modes = [r.mode for r in results]
        self.assertEqual(modes, [GestureMode.POINTING] * 3 + [GestureMode.CLICKING, GestureMode.POINTING])
        self.assertEqual(self.sink.clicks, 1)
        self.assertEqual(len(self.sink.cursors), 5)

    def test_cursor_is_mirrored_and_smoothed(self):
        r = self.controller.process_frame(point_hand(), 0.0)
        self.assertAlmostEqual(r.cursor.x, 0.55)
        self.assertAlmostEqual(r.cursor.y, 0.3)

        # A large jump is followed at alpha_max
        r = self.controller.process_frame(point_hand(dx=0.1), 0.125)
        self.assertAlmostEqual(r.cursor.x, 1 - (0.45 + 0.08))
        self.assertAlmostEqual(r.cursor.y, 0.3)

    def test_cursor_stays_in_unit_square(self):
        r = self.controller.process_frame(point_hand(dx=-0.6, dy=-0.45), 0.0)
        self.assertEqual(r.cursor.x, 1.0)
        self.assertEqual(r.cursor.y, 0.0)

    def test_no_scroll_events_while_pointing(self):
        for t in frame_times(6):
            self.controller.process_frame(point_hand(), t)
        self.assertEqual(self.sink.scrolls, [])
        self.assertEqual(self.sink.histories, [])


class TestSessionResets(unittest.TestCase):
    """Test state resets on pose class boundaries."""

    def setUp(self):
        self.sink = RecordingSink()
        self.controller = GestureSessionController(Cfg(), sink=self.sink)

    def scroll_frames(self, n, start=0.0):
        for i, t in enumerate(frame_times(n, start)):
            self.controller.process_frame(scroll_hand(dy=i * 0.02), t)

    def test_no_hand_and_indeterminate_modes(self):
        r = self.controller.process_frame(None, 0.0)
        self.assertEqual(r.mode, GestureMode.IDLE)
        self.assertEqual(r.pose, PoseClass.NO_HAND)
        self.assertEqual(r.confidence, 0.0)

        r = self.controller.process_frame(fist(), 0.125)
        self.assertEqual(r.mode, GestureMode.HAND_DETECTED)
        self.assertEqual(r.confidence, 0.5)
        self.assertEqual(r.message, "Hand detected")

    def test_malformed_frame_is_no_hand(self):
        r = self.controller.process_frame(scroll_hand()[:12], 0.0)
        self.assertEqual(r.mode, GestureMode.IDLE)
        self.assertEqual(r.pose, PoseClass.NO_HAND)

    def test_pointing_clears_scroll_state(self):
        self.scroll_frames(9)
        state = self.controller.state
        self.assertTrue(state.scroll_active)
        self.assertEqual(len(state.history), 5)

        self.controller.process_frame(point_hand(), 1.125)
        self.assertFalse(state.scroll_active)
        self.assertEqual(len(state.history), 0)
        self.assertIsNone(state.centroid_filter.value)

        # Back to scrolling starts a fresh warm-up
        r = self.controller.process_frame(scroll_hand(), 1.25)
        self.assertEqual(r.mode, GestureMode.IDLE)
        self.assertTrue(r.warming_up)
        self.assertEqual(self.controller.state.gesture_start, 1.25)

    def test_scrolling_clears_pointer_state(self):
        for i, t in enumerate(frame_times(2)):
            self.controller.process_frame(point_hand(tip_z=-0.01 * i), t)
        state = self.controller.state
        self.assertTrue(state.pointer_active)

        self.controller.process_frame(scroll_hand(), 0.25)
        self.assertFalse(state.pointer_active)
        self.assertEqual(len(state.click.depth_samples), 0)

        # Pointer filter restarts cold
        r = self.controller.process_frame(point_hand(dx=0.2), 0.375)
        self.assertAlmostEqual(r.cursor.x, 1 - 0.65)

    def test_hand_lost_clears_everything(self):
        self.scroll_frames(9)
        self.controller.process_frame(None, 1.125)
        state = self.controller.state
        self.assertFalse(state.scroll_active)
        self.assertFalse(state.pointer_active)
        self.assertEqual(state.snapshot(), ())

    def test_only_one_path_active(self):
        sequence = [scroll_hand(), scroll_hand(), point_hand(), fist(), scroll_hand(), point_hand()]
        for hand, t in zip(sequence, frame_times(len(sequence))):
            self.controller.process_frame(hand, t)
            state = self.controller.state
            self.assertFalse(state.scroll_active and state.pointer_active)

    def test_one_mode_callback_per_frame(self):
        sequence = [None, fist(), scroll_hand(), point_hand(), None]
        for hand, t in zip(sequence, frame_times(len(sequence))):
            self.controller.process_frame(hand, t)
        self.assertEqual(len(self.sink.modes), len(sequence))

    def test_backwards_timestamp_is_logged(self):
        self.controller.process_frame(None, 1.0)
        with self.assertLogs("airscroll.gestures", level="WARNING"):
            self.controller.process_frame(None, 0.5)

    def test_resets_only_at_session_boundaries(self):
        state = self.controller.state
        self.controller.process_frame(scroll_hand(), 0.0)
        pointer_filter = state.pointer_filter
        history = state.history
        for t in frame_times(3, 0.125):
            self.controller.process_frame(scroll_hand(), t)
            self.assertIs(state.pointer_filter, pointer_filter)
            self.assertIs(state.history, history)

        with self.assertLogs("airscroll.gestures", level="DEBUG") as logs:
            self.controller.process_frame(point_hand(), 0.5)
        self.assertTrue(any("Reset scroll session" in line for line in logs.output))
        self.assertFalse(any("Reset pointer session" in line for line in logs.output))

        history = state.history
        pointer_filter = state.pointer_filter
        self.controller.process_frame(point_hand(), 0.625)
        self.assertIs(state.history, history)
        self.assertIs(state.pointer_filter, pointer_filter)

        with self.assertLogs("airscroll.gestures", level="DEBUG") as logs:
            self.controller.process_frame(fist(), 0.75)
        self.assertTrue(any("Reset pointer session" in line for line in logs.output))
        self.assertFalse(any("Reset scroll session" in line for line in logs.output))

    def test_resetting_is_part_of_vocabulary(self):
        self.assertIn(GestureMode.RESETTING, list(GestureMode))
        self.assertEqual(GestureMode("resetting"), GestureMode.RESETTING)


class TestDeterminism(unittest.TestCase):
    """Same input, same output."""

    def build_sequence(self):
        frames = []
        for i in range(12):
            frames.append(scroll_hand(dy=i * 0.015))
        frames.append(None)
        for i in range(6):
            frames.append(point_hand(dx=i * 0.01, tip_z=-0.03 * i))
        frames.append(fist())
        for i in range(10):
            frames.append(scroll_hand(horizontal=False, dy=-i * 0.02))
        return frames

    def test_replay_after_reset_is_identical(self):
        controller = GestureSessionController(Cfg())
        frames = self.build_sequence()
        times = frame_times(len(frames))

        first = [summarize(controller.process_frame(f, t)) for f, t in zip(frames, times)]
        controller.reset()
        second = [summarize(controller.process_frame(f, t)) for f, t in zip(frames, times)]

        self.assertEqual(first, second)
        self.assertIn(GestureMode.SCROLLING, [s[0] for s in first])
        self.assertIn(GestureMode.CLICKING, [s[0] for s in first])


class TestMockController(unittest.TestCase):
    """Test command dispatch to controllers."""

    def test_protocols(self):
        self.assertIsInstance(MockController(), ControllerProto)
        self.assertIsInstance(RecordingSink(), GestureSink)

    def test_dispatch_skips_zero_scroll(self):
        controller = MockController()
        session = GestureSessionController(Cfg())
        for i, t in enumerate(frame_times(10)):
            result = session.process_frame(scroll_hand(dy=-i * 0.02), t)
            asyncio.run(dispatch(controller, result))
        # Upward under horizontal orientation never scrolls
        self.assertEqual(controller.scroll_count, 0)

    def test_dispatch_pointer_commands(self):
        controller = MockController()
        session = GestureSessionController(Cfg())
        for z, t in zip([0.0, -0.05, -0.1], frame_times(3)):
            asyncio.run(dispatch(controller, session.process_frame(point_hand(tip_z=z), t)))
        self.assertEqual(controller.cursor_count, 3)
        self.assertEqual(controller.click_count, 1)

        controller.reset_counters()
        self.assertEqual(controller.click_count, 0)


if __name__ == '__main__':
    unittest.main()
