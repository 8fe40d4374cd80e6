"""
Unit tests for timing functions, easing curves and frame progress helpers.
Run from project root: python -m pytest tests/ -v
Or: python -m unittest discover -s tests -p "test_*.py" -v
"""
import sys
import unittest
from pathlib import Path

# Project root on path so "from scenestack. ..." works
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


class TestTimingBoundaries(unittest.TestCase):
    """offset <= 0 -> 0, offset >= duration -> 1, for every named timing."""

    def test_every_named_timing_hits_boundaries(self):
        from scenestack.timing import get_timing, timing_names

        for name in timing_names():
            timing = get_timing(name)
            with self.subTest(timing=name):
                self.assertEqual(timing(0, 15), 0.0)
                self.assertEqual(timing(-3, 15), 0.0)
                self.assertEqual(timing(15, 15), 1.0)
                self.assertEqual(timing(40, 15), 1.0)

    def test_zero_duration_window(self):
        """Offset 0 wins over duration 0: first rule applies first."""
        from scenestack.timing import LINEAR

        self.assertEqual(LINEAR(0, 0), 0.0)
        self.assertEqual(LINEAR(1, 0), 1.0)

    def test_linear_last_frame_below_one(self):
        from scenestack.timing import LINEAR

        self.assertAlmostEqual(LINEAR(5, 15), 1 / 3)
        self.assertLess(LINEAR(14, 15), 1.0)

    def test_eased_uses_named_curve(self):
        from scenestack.timing import EasedTiming
        from scenestack.timing.easing import cubic_in_out

        timing = EasedTiming("ease_in_out")
        self.assertAlmostEqual(timing(3, 10), cubic_in_out(0.3))
        self.assertEqual(timing, EasedTiming("ease_in_out"))

    def test_overshooting_curves_not_clamped(self):
        """Curves listed as overshooting leave [0, 1] inside the window; the rest stay inside."""
        from scenestack.timing import EASINGS, get_timing
        from scenestack.timing.easing import OVERSHOOTING

        self.assertTrue(OVERSHOOTING <= set(EASINGS))
        for name in EASINGS:
            timing = get_timing(name)
            values = [timing(i, 50) for i in range(1, 50)]
            with self.subTest(name=name):
                if name in OVERSHOOTING:
                    self.assertTrue(min(values) < 0.0 or max(values) > 1.0)
                else:
                    self.assertGreaterEqual(min(values), -1e-6)
                    self.assertLessEqual(max(values), 1.0 + 1e-6)
        self.assertGreater(max(get_timing("back_out")(i, 30) for i in range(1, 30)), 1.0)
        self.assertLess(min(get_timing("back_in")(i, 30) for i in range(1, 30)), 0.0)

    def test_unknown_timing_name(self):
        from scenestack.timing import get_timing

        with self.assertRaises(KeyError):
            get_timing("wobble")

    def test_register_timing(self):
        from scenestack.timing import EasedTiming, get_timing, register_timing, timing_names

        register_timing("test_quarter", lambda fps: EasedTiming("test_quarter", curve=lambda t: t * 0.25))
        self.assertIn("test_quarter", timing_names())
        self.assertAlmostEqual(get_timing("test_quarter")(5, 10), 0.125)


class TestSpringTiming(unittest.TestCase):
    def test_underdamped_overshoots(self):
        from scenestack.timing import SpringTiming

        spring = SpringTiming(damping=5, stiffness=100, mass=1, fps=30)
        values = [spring(i, 120) for i in range(1, 120)]
        self.assertGreater(max(values), 1.0)

    def test_overshoot_clamping(self):
        from scenestack.timing import SpringTiming

        spring = SpringTiming(damping=5, stiffness=100, overshoot_clamping=True)
        self.assertTrue(all(spring(i, 120) <= 1.0 for i in range(120)))

    def test_window_end_cuts_to_one(self):
        """A slow spring has not arrived at the last frame; the window end is exactly 1."""
        from scenestack.timing import SpringTiming

        spring = SpringTiming(damping=40, stiffness=20)
        self.assertLess(spring(9, 10), 0.9)
        self.assertEqual(spring(10, 10), 1.0)

    def test_critically_and_over_damped_monotonic(self):
        from scenestack.timing import SpringTiming

        for damping in (20.0, 60.0):  # zeta = 1 and zeta = 3 at stiffness 100
            spring = SpringTiming(damping=damping, stiffness=100)
            values = [spring(i, 60) for i in range(60)]
            with self.subTest(damping=damping):
                self.assertTrue(all(b >= a for a, b in zip(values, values[1:])))
                self.assertTrue(all(v <= 1.0 for v in values))

    def test_fit_to_duration_settles_at_window_end(self):
        from scenestack.timing import SpringTiming

        spring = SpringTiming(damping=20, stiffness=80, fit_to_duration=True)
        self.assertGreater(spring.settle_frames, 0)
        self.assertAlmostEqual(spring(29, 30), 1.0, delta=0.05)

    def test_invalid_parameters(self):
        from scenestack.timing import SpringTiming

        with self.assertRaises(ValueError):
            SpringTiming(stiffness=0)
        with self.assertRaises(ValueError):
            SpringTiming(damping=-1)

    def test_spring_presets_registered(self):
        from scenestack.timing import SpringTiming, get_timing

        for name in ("spring", "spring_smooth", "spring_snappy", "spring_expo"):
            timing = get_timing(name, fps=24)
            with self.subTest(name=name):
                self.assertIsInstance(timing, SpringTiming)
                self.assertEqual(timing.fps, 24)

    def test_short_timing_names_are_springs(self):
        """smooth/snappy/expo are the spring presets; linear stays linear."""
        from scenestack.timing import LinearTiming, SpringTiming, get_timing

        expected = {
            "spring": (200.0, 100.0),
            "smooth": (20.0, 80.0),
            "snappy": (30.0, 300.0),
            "expo": (15.0, 100.0),
        }
        for name, (damping, stiffness) in expected.items():
            timing = get_timing(name, fps=30)
            with self.subTest(name=name):
                self.assertIsInstance(timing, SpringTiming)
                self.assertEqual(timing.damping, damping)
                self.assertEqual(timing.stiffness, stiffness)
                self.assertTrue(timing.fit_to_duration)
                self.assertEqual(timing(0, 20), 0.0)
                self.assertEqual(timing(20, 20), 1.0)
        self.assertIsInstance(get_timing("linear"), LinearTiming)
        self.assertIsInstance(get_timing("Smooth"), SpringTiming)


class TestEasing(unittest.TestCase):
    def test_cubic_bezier_endpoints_and_linear(self):
        from scenestack.timing import cubic_bezier

        curve = cubic_bezier(0.25, 0.1, 0.25, 1.0)
        self.assertAlmostEqual(curve(0.0), 0.0)
        self.assertAlmostEqual(curve(1.0), 1.0)
        straight = cubic_bezier(0.0, 0.0, 1.0, 1.0)
        for t in (0.1, 0.37, 0.5, 0.9):
            self.assertAlmostEqual(straight(t), t, places=4)

    def test_bounce_never_exceeds_one(self):
        from scenestack.timing.easing import bounce_out

        self.assertTrue(all(bounce_out(i / 100) <= 1.0 + 1e-9 for i in range(101)))

    def test_get_easing_normalizes_name(self):
        from scenestack.timing import get_easing
        from scenestack.timing.easing import cubic_in_out

        self.assertIs(get_easing("Ease-In-Out"), cubic_in_out)
        with self.assertRaises(KeyError):
            get_easing("nope")


class TestProgressHelpers(unittest.TestCase):
    def test_frame_progress(self):
        from scenestack.timing import frame_progress

        self.assertEqual(frame_progress(0, start_frame=10, duration_in_frames=20), 0.0)
        self.assertAlmostEqual(frame_progress(20, start_frame=10, duration_in_frames=20), 0.5)
        self.assertEqual(frame_progress(100, start_frame=10, duration_in_frames=20), 1.0)
        self.assertAlmostEqual(frame_progress(50, start_frame=10, duration_in_frames=20, clamp=False), 2.0)

    def test_chain_enter_hold_exit(self):
        from scenestack.timing import ChainSegment, chain

        segments = [ChainSegment(10, "enter"), ChainSegment(20, "hold"), ChainSegment(10, "exit")]
        state = chain(15, segments)
        self.assertEqual(state.active_label, "hold")
        self.assertEqual(state.segment("enter"), 1.0)
        self.assertAlmostEqual(state.segment("hold"), 0.25)
        self.assertEqual(state.segment("exit"), 0.0)
        self.assertEqual(state.segment("missing"), 0.0)
        self.assertFalse(state.is_complete)
        done = chain(40, segments)
        self.assertTrue(done.is_complete)
        self.assertEqual(done.active_index, 2)
        self.assertEqual(done.progress, 1.0)

    def test_stagger(self):
        from scenestack.timing import stagger
        from scenestack.timing.easing import linear

        state = stagger(10, 3, delay=5, duration_in_frames=10, easing=linear)
        self.assertEqual(state.progress, (1.0, 0.5, 0.0))
        self.assertEqual(state.active_index, 1)
        self.assertFalse(state.is_complete)
        self.assertTrue(stagger(100, 3).is_complete)


if __name__ == "__main__":
    unittest.main()
