"""
Unit tests for presentations: symmetry at the window ends, determinism, registry.
Run from project root: python -m pytest tests/ -v
"""
import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Non-default params worth checking on top of each presentation's defaults
_VARIANTS = {
    "slide": [{"towards": t} for t in ("left", "right", "up", "down")],
    "push": [{"towards": "up"}],
    "slide_over": [{"towards": "right"}],
    "whip_pan": [{"towards": "down", "max_blur": 10.0}],
    "wipe": [{"towards": t} for t in ("left", "right", "up", "down")],
    "flip": [{"axis": "vertical"}],
    "directional_warp": [{"towards": "right"}],
    "zoom_in": [{"intensity": 1.0}],
    "zoom_out": [{"intensity": 1.0}],
    "glitch": [{"intensity": 0.5, "steps": 8}, {"seed": 3}],
    "dissolve": [{"softness": 0.0}, {"softness": 0.2, "seed": 7, "grain": 1}],
    "pixelate": [{"size": 4}, {"size": 30}],
    "zoom": [{"intensity": 1.0}],
}


class TestSymmetryContract(unittest.TestCase):
    """entering@0 hidden, entering@1 visible, exiting@0 visible, exiting@1 hidden."""

    def test_every_builtin(self):
        from scenestack.presentations import default_registry
        from scenestack.sequence import Direction

        registry = default_registry()
        self.assertGreaterEqual(len(registry), 21)
        for name in registry.names():
            for params in [{}] + _VARIANTS.get(name, []):
                with self.subTest(presentation=name, params=params):
                    self.assertTrue(registry.apply(name, 0.0, Direction.ENTERING, params).is_hidden())
                    self.assertTrue(registry.apply(name, 1.0, Direction.ENTERING, params).is_fully_visible())
                    self.assertTrue(registry.apply(name, 0.0, Direction.EXITING, params).is_fully_visible())
                    self.assertTrue(registry.apply(name, 1.0, Direction.EXITING, params).is_hidden())

    def test_deterministic(self):
        from scenestack.presentations import default_registry
        from scenestack.sequence import Direction

        registry = default_registry()
        for name in registry.names():
            for direction in (Direction.ENTERING, Direction.EXITING):
                for p in (0.1, 0.33, 0.5, 0.77):
                    with self.subTest(presentation=name, direction=direction, progress=p):
                        self.assertEqual(
                            registry.apply(name, p, direction),
                            registry.apply(name, p, direction),
                        )

    def test_steady_is_untouched(self):
        from scenestack.presentations import StyleDescriptor, default_registry

        registry = default_registry()
        self.assertEqual(registry.apply("wipe", 0.3, "steady"), StyleDescriptor())

    def test_overshoot_progress_does_not_break_opacity(self):
        from scenestack.presentations import default_registry
        from scenestack.sequence import Direction

        registry = default_registry()
        for name in ("fade", "zoom_in", "mask_reveal", "clock_wipe", "zoom", "pixelate", "dissolve"):
            style = registry.apply(name, 1.15, Direction.ENTERING)
            with self.subTest(presentation=name):
                self.assertLessEqual(style.opacity, 1.0)
                self.assertGreaterEqual(style.opacity, 0.0)

    def test_slide_moves_towards_heading(self):
        from scenestack.presentations import default_registry
        from scenestack.sequence import Direction

        registry = default_registry()
        exiting = registry.apply("slide", 0.5, Direction.EXITING, {"towards": "left"})
        entering = registry.apply("slide", 0.5, Direction.ENTERING, {"towards": "left"})
        self.assertAlmostEqual(exiting.translate_x, -0.5)
        self.assertAlmostEqual(entering.translate_x, 0.5)


    def test_dissolve_layers_partition_the_frame(self):
        from scenestack.presentations import ClipNoise, default_registry
        from scenestack.sequence import Direction

        registry = default_registry()
        params = {"seed": 4, "softness": 0.08}
        for p in (0.2, 0.5, 0.8):
            entering = registry.apply("dissolve", p, Direction.ENTERING, params).clip
            exiting = registry.apply("dissolve", p, Direction.EXITING, params).clip
            with self.subTest(progress=p):
                self.assertIsInstance(entering, ClipNoise)
                self.assertEqual((entering.low, entering.seed), (0.0, 4))
                self.assertEqual(entering.high, exiting.low)
                self.assertEqual(exiting.high, 1.0)
        # softness holds the window ends still
        self.assertTrue(registry.apply("dissolve", 0.05, Direction.ENTERING, params).is_hidden())
        self.assertTrue(registry.apply("dissolve", 0.95, Direction.ENTERING, params).is_fully_visible())
        self.assertAlmostEqual(
            registry.apply("dissolve", 0.5, Direction.ENTERING, {"softness": 0.2}).clip.high, 0.5
        )

    def test_pixelate_block_size_peaks_mid_window(self):
        from scenestack.presentations import default_registry
        from scenestack.sequence import Direction

        registry = default_registry()
        mid = registry.apply("pixelate", 0.5, Direction.EXITING, {"size": 12})
        self.assertAlmostEqual(mid.pixel_size, 12.0)
        self.assertAlmostEqual(mid.scale_x, 1 - 0.024)
        self.assertAlmostEqual(mid.overlay.opacity, 0.5)
        early = registry.apply("pixelate", 0.1, Direction.EXITING, {"size": 12})
        self.assertLess(early.pixel_size, mid.pixel_size)
        self.assertEqual(registry.apply("pixelate", 0.5, Direction.EXITING, {"size": 100}).scale_x, 0.9)

    def test_zoom_scales_both_sides_past_the_frame(self):
        from scenestack.presentations import default_registry
        from scenestack.sequence import Direction

        registry = default_registry()
        exiting = registry.apply("zoom", 0.5, Direction.EXITING, {"intensity": 0.4})
        entering = registry.apply("zoom", 0.25, Direction.ENTERING, {"intensity": 0.4})
        self.assertAlmostEqual(exiting.scale_x, 1.2)
        self.assertAlmostEqual(exiting.opacity, 0.5)
        self.assertAlmostEqual(entering.scale_y, 1.3)
        self.assertAlmostEqual(entering.overlay.opacity, 0.75)


class TestRegistry(unittest.TestCase):
    def test_unknown_presentation(self):
        from scenestack.presentations import PresentationRegistry
        from scenestack.sequence import UnknownPresentation

        registry = PresentationRegistry()
        with self.assertRaises(UnknownPresentation):
            registry.get("fade")

    def test_register_and_duplicate(self):
        from scenestack.presentations import PresentationRegistry, StyleDescriptor

        def dim(progress, direction):
            return StyleDescriptor(opacity=progress if direction == "entering" else 1 - progress)

        registry = PresentationRegistry()
        registry.register("dim", dim)
        self.assertIn("dim", registry)
        with self.assertRaises(ValueError):
            registry.register("dim", dim)
        registry.register("dim", dim, replace=True)
        self.assertEqual(registry.names(), ["dim"])

    def test_copy_is_independent(self):
        from scenestack.presentations import StyleDescriptor, default_registry

        registry = default_registry().copy()
        registry.register("test_only", lambda p, d: StyleDescriptor())
        self.assertNotIn("test_only", default_registry())

    def test_decorator_with_custom_registry_used_by_builder(self):
        from scenestack.presentations import PresentationRegistry, StyleDescriptor, default_registry, presentation
        from scenestack.sequence import SceneSpec, TransitionSpec, build, resolve

        registry = PresentationRegistry()

        @presentation("iris", registry=registry)
        def iris(progress, direction, *, size=1.0):
            k = progress if direction == "entering" else 1 - progress
            return StyleDescriptor(opacity=k, scale_x=size, scale_y=size)

        schedule = build(
            [SceneSpec("a", 20), TransitionSpec("iris", 10, params={"size": 1.0}), SceneSpec("b", 20)],
            registry=registry,
        )
        self.assertEqual(resolve(schedule, 15)[1].presentation, "iris")
        self.assertNotIn("iris", default_registry())
        self.assertIn("iris", registry)

    def test_validate_params(self):
        from scenestack.presentations import default_registry
        from scenestack.sequence import InvalidPresentationParams

        registry = default_registry()
        registry.validate_params("flip", {"axis": "vertical"})
        with self.assertRaises(InvalidPresentationParams):
            registry.validate_params("flip", {"axis": "diagonal"})
        with self.assertRaises(InvalidPresentationParams):
            registry.validate_params("fade", {"towards": "left"})
        with self.assertRaises(InvalidPresentationParams):
            registry.validate_params("dissolve", {"softness": 0.5})
        with self.assertRaises(InvalidPresentationParams):
            registry.validate_params("pixelate", {"size": 0})


class TestStyleDescriptor(unittest.TestCase):
    def test_hidden_and_visible(self):
        from scenestack.presentations import ClipInset, ClipNoise, ClipSweep, StyleDescriptor

        self.assertTrue(StyleDescriptor().is_fully_visible())
        self.assertTrue(StyleDescriptor(opacity=0).is_hidden())
        self.assertTrue(StyleDescriptor(clip=ClipInset(left=1.0)).is_hidden())
        self.assertTrue(StyleDescriptor(clip=ClipSweep(0, 0)).is_hidden())
        self.assertTrue(StyleDescriptor(translate_x=-1.0).is_hidden())
        self.assertTrue(StyleDescriptor(rotate_y=90).is_hidden())
        self.assertFalse(StyleDescriptor(blur=2).is_fully_visible())
        self.assertTrue(StyleDescriptor(clip=ClipSweep(0, 360)).is_fully_visible())
        self.assertTrue(StyleDescriptor(clip=ClipNoise(0.3, 0.3)).is_hidden())
        self.assertTrue(StyleDescriptor(clip=ClipNoise(0.0, 1.0)).is_fully_visible())
        self.assertFalse(StyleDescriptor(pixel_size=4).is_fully_visible())


if __name__ == "__main__":
    unittest.main()
