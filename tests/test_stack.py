"""
Unit tests for the scene stack: layers, content motion, the two animation axes.
Run from project root: python -m pytest tests/ -v
"""
import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def _stack(**kwargs):
    from scenestack.sequence import SceneSpec, TransitionSpec
    from scenestack.stack import SceneStack

    return SceneStack(
        [
            SceneSpec("intro", 120, motion="ken_burns"),
            SceneSpec("middle", 60, motion={"type": "drift", "dx": 0.1}),
            SceneSpec("outro", 90),
        ],
        [TransitionSpec("wipe", 20, params={"towards": "left"})],
        **kwargs,
    )


class TestSceneStack(unittest.TestCase):
    def test_default_transition_fills_gaps(self):
        stack = _stack()
        types = [t.type for t in stack.schedule.transitions]
        self.assertEqual(types, ["wipe", "fade"])
        self.assertEqual(stack.total_duration_frames, 120 + 60 + 90 - 20 - 15)

    def test_configured_default_transition(self):
        from scenestack.sequence import TransitionSpec

        stack = _stack(default_transition=TransitionSpec("cut", 0))
        self.assertEqual(stack.schedule.transitions[1].type, "cut")

    def test_layers_in_overlap(self):
        stack = _stack()
        layers = stack.layers_at(110)
        self.assertEqual([l.scene_id for l in layers], ["intro", "middle"])
        self.assertLess(layers[0].z_index, layers[1].z_index)
        entering = layers[1].transition_style
        self.assertIsNotNone(entering.clip)
        self.assertAlmostEqual(entering.clip.left, 0.5)

    def test_steady_layer_has_untouched_style(self):
        from scenestack.presentations import StyleDescriptor

        (layer,) = _stack().layers_at(10)
        self.assertEqual(layer.transition_style, StyleDescriptor())

    def test_content_motion_independent_of_transition(self):
        """Content motion follows the scene's local frame only."""
        from scenestack.stack import evaluate_motion

        stack = _stack()
        intro_in_overlap = stack.layers_at(110)[0]
        self.assertEqual(intro_in_overlap.content, evaluate_motion("ken_burns", 110, 120))
        self.assertGreater(intro_in_overlap.content.zoom, 1.0)
        middle = stack.layers_at(100)[1]
        self.assertEqual(middle.instruction.local_frame, 0)
        self.assertAlmostEqual(middle.content.pan_x, -0.05)

    def test_combined_style(self):
        from scenestack.presentations import StyleDescriptor
        from scenestack.sequence import Direction, RenderInstruction, SceneSpec
        from scenestack.stack import ContentTransform, Layer

        layer = Layer(
            instruction=RenderInstruction("a", 5, Direction.ENTERING, 0.5, 1),
            scene=SceneSpec("a", 30),
            transition_style=StyleDescriptor(opacity=0.5, scale_x=0.8, scale_y=0.8),
            content=ContentTransform(zoom=1.25, pan_x=0.1, opacity=0.5),
        )
        merged = layer.combined_style()
        self.assertAlmostEqual(merged.opacity, 0.25)
        self.assertAlmostEqual(merged.scale_x, 1.0)
        self.assertAlmostEqual(merged.translate_x, -0.1)
        self.assertEqual(layer.transition_style.opacity, 0.5)

    def test_from_sequence(self):
        from scenestack.sequence import SceneSpec, TransitionSpec
        from scenestack.stack import SceneStack

        stack = SceneStack.from_sequence(
            [SceneSpec("a", 30), TransitionSpec("zoom_in", 10), SceneSpec("b", 30)]
        )
        self.assertEqual(stack.total_duration_frames, 50)

    def test_invalid_motion_rejected(self):
        from scenestack.sequence import MalformedSequence, SceneSpec
        from scenestack.stack import SceneStack

        with self.assertRaises(MalformedSequence):
            SceneStack([SceneSpec("a", 30, motion="barrel_roll")])
        with self.assertRaises(MalformedSequence):
            SceneStack([SceneSpec("a", 30, motion={"type": "drift", "speed": 3})])

    def test_clamp_warning_exposed(self):
        from scenestack.sequence import SceneSpec, TransitionSpec
        from scenestack.stack import SceneStack

        with self.assertLogs("scenestack.sequence.builder", level="WARNING"):
            stack = SceneStack([SceneSpec("a", 20), SceneSpec("b", 30)], [TransitionSpec("fade", 40)])
        self.assertEqual(len(stack.warnings), 1)

    def test_from_sequence_logs_each_clamp_once(self):
        from scenestack.sequence import SceneSpec, TransitionSpec
        from scenestack.stack import SceneStack

        with self.assertLogs("scenestack.sequence.builder", level="WARNING") as cm:
            stack = SceneStack.from_sequence([SceneSpec("a", 20), TransitionSpec("fade", 40), SceneSpec("b", 30)])
        self.assertEqual(len(cm.records), 1)
        self.assertEqual(len(stack.warnings), 1)

    def test_empty_custom_registry_is_kept(self):
        from scenestack.presentations import PresentationRegistry
        from scenestack.sequence import SceneSpec
        from scenestack.stack import SceneStack

        custom = PresentationRegistry()
        self.assertEqual(len(custom), 0)
        self.assertIs(SceneStack([SceneSpec("a", 10)], registry=custom).registry, custom)
        self.assertIs(SceneStack.from_sequence([SceneSpec("a", 10)], registry=custom).registry, custom)

    def test_scene_enter_exit_overrides_style(self):
        from scenestack.sequence import SceneSpec, TransitionSpec
        from scenestack.stack import SceneStack

        stack = SceneStack(
            [SceneSpec("a", 20, exit={"type": "slide", "towards": "up"}), SceneSpec("b", 20)],
            [TransitionSpec("fade", 10)],
        )
        outgoing, incoming = stack.layers_at(15)
        self.assertEqual(outgoing.instruction.presentation, "slide")
        self.assertAlmostEqual(outgoing.transition_style.translate_y, -0.5)
        self.assertEqual(outgoing.transition_style.opacity, 1.0)
        self.assertEqual(incoming.instruction.presentation, "fade")
        self.assertAlmostEqual(incoming.transition_style.opacity, 0.5)


class TestContentMotion(unittest.TestCase):
    def test_every_motion_runs_across_scene(self):
        from scenestack.stack import CONTENT_MOTIONS, ContentTransform, evaluate_motion

        for name in CONTENT_MOTIONS:
            for frame in (0, 30, 59, 60):
                with self.subTest(motion=name, frame=frame):
                    self.assertIsInstance(evaluate_motion(name, frame, 60), ContentTransform)

    def test_static_and_none(self):
        from scenestack.stack import ContentTransform, evaluate_motion

        self.assertEqual(evaluate_motion(None, 10, 60), ContentTransform())
        self.assertEqual(evaluate_motion("static", 10, 60), ContentTransform())

    def test_fade_motion_opacity(self):
        from scenestack.stack import evaluate_motion

        self.assertEqual(evaluate_motion("fade", 0, 90).opacity, 0.0)
        self.assertEqual(evaluate_motion("fade", 45, 90).opacity, 1.0)
        self.assertAlmostEqual(evaluate_motion("fade", 90, 90).opacity, 0.0)

    def test_ken_burns_direction(self):
        from scenestack.stack import evaluate_motion

        zoom_in = evaluate_motion({"type": "ken_burns", "zoom_amount": 0.1}, 60, 60)
        zoom_out = evaluate_motion({"type": "ken_burns", "zoom_direction": "out"}, 60, 60)
        self.assertAlmostEqual(zoom_in.zoom, 1.1)
        self.assertAlmostEqual(zoom_out.zoom, 1.0)

    def test_unknown_motion(self):
        from scenestack.stack import get_content_motion

        with self.assertRaises(KeyError):
            get_content_motion("barrel_roll")


if __name__ == "__main__":
    unittest.main()
