"""Tests for the interactive session (ANS threading and history)."""

import unittest

from pecahan_pkg.config import HISTORY_SIZE
from pecahan_pkg.session import CalculatorSession
from pecahan_pkg.types import AngleUnit, DisplayResult, EvalResult


class TestCalculatorSession(unittest.TestCase):
    def setUp(self):
        self.session = CalculatorSession()

    def test_previous_answer_is_threaded(self):
        self.assertEqual(self.session.evaluate("2+3").decimal_text, "5")
        self.assertEqual(self.session.previous_answer, 5.0)
        self.assertEqual(self.session.evaluate("ANS*2").decimal_text, "10")

    def test_failure_keeps_previous_answer(self):
        self.session.evaluate("7")
        result = self.session.evaluate("1/0")
        self.assertIsInstance(result, EvalResult)
        self.assertFalse(result.ok)
        self.assertEqual(self.session.previous_answer, 7.0)

    def test_history_newest_first_including_errors(self):
        self.session.evaluate("1+1")
        self.session.evaluate("2+")
        history = self.session.history
        self.assertEqual([entry.expression for entry in history], ["2+", "1+1"])
        self.assertFalse(history[0].ok)
        self.assertIsInstance(history[1].result, DisplayResult)

    def test_history_is_bounded(self):
        for i in range(HISTORY_SIZE + 3):
            self.session.evaluate(str(i))
        history = self.session.history
        self.assertEqual(len(history), HISTORY_SIZE)
        self.assertEqual(history[0].expression, str(HISTORY_SIZE + 2))

    def test_blank_input_is_ignored(self):
        self.assertIsNone(self.session.evaluate("   "))
        self.assertEqual(self.session.history, [])

    def test_clear_history(self):
        self.session.evaluate("1")
        self.session.clear_history()
        self.assertEqual(self.session.history, [])
        self.assertEqual(self.session.previous_answer, 1.0)

    def test_angle_unit(self):
        self.assertEqual(self.session.mode.angle_unit, AngleUnit.RADIANS)
        self.assertEqual(self.session.toggle_angle_unit(), AngleUnit.DEGREES)
        self.assertEqual(self.session.evaluate("cos(0)+sin(90)").decimal_text, "2")
        self.session.set_angle_unit(AngleUnit.RADIANS)
        self.assertEqual(self.session.evaluate("cos(0)").decimal_text, "1")

    def test_mode_snapshot_is_immutable(self):
        mode = self.session.mode
        self.session.evaluate("42")
        self.assertIsNone(mode.previous_answer)
        self.assertEqual(self.session.mode.previous_answer, 42.0)


if __name__ == "__main__":
    unittest.main()
