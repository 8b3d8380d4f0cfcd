import unittest

from quizrunner.results.grader import Outcome, classify, grade, skip

from .factories import make_question


class GradeTests(unittest.TestCase):
    def setUp(self) -> None:
        self.q = make_question(1, options=["Paris", "Lyon", "Nice"], correct="Paris")

    def test_correct_answer_is_correct(self) -> None:
        rec = grade(self.q, "Paris")
        self.assertTrue(rec.is_correct)
        self.assertFalse(rec.skipped)
        self.assertEqual(rec.selected, "Paris")
        self.assertEqual(classify(rec), Outcome.CORRECT)

    def test_any_other_value_is_wrong(self) -> None:
        for value in ("Lyon", "Nice", "paris", "Paris ", "", None):
            rec = grade(self.q, value)
            self.assertFalse(rec.is_correct, value)
            self.assertFalse(rec.skipped)
            self.assertEqual(classify(rec), Outcome.WRONG)

    def test_grading_is_deterministic(self) -> None:
        self.assertEqual(grade(self.q, "Lyon"), grade(self.q, "Lyon"))

    def test_skip_record(self) -> None:
        rec = skip(self.q)
        self.assertTrue(rec.skipped)
        self.assertFalse(rec.is_correct)
        self.assertIsNone(rec.selected)
        self.assertEqual(classify(rec), Outcome.SKIPPED)

    def test_record_json_keeps_question_fields(self) -> None:
        data = grade(self.q, "Nice").to_json()
        self.assertEqual(data["correct_answer"], "Paris")
        self.assertEqual(data["selected"], "Nice")
        self.assertFalse(data["isCorrect"])
        self.assertFalse(data["skipped"])


if __name__ == "__main__":
    unittest.main()
