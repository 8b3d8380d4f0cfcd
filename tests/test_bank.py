import json
import tempfile
import unittest
from pathlib import Path

from quizrunner.bank.bank import BankError, QuestionBank, load_bank, split_week_key, week_key
from quizrunner.config.config import DEFAULT_BANK_PATH

from .factories import record, sample_bank


class WeekKeyTests(unittest.TestCase):
    def test_pack_and_split(self) -> None:
        self.assertEqual(week_key(2024, 7), 202407)
        self.assertEqual(split_week_key(202407), (2024, 7))
        self.assertNotEqual(week_key(2024, 10), week_key(2025, 0))


class QuestionBankTests(unittest.TestCase):
    def setUp(self) -> None:
        self.bank = sample_bank()

    def test_subjects(self) -> None:
        self.assertEqual(self.bank.subjects(), {"Biology", "Chemistry"})

    def test_weeks_for(self) -> None:
        self.assertEqual(self.bank.weeks_for("Biology"), {(2024, 1), (2024, 2), (2025, 1)})
        self.assertEqual(self.bank.weeks_for("Physics"), set())
        self.assertEqual(self.bank.years_for("Biology"), {2024, 2025})

    def test_filter_keeps_bank_order(self) -> None:
        got = self.bank.filter("Biology", {week_key(2025, 1), week_key(2024, 1)})
        self.assertEqual([q.qid for q in got], [0, 1, 3])

    def test_filter_by_subject_only_matches_that_subject(self) -> None:
        got = self.bank.filter("Chemistry", {week_key(2024, 1)})
        self.assertEqual([q.qid for q in got], [4])

    def test_filter_with_no_weeks_is_empty(self) -> None:
        self.assertEqual(self.bank.filter("Biology", set()), [])
        self.assertEqual(self.bank.count(None, {week_key(2024, 1)}), 0)

    def test_qid_is_bank_position(self) -> None:
        self.assertEqual([q.qid for q in self.bank.questions], [0, 1, 2, 3, 4])


class ValidationTests(unittest.TestCase):
    def _bad(self, **changes) -> dict:
        r = record(0)
        r.update(changes)
        return r

    def test_correct_answer_must_be_an_option(self) -> None:
        with self.assertRaises(BankError):
            QuestionBank.from_records([self._bad(correct_answer="nope")])

    def test_options_must_be_unique(self) -> None:
        with self.assertRaises(BankError):
            QuestionBank.from_records([self._bad(options=["a", "a", "b"], correct_answer="a")])

    def test_missing_field(self) -> None:
        r = record(0)
        del r["week"]
        with self.assertRaisesRegex(BankError, "week"):
            QuestionBank.from_records([r])

    def test_week_must_fit_key(self) -> None:
        with self.assertRaises(BankError):
            QuestionBank.from_records([self._bad(week=100)])

    def test_error_names_position(self) -> None:
        with self.assertRaisesRegex(BankError, "#1"):
            QuestionBank.from_records([record(0), self._bad(options=[])])


class LoadBankTests(unittest.TestCase):
    def test_packaged_sample_bank(self) -> None:
        bank = load_bank(DEFAULT_BANK_PATH)
        self.assertGreater(len(bank), 0)
        self.assertIn("Biology", bank.subjects())

    def test_yaml_bank_with_questions_key(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "bank.yml"
            p.write_text(
                "questions:\n"
                "  - subject: Math\n"
                "    year: 2023\n"
                "    week: 4\n"
                "    question: 2 + 2?\n"
                "    options: ['4', '5']\n"
                "    correct_answer: '4'\n",
                encoding="utf-8",
            )
            bank = load_bank(p)
        self.assertEqual(bank.weeks_for("Math"), {(2023, 4)})

    def test_corrupt_json(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "bank.json"
            p.write_text("[{", encoding="utf-8")
            with self.assertRaises(BankError):
                load_bank(p)

    def test_missing_file(self) -> None:
        with self.assertRaises(BankError):
            load_bank("/nonexistent/bank.json")

    def test_json_round_trip_of_records(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "bank.json"
            p.write_text(json.dumps([record(0), record(1, "Chemistry")]), encoding="utf-8")
            bank = load_bank(p)
        self.assertEqual(bank.subjects(), {"Biology", "Chemistry"})


if __name__ == "__main__":
    unittest.main()
