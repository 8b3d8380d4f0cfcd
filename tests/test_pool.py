import random
import unittest
from collections import Counter
from itertools import permutations

from quizrunner.bank.pool import build_pool

from .factories import make_question


class BuildPoolTests(unittest.TestCase):
    def test_empty_input_gives_empty_pool(self) -> None:
        self.assertEqual(build_pool([], random.Random(1)), [])

    def test_pool_is_a_permutation_with_same_options(self) -> None:
        qs = [make_question(i) for i in range(6)]
        pool = build_pool(qs, random.Random(7))
        self.assertEqual(sorted(q.qid for q in pool), list(range(6)))
        for q in pool:
            original = qs[q.qid]
            self.assertEqual(sorted(q.options), sorted(original.options))
            self.assertEqual(q.correct_answer, original.correct_answer)

    def test_input_is_not_mutated(self) -> None:
        qs = [make_question(i) for i in range(4)]
        snapshot = list(qs)
        build_pool(qs, random.Random(3))
        self.assertEqual(qs, snapshot)

    def test_options_are_shuffled(self) -> None:
        q = make_question(0, options=list("abcdef"), correct="a")
        orders = {build_pool([q], random.Random(seed))[0].options for seed in range(30)}
        self.assertGreater(len(orders), 1)

    def test_fixed_subject_keeps_option_order(self) -> None:
        qs = [make_question(i, subject="Latin", options=list("abcdef"), correct="a") for i in range(5)]
        pool = build_pool(qs, random.Random(11), subject_policy={"Latin": False})
        for q in pool:
            self.assertEqual(q.options, tuple("abcdef"))

    def test_global_switch_with_subject_override(self) -> None:
        fixed = make_question(0, subject="Latin", options=list("abcdef"), correct="a")
        free = make_question(1, subject="Greek", options=list("abcdef"), correct="a")
        seen = set()
        for seed in range(30):
            pool = build_pool([fixed, free], random.Random(seed), shuffle_options=False, subject_policy={"Greek": True})
            by_subject = {q.subject: q for q in pool}
            self.assertEqual(by_subject["Latin"].options, tuple("abcdef"))
            seen.add(by_subject["Greek"].options)
        self.assertGreater(len(seen), 1)

    def test_question_order_is_uniform(self) -> None:
        qs = [make_question(i) for i in range(3)]
        rng = random.Random(1234)
        trials = 6000
        counts = Counter(tuple(q.qid for q in build_pool(qs, rng)) for _ in range(trials))
        self.assertEqual(set(counts), set(permutations(range(3))))
        expected = trials / 6
        for perm, n in counts.items():
            # ~5 standard deviations
            self.assertLess(abs(n - expected), 150, perm)


if __name__ == "__main__":
    unittest.main()
