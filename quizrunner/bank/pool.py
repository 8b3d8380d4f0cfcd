from __future__ import annotations

"""Pool builder: uniformly shuffled question order and option order."""

import random
from dataclasses import replace
from typing import List, Mapping, Optional, Sequence

from ..results.schema import Question
from ..util.randomness import shuffled


def build_pool(
    questions: Sequence[Question],
    rng: Optional[random.Random] = None,
    *,
    shuffle_options: bool = True,
    subject_policy: Optional[Mapping[str, bool]] = None,
) -> List[Question]:
    """Return a new, randomized sequence ready to serve.

    - Question order is a uniform permutation of the input.
    - Each question's options are shuffled independently, unless
      subject_policy maps its subject to False (or shuffle_options is
      False and the subject is not listed), in which case bank order is kept.
    - Empty input gives an empty pool; callers must not start a session on it.
    """
    policy = subject_policy or {}
    pool: List[Question] = []
    for q in shuffled(questions, rng):
        if policy.get(q.subject, shuffle_options):
            q = replace(q, options=tuple(shuffled(q.options, rng)))
        pool.append(q)
    return pool
