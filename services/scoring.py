"""
Scoring service.

Knowledge test answers are interleaved object/verb strings. Error score:
  - Edit distance:   restricted Damerau-Levenshtein over the raw strings
  - Jaccard objects: token-set overlap of the even positions
  - Jaccard verbs:   token-set overlap of the odd positions

total_error = edit_distance / mean(jaccard_objects, jaccard_verbs)

When both similarities are 0 the mean is 0: the total error is infinite
unless the answer matches exactly (distance 0), in which case it is 0.
"""

import math
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict

from core.knowledge_test import TestDefinition, decode_answer

# Answers containing this token are flagged, not rejected
INVALID_TOKEN = "l"


def damerau_levenshtein(a: str, b: str) -> int:
    if not a:
        return len(b)
    if not b:
        return len(a)
    prev2: list[int] = []
    prev = list(range(len(b) + 1))
    for i, ca in enumerate(a):
        curr = [i + 1]
        for j, cb in enumerate(b):
            cost = 0 if ca == cb else 1
            best = min(curr[j] + 1, prev[j + 1] + 1, prev[j] + cost)
            # adjacent transposition
            if i > 0 and j > 0 and ca == b[j - 1] and a[i - 1] == cb:
                best = min(best, prev2[j - 1] + 1)
            curr.append(best)
        prev2, prev = prev, curr
    return prev[-1]


def jaccard(a: Iterable[str], b: Iterable[str]) -> float:
    set_a, set_b = set(a), set(b)
    union = set_a | set_b
    if not union:
        return 0.0
    return len(set_a & set_b) / len(union)


def combine_error(edit_distance: int, jaccard_objects: float, jaccard_verbs: float) -> float:
    mean_similarity = 0.5 * (jaccard_objects + jaccard_verbs)
    if mean_similarity == 0:
        return 0.0 if edit_distance == 0 else math.inf
    return edit_distance / mean_similarity


def is_invalid_answer(answer: str) -> bool:
    return INVALID_TOKEN in answer


class ScoreResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_error: float
    edit_distance: int
    jaccard_objects: float
    jaccard_verbs: float
    invalid: bool

    @property
    def degenerate(self) -> bool:
        """Both similarities are zero, so the total error is a policy value."""
        return self.jaccard_objects == 0 and self.jaccard_verbs == 0

    @property
    def rounded_total_error(self) -> Optional[int]:
        """Half-up rounding for storage; None for an infinite total error."""
        if math.isinf(self.total_error):
            return None
        return math.floor(self.total_error + 0.5)


class ScoringEngine:
    """Scores answers against one immutable TestDefinition."""

    def __init__(self, definition: TestDefinition):
        self.definition = definition

    def score_answer(self, raw_answer: str) -> ScoreResult:
        correct = self.definition
        edit_distance = damerau_levenshtein(raw_answer, correct.correct_answer)

        objects, verbs = decode_answer(raw_answer)
        jaccard_objects = jaccard(objects, correct.correct_objects)
        jaccard_verbs = jaccard(verbs, correct.correct_verbs)

        return ScoreResult(
            total_error=combine_error(edit_distance, jaccard_objects, jaccard_verbs),
            edit_distance=edit_distance,
            jaccard_objects=jaccard_objects,
            jaccard_verbs=jaccard_verbs,
            invalid=is_invalid_answer(raw_answer),
        )
