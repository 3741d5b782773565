from typing import AbstractSet

from ..cohort import cohort_of
from ..models import Person

COHORT_WEIGHT = 8
GROUP_WEIGHT = 4
SPREAD_WEIGHT = 2
SURNAME_WEIGHT = 1
# below any acceptance bar; never paired when segregating
DISQUALIFIED = -1

class SeatingParams:
    def __init__(self, acceptance_bar=8, window=30, max_full_attempts=3, max_repair_attempts=10):
        self.acceptance_bar = acceptance_bar
        self.window = window
        self.max_full_attempts = max_full_attempts
        self.max_repair_attempts = max_repair_attempts

    def __repr__(self):
        return (f"SeatingParams(acceptance_bar={self.acceptance_bar}, window={self.window}, "
                f"max_full_attempts={self.max_full_attempts}, "
                f"max_repair_attempts={self.max_repair_attempts})")

def pair_score(a: Person, b: Person, neighbor_cohorts: AbstractSet[str] = frozenset(),
               segregate: bool = False) -> int:
    """Compatibility of seating a and b at one desk.

    Different cohort +8, different class +4, +2 for each of the two whose
    cohort is absent from the previous desk, different last name +1.
    A gender mismatch in segregate mode returns DISQUALIFIED.
    """
    if segregate and a.gender_code != b.gender_code:
        return DISQUALIFIED
    ca, cb = cohort_of(a.group), cohort_of(b.group)
    score = 0
    if ca != cb:
        score += COHORT_WEIGHT
    if a.group != b.group:
        score += GROUP_WEIGHT
    if ca not in neighbor_cohorts:
        score += SPREAD_WEIGHT
    if cb not in neighbor_cohorts:
        score += SPREAD_WEIGHT
    if a.last_name != b.last_name:
        score += SURNAME_WEIGHT
    return score

def is_acceptable(a: Person, b: Person, score: int, params: SeatingParams) -> bool:
    """A pair clears the bar only if it also keeps the two cohorts apart."""
    if score == DISQUALIFIED or score < params.acceptance_bar:
        return False
    return cohort_of(a.group) != cohort_of(b.group)
