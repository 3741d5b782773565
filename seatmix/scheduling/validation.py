from collections import Counter
from typing import List, Sequence, Set

from ..cohort import cohort_of
from ..models import Arrangement, Person, Room

def desk_conflict(a: Person, b: Person, segregate: bool = False) -> bool:
    if a.group == b.group or cohort_of(a.group) == cohort_of(b.group):
        return True
    return segregate and a.gender_code != b.gender_code

def conflict_labels(a: Person, b: Person, segregate: bool = False) -> List[str]:
    """Human-readable reasons shown on a desk card.

    "Same Last Name" is informational only; it never flags a room.
    """
    labels = []
    if a.group == b.group:
        labels.append("Same Class")
    elif cohort_of(a.group) == cohort_of(b.group):
        labels.append("Same Grade Level")
    if a.last_name == b.last_name:
        labels.append("Same Last Name")
    if segregate and a.gender_code != b.gender_code:
        labels.append("Mixed Gender")
    return labels

def find_conflicting_rooms(chart: Arrangement, segregate: bool = False) -> Set[str]:
    flagged = set()
    for room_id, desks in chart.items():
        for desk in desks:
            if desk.is_full and desk_conflict(desk.seats[0], desk.seats[1], segregate):
                flagged.add(room_id)
                break
    return flagged

def seated_once(people: Sequence[Person], chart: Arrangement) -> bool:
    seen = Counter(p for desks in chart.values() for desk in desks for p in desk.occupants)
    if any(n != 1 for n in seen.values()):
        return False
    return set(seen) == set(people)

def desk_counts_ok(chart: Arrangement, rooms: Sequence[Room]) -> bool:
    for r in rooms:
        if r.id not in chart or len(chart[r.id]) != r.desk_count:
            return False
    return True
