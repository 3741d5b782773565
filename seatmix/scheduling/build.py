import logging
import random
from typing import List, Optional, Sequence

from ..errors import CapacityError, PreconditionError
from ..models import Arrangement, Desk, Person, Room
from ..algorithms.desk_fill import seat_pool
from ..algorithms.scoring import SeatingParams

logger = logging.getLogger(__name__)

def total_capacity(rooms: Sequence[Room]) -> int:
    return sum(max(r.capacity or 0, 0) for r in rooms)

def validate_inputs(people: Sequence[Person], rooms: Sequence[Room]) -> None:
    if not people or not rooms:
        raise PreconditionError(
            "Please upload students and define classrooms before randomizing.",
            details={"people": len(people), "rooms": len(rooms)},
        )
    ids = [r.id for r in rooms]
    if len(set(ids)) != len(ids):
        dupes = sorted({rid for rid in ids if ids.count(rid) > 1})
        raise PreconditionError(
            f"Classroom ids must be unique (repeated: {', '.join(dupes)}).",
            details={"duplicate_room_ids": dupes},
        )
    seats = total_capacity(rooms)
    if len(people) > seats:
        raise CapacityError(len(people), seats)

def desk_id(room_id: str, index: int) -> str:
    return f"{room_id}-desk-{index}"

def empty_desks(room_id: str, count: int) -> List[Desk]:
    return [Desk(id=desk_id(room_id, i)) for i in range(count)]

def allocate_desks(rooms: Sequence[Room]) -> Arrangement:
    return {r.id: empty_desks(r.id, r.desk_count) for r in rooms}

def build_arrangement(people: Sequence[Person], rooms: Sequence[Room], segregate: bool = False,
                      params: Optional[SeatingParams] = None,
                      rng: Optional[random.Random] = None) -> Arrangement:
    """Seat everyone across all rooms in one randomized greedy pass.

    The result places every person exactly once but may still hold
    conflicting desks; see validation.find_conflicting_rooms.
    """
    validate_inputs(people, rooms)
    if params is None:
        params = SeatingParams()
    if rng is None:
        rng = random.Random()
    pool = list(people)
    rng.shuffle(pool)
    chart = allocate_desks(rooms)
    seat_pool(chart, [r.id for r in rooms], pool, params, rng, segregate=segregate)
    logger.debug("built arrangement: %d people, %d rooms, %d desks",
                 len(people), len(rooms), sum(len(d) for d in chart.values()))
    return chart
