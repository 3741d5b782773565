import logging
import random
import warnings
from typing import Callable, Optional, Sequence

from ..errors import SeatingCancelled, UnresolvedConflictsWarning
from ..models import Person, Room, SeatingResult
from ..algorithms.scoring import SeatingParams
from .build import build_arrangement, validate_inputs
from .repair import rerandomize_room
from .validation import find_conflicting_rooms

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int], None]

def generate_seating(people: Sequence[Person], rooms: Sequence[Room], segregate: bool = False,
                     params: Optional[SeatingParams] = None, rng: Optional[random.Random] = None,
                     progress: Optional[ProgressCallback] = None,
                     should_cancel: Optional[Callable[[], bool]] = None) -> SeatingResult:
    """Build, check and repair a seating arrangement.

    Up to max_full_attempts full builds are tried. After each build the
    conflicting rooms (and only those) are rerandomized up to
    max_repair_attempts times. If conflicts survive every attempt the last
    arrangement is returned with unresolved=True and an
    UnresolvedConflictsWarning is emitted.

    Raises PreconditionError / CapacityError before anything is allocated,
    and SeatingCancelled if should_cancel() returns True between phases.
    """
    validate_inputs(people, rooms)
    if params is None:
        params = SeatingParams()
    if rng is None:
        rng = random.Random()
    people = list(people)
    rooms = list(rooms)
    full_max = max(1, params.max_full_attempts)
    repair_max = max(0, params.max_repair_attempts)
    steps = full_max * (repair_max + 1)

    def emit(label: str, percent: int):
        if progress is not None:
            progress(label, percent)

    def check_cancel(phase: str):
        if should_cancel is not None and should_cancel():
            logger.info("cancelled during %s", phase)
            raise SeatingCancelled(phase)

    emit("Starting", 0)
    chart = None
    conflicting = set()
    repairs_total = 0
    attempt = 0
    for attempt in range(1, full_max + 1):
        phase = f"Attempt {attempt}/{full_max}: building arrangement"
        check_cancel(phase)
        base = (attempt - 1) * (repair_max + 1)
        emit(phase, int(100 * base / steps))
        logger.info("attempt %d/%d: seating %d people in %d rooms",
                    attempt, full_max, len(people), len(rooms))
        chart = build_arrangement(people, rooms, segregate=segregate, params=params, rng=rng)
        conflicting = find_conflicting_rooms(chart, segregate)

        repair = 0
        while conflicting and repair < repair_max:
            repair += 1
            phase = f"Attempt {attempt}/{full_max}: fixing {len(conflicting)} room(s), pass {repair}/{repair_max}"
            check_cancel(phase)
            emit(phase, int(100 * (base + repair) / steps))
            repairs_total += 1
            for r in rooms:
                if r.id in conflicting:
                    chart = rerandomize_room(chart, r.id, rooms, segregate=segregate, params=params, rng=rng)
            conflicting = find_conflicting_rooms(chart, segregate)

        if not conflicting:
            logger.info("resolved after %d attempt(s), %d repair pass(es)", attempt, repairs_total)
            emit("Resolved", 100)
            return SeatingResult(arrangement=chart, full_attempts=attempt, repair_attempts=repairs_total)
        logger.info("attempt %d left %d conflicting room(s)", attempt, len(conflicting))

    message = (f"Could not resolve all seating conflicts after {attempt} attempt(s); "
               f"{len(conflicting)} room(s) still have conflicting desks.")
    logger.warning(message)
    warnings.warn(message, UnresolvedConflictsWarning, stacklevel=2)
    emit("Finished with conflicts", 100)
    return SeatingResult(
        arrangement=chart,
        unresolved=True,
        conflicting_rooms=set(conflicting),
        full_attempts=attempt,
        repair_attempts=repairs_total,
        message=message,
    )
