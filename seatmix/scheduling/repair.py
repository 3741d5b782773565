import logging
import random
from typing import Optional, Sequence

from ..models import Arrangement, Room
from ..algorithms.desk_fill import seat_pool
from ..algorithms.scoring import SeatingParams
from .build import empty_desks

logger = logging.getLogger(__name__)

def rerandomize_room(chart: Arrangement, room_id: str, rooms: Sequence[Room], segregate: bool = False,
                     params: Optional[SeatingParams] = None,
                     rng: Optional[random.Random] = None) -> Arrangement:
    """Reshuffle the people of one room among that room's desks.

    Returns a new mapping in which only room_id has a fresh desk list; all
    other rooms keep their existing desk lists. The desk count of the room
    never changes. A room with nobody in it is returned as is.
    """
    room = next((r for r in rooms if r.id == room_id), None)
    if room is None or room_id not in chart:
        raise KeyError(room_id)
    if params is None:
        params = SeatingParams()
    if rng is None:
        rng = random.Random()

    queue = [p for desk in chart[room_id] for p in desk.occupants]
    if not queue:
        return chart
    rng.shuffle(queue)

    updated = dict(chart)
    updated[room_id] = empty_desks(room_id, len(chart[room_id]))
    seat_pool(updated, [room_id], queue, params, rng, segregate=segregate, shuffle_rooms=False)
    logger.debug("rerandomized %s (%s): %d people", room.name, room_id,
                 sum(len(d.occupants) for d in updated[room_id]))
    return updated
