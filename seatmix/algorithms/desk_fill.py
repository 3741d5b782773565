import logging
import random
from typing import AbstractSet, Dict, Iterable, List, Optional, Sequence, Set, Tuple

from ..cohort import cohort_of
from ..models import Arrangement, Desk, Person
from .scoring import DISQUALIFIED, SeatingParams, is_acceptable, pair_score

logger = logging.getLogger(__name__)

def desk_cohorts(desk: Optional[Desk]) -> Set[str]:
    if desk is None:
        return set()
    return {cohort_of(p.group) for p in desk.occupants}

def count_open_desks(desks: Iterable[Desk]) -> int:
    """Desks with both seats free, i.e. how many people could still sit alone."""
    return sum(1 for d in desks if d.is_empty)

def _best_pair(pool: List[Person], neighbor_cohorts: AbstractSet[str], segregate: bool,
               window: int) -> Optional[Tuple[int, int, int]]:
    head = pool[:window]
    best = None
    for i in range(len(head)):
        for j in range(i + 1, len(head)):
            s = pair_score(head[i], head[j], neighbor_cohorts, segregate)
            if s == DISQUALIFIED:
                continue
            if best is None or s > best[2]:
                best = (i, j, s)
    return best

def _best_partner(seated: Person, pool: List[Person], neighbor_cohorts: AbstractSet[str],
                  segregate: bool, window: int) -> Optional[Tuple[int, int]]:
    best = None
    seen = 0
    for i, cand in enumerate(pool):
        if seen >= window:
            break
        if segregate and cand.gender_code != seated.gender_code:
            continue
        seen += 1
        s = pair_score(seated, cand, neighbor_cohorts, segregate)
        if best is None or s > best[1]:
            best = (i, s)
    return best

def fill_desk(desk: Desk, pool: List[Person], neighbor_cohorts: AbstractSet[str],
              available_slots: int, params: SeatingParams, segregate: bool = False) -> int:
    """Seat people from pool at one desk and return how many were placed.

    available_slots is the number of people that can still get a desk of
    their own. When the pool is larger than that, the best pair in the
    window is taken even if it does not clear the acceptance bar.
    Otherwise an empty desk without an acceptable pair gets pool[0] alone,
    the first candidate of the shuffled queue, not a member of the best pair.
    Selected people are removed from pool.
    """
    if not pool or desk.is_full:
        return 0
    scarce = len(pool) > available_slots

    if desk.is_empty:
        if len(pool) == 1:
            desk.seats[0] = pool.pop()
            return 1
        best = _best_pair(pool, neighbor_cohorts, segregate, params.window)
        if best is not None:
            i, j, score = best
            a, b = pool[i], pool[j]
            ok = is_acceptable(a, b, score, params)
            if ok or scarce:
                if not ok:
                    logger.debug("desk %s: forced pairing at score %d (%d left, %d open)",
                                 desk.id, score, len(pool), available_slots)
                del pool[j]
                del pool[i]
                desk.seats[0], desk.seats[1] = a, b
                return 2
        desk.seats[0] = pool.pop(0)
        return 1

    seated = desk.occupants[0]
    slot = desk.open_seat()
    best = _best_partner(seated, pool, neighbor_cohorts, segregate, params.window)
    if best is None:
        return 0
    i, score = best
    if scarce or is_acceptable(seated, pool[i], score, params):
        desk.seats[slot] = pool.pop(i)
        return 1
    return 0

def fill_layers(chart: Arrangement, room_ids: Sequence[str], pool: List[Person], params: SeatingParams,
                rng: random.Random, segregate: bool = False, reserved: int = 0,
                shuffle_rooms: bool = True) -> List[Person]:
    """Fill desks index by index across the given rooms until the pool is used up.

    Each layer visits the rooms in a fresh random order so early desks are
    spread evenly. Layers are repeated in rounds while anyone gets seated;
    people nobody could take are left in pool and returned.
    reserved counts people outside this pool who still need a seat.
    """
    scope = [desk for rid in room_ids for desk in chart[rid]]
    depth = max((len(chart[rid]) for rid in room_ids), default=0)
    rounds = 0
    while pool:
        rounds += 1
        placed = 0
        for desk_index in range(depth):
            if not pool:
                break
            order = [rid for rid in room_ids if desk_index < len(chart[rid])]
            if shuffle_rooms:
                rng.shuffle(order)
            for rid in order:
                if not pool:
                    break
                desk = chart[rid][desk_index]
                if desk.is_full:
                    continue
                neighbor = desk_cohorts(chart[rid][desk_index - 1]) if desk_index else set()
                available = count_open_desks(scope) - reserved
                placed += fill_desk(desk, pool, neighbor, available, params, segregate)
        if not placed:
            break
    logger.debug("layered fill: %d round(s), %d left over", rounds, len(pool))
    return pool

def _sweep_rank(person: Person, mates: List[Person], segregate: bool) -> int:
    if not mates:
        return 0
    mate = mates[0]
    gender_ok = not segregate or mate.gender_code == person.gender_code
    if gender_ok and mate.group != person.group and cohort_of(mate.group) != cohort_of(person.group):
        return 0
    return 1 if gender_ok else 2

def _sweep_target(chart: Arrangement, room_ids: Sequence[str], person: Person,
                  segregate: bool) -> Optional[Tuple[Desk, int, int]]:
    best = None
    for rid in room_ids:
        for desk in chart[rid]:
            slot = desk.open_seat()
            if slot is None:
                continue
            rank = _sweep_rank(person, desk.occupants, segregate)
            if rank == 0:
                return desk, slot, rank
            if best is None or rank < best[2]:
                best = (desk, slot, rank)
    return best

def sweep_leftovers(chart: Arrangement, room_ids: Sequence[str], pool: List[Person],
                    segregate: bool = False) -> None:
    """Put every remaining person into an open seat, in room order.

    A conflict-free seat is preferred, then one with a matching gender code
    when segregating, then any open seat.
    """
    for person in pool:
        target = _sweep_target(chart, room_ids, person, segregate)
        if target is None:
            raise RuntimeError(f"no open seat left for {person.id}")
        desk, slot, rank = target
        if rank == 2:
            logger.debug("desk %s: no same-gender seat left for %s", desk.id, person.id)
        desk.seats[slot] = person
    del pool[:]

def split_by_gender(pool: Sequence[Person]) -> List[List[Person]]:
    """Sub-pools per gender code, largest first."""
    groups: Dict[str, List[Person]] = {}
    for p in pool:
        groups.setdefault(p.gender_code, []).append(p)
    return sorted(groups.values(), key=len, reverse=True)

def seat_pool(chart: Arrangement, room_ids: Sequence[str], pool: List[Person], params: SeatingParams,
              rng: random.Random, segregate: bool = False, shuffle_rooms: bool = True) -> None:
    """Seat the whole pool into the given rooms; the pool is consumed."""
    sub_pools = split_by_gender(pool) if segregate else [list(pool)]
    del pool[:]
    leftovers: List[Person] = []
    for k, sub in enumerate(sub_pools):
        reserved = len(leftovers) + sum(len(p) for p in sub_pools[k + 1:])
        fill_layers(chart, room_ids, sub, params, rng, segregate=segregate,
                    reserved=reserved, shuffle_rooms=shuffle_rooms)
        leftovers.extend(sub)
    if leftovers:
        logger.debug("sweeping %d unplaced people", len(leftovers))
        sweep_leftovers(chart, room_ids, leftovers, segregate)
