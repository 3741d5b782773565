from typing import Optional, Sequence

from ..graph_build import build_seating_graph, conflict_edges, desk_edges, neighbor_cohort_repeats
from ..models import Arrangement, Person, Room
from .build import total_capacity
from .validation import desk_counts_ok, find_conflicting_rooms, seated_once


def desk_stats(chart: Arrangement) -> dict:
    paired = solo = empty = 0
    for desks in chart.values():
        for desk in desks:
            n = len(desk.occupants)
            if n == 2:
                paired += 1
            elif n == 1:
                solo += 1
            else:
                empty += 1
    return {"paired": paired, "solo": solo, "empty": empty, "total": paired + solo + empty}

def unresolved_notice(chart: Arrangement, rooms: Sequence[Room], segregate: bool = False) -> Optional[str]:
    """Warning for the rooms that are flagged right now, or None once all are clean."""
    flagged = find_conflicting_rooms(chart, segregate)
    if not flagged:
        return None
    names = ", ".join(r.name for r in rooms if r.id in flagged)
    return (f"{len(flagged)} room(s) still have conflicting desks: {names}. "
            "Use Re-randomize on a room to try again.")

def summary(people: Sequence[Person], rooms: Sequence[Room], chart: Arrangement,
            segregate: bool = False) -> str:
    G = build_seating_graph(chart)
    stats = desk_stats(chart)
    flagged = find_conflicting_rooms(chart, segregate)
    n_conf = len(conflict_edges(G, segregate))
    names = {r.id: r.name for r in rooms}
    warning = ""
    if flagged:
        listed = ", ".join(sorted(names.get(rid, rid) for rid in flagged))
        warning = f"Warning: {len(flagged)} room(s) still have conflicting desks: {listed}\n"
    return (
        f"People: {len(people)}  Rooms: {len(rooms)}  Seats: {total_capacity(rooms)}\n"
        f"Desks: {stats['total']}  Paired: {stats['paired']}  Solo: {stats['solo']}  Empty: {stats['empty']}\n"
        f"Desk pairs: {len(desk_edges(G))}  Conflicting: {n_conf}  "
        f"Neighbour cohort repeats: {neighbor_cohort_repeats(G)}\n"
        f"Valid (seated once): {seated_once(people, chart)}  Valid (desk counts): {desk_counts_ok(chart, rooms)}  "
        f"Segregated: {segregate}\n"
        f"{warning}"
    )
