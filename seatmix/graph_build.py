from typing import List, Tuple
import networkx as nx

from .cohort import cohort_of
from .models import Arrangement
from .scheduling.validation import desk_conflict

def build_seating_graph(chart: Arrangement) -> nx.Graph:
    """People as nodes; desk mates joined by kind="desk", consecutive desks by kind="neighbor"."""
    G = nx.Graph()
    for room_id, desks in chart.items():
        for i, desk in enumerate(desks):
            for p in desk.occupants:
                G.add_node(p.id, person=p, room=room_id, desk=desk.id, group=p.group,
                           cohort=cohort_of(p.group))
            occ = desk.occupants
            if len(occ) == 2:
                G.add_edge(occ[0].id, occ[1].id, kind="desk")
            if i > 0:
                for u in desks[i - 1].occupants:
                    for v in occ:
                        if not G.has_edge(u.id, v.id):
                            G.add_edge(u.id, v.id, kind="neighbor")
    return G

def desk_edges(G: nx.Graph) -> List[Tuple[str, str]]:
    return [(u, v) for u, v, kind in G.edges(data="kind") if kind == "desk"]

def conflict_edges(G: nx.Graph, segregate: bool = False) -> List[Tuple[str, str]]:
    return [(u, v) for u, v in desk_edges(G)
            if desk_conflict(G.nodes[u]["person"], G.nodes[v]["person"], segregate)]

def neighbor_cohort_repeats(G: nx.Graph) -> int:
    """Neighbouring-desk pairs that share a cohort."""
    return sum(1 for u, v, kind in G.edges(data="kind")
               if kind == "neighbor" and G.nodes[u]["cohort"] == G.nodes[v]["cohort"])
