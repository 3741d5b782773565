from __future__ import annotations

import random

from seatmix.models import Desk, Room
from seatmix.algorithms.desk_fill import (
    count_open_desks, desk_cohorts, fill_desk, fill_layers, seat_pool, split_by_gender, sweep_leftovers,
)
from seatmix.algorithms.scoring import SeatingParams
from seatmix.scheduling.build import allocate_desks
from seatmix.scheduling.validation import seated_once
from tests.conftest import make_person, make_roster  # type: ignore


PARAMS = SeatingParams()


def test_last_person_sits_alone() -> None:
    desk = Desk(id="d0")
    a = make_person("a", "7A")
    pool = [a]
    assert fill_desk(desk, pool, set(), 5, PARAMS) == 1
    assert desk.seats == [a, None]
    assert pool == []


def test_empty_desk_takes_best_scoring_pair() -> None:
    a = make_person("a", "7A", last="Lee")
    b = make_person("b", "7B", last="Kim")
    c = make_person("c", "8C", last="Choi")
    desk = Desk(id="d0")
    pool = [a, b, c]

    assert fill_desk(desk, pool, set(), 5, PARAMS) == 2
    # a+c and b+c tie at 17; the first best pair in pool order wins
    assert desk.seats == [a, c]
    assert pool == [b]


def test_weak_pair_without_scarcity_seats_one_person() -> None:
    a = make_person("a", "7A", last="Lee")
    c = make_person("c", "7A", last="Park")
    desk = Desk(id="d0")
    pool = [a, c]

    assert fill_desk(desk, pool, set(), 5, PARAMS) == 1
    assert desk.seats == [a, None]
    assert pool == [c]


def test_scarcity_forces_weak_pair() -> None:
    a = make_person("a", "7A", last="Lee")
    c = make_person("c", "7A", last="Park")
    desk = Desk(id="d0")
    pool = [a, c]

    # two people but only one of them could get a desk alone
    assert fill_desk(desk, pool, set(), 1, PARAMS) == 2
    assert desk.is_full
    assert pool == []


def test_half_filled_desk_takes_acceptable_partner() -> None:
    a = make_person("a", "7A", last="Lee")
    c = make_person("c", "7A", last="Park")
    d = make_person("d", "8C", last="Choi")
    desk = Desk(id="d0", seats=[a, None])
    pool = [c, d]

    assert fill_desk(desk, pool, set(), 3, PARAMS) == 1
    assert desk.seats == [a, d]
    assert pool == [c]


def test_half_filled_desk_stays_open_without_good_partner() -> None:
    a = make_person("a", "7A", last="Lee")
    c = make_person("c", "7A", last="Park")
    desk = Desk(id="d0", seats=[a, None])
    pool = [c]

    assert fill_desk(desk, pool, set(), 3, PARAMS) == 0
    assert desk.seats == [a, None]
    assert pool == [c]


def test_half_filled_desk_filters_gender_before_scoring() -> None:
    a = make_person("a", "7A", gender="M")
    d = make_person("d", "8C", gender="F")
    desk = Desk(id="d0", seats=[a, None])
    pool = [d]

    # even under scarcity a mixed pair is never formed here
    assert fill_desk(desk, pool, set(), 0, PARAMS, segregate=True) == 0
    assert pool == [d]


def test_partner_search_is_limited_to_the_window() -> None:
    a = make_person("a", "7A", last="Lee")
    pool = [make_person(f"x{i}", "7A", last=f"X{i}") for i in range(4)]
    good = make_person("g", "9C", last="Good")
    pool.append(good)
    desk = Desk(id="d0", seats=[a, None])

    assert fill_desk(desk, pool, set(), 10, SeatingParams(window=2)) == 0
    assert fill_desk(desk, pool, set(), 10, SeatingParams(window=10)) == 1
    assert desk.seats[1] is good


def test_full_desk_is_left_alone() -> None:
    a, b = make_person("a", "7A"), make_person("b", "8A")
    desk = Desk(id="d0", seats=[a, b])
    pool = [make_person("c", "9A")]
    assert fill_desk(desk, pool, set(), 5, PARAMS) == 0
    assert len(pool) == 1


def test_count_open_desks_and_cohorts() -> None:
    a = make_person("a", "7A")
    desks = [Desk(id="d0"), Desk(id="d1", seats=[a, None]), Desk(id="d2")]
    assert count_open_desks(desks) == 2
    assert desk_cohorts(desks[1]) == {"7"}
    assert desk_cohorts(None) == set()


def test_fill_layers_spreads_first_desks_over_rooms() -> None:
    rooms = [Room(id=f"R{i}", name=f"Room {i}", capacity=10) for i in range(3)]
    chart = allocate_desks(rooms)
    # three people from one class: no pair is acceptable and nobody is short of a desk
    pool = [make_person(f"p{i}", "7A", last=f"L{i}") for i in range(3)]

    left = fill_layers(chart, [r.id for r in rooms], pool, PARAMS, random.Random(3))

    assert left == []
    for r in rooms:
        assert len(chart[r.id][0].occupants) == 1
        assert all(d.is_empty for d in chart[r.id][1:])


def test_sweep_prefers_conflict_free_seat() -> None:
    a = make_person("a", "7A")
    c = make_person("c", "7A", last="Other")
    chart = {"R1": [Desk(id="R1-desk-0", seats=[a, None]), Desk(id="R1-desk-1")]}
    pool = [c]

    sweep_leftovers(chart, ["R1"], pool)

    assert pool == []
    assert chart["R1"][0].seats == [a, None]
    assert chart["R1"][1].seats == [c, None]


def test_sweep_falls_back_to_mixed_seat_when_nothing_else_is_open() -> None:
    m = make_person("m", "7A", gender="M")
    f = make_person("f", "8A", gender="F")
    chart = {"R1": [Desk(id="R1-desk-0", seats=[m, None])]}

    sweep_leftovers(chart, ["R1"], [f], segregate=True)

    assert chart["R1"][0].seats == [m, f]


def test_split_by_gender_orders_largest_first() -> None:
    people = make_roster(7, ["7A"], genders=["F", "M", "M"])
    groups = split_by_gender(people)
    assert [len(g) for g in groups] == [4, 3]
    assert {p.gender_code for p in groups[0]} == {"M"}


def test_seat_pool_consumes_pool_and_places_everyone() -> None:
    rooms = [Room(id="R1", name="A", capacity=6), Room(id="R2", name="B", capacity=5)]
    chart = allocate_desks(rooms)
    people = make_roster(11, ["7A", "8A", "9A"], genders=["M", "F"])
    pool = list(people)

    seat_pool(chart, ["R1", "R2"], pool, PARAMS, random.Random(0), segregate=True)

    assert pool == []
    assert seated_once(people, chart)


def _layers_after(front_group: str):
    rooms = [Room(id="R1", name="Room 101", capacity=4)]
    chart = allocate_desks(rooms)
    chart["R1"][0].seats = [make_person("f0", front_group + "A", last="F0"),
                            make_person("f1", front_group + "B", last="F1")]
    pool = [make_person("c7", "7C", last="L7"), make_person("a8", "8A", last="L8"),
            make_person("a9", "9A", last="L9")]
    fill_layers(chart, ["R1"], pool, PARAMS, random.Random(0), shuffle_rooms=False)
    return {p.group for p in chart["R1"][1].occupants}


def test_fill_layers_passes_previous_desk_cohorts_to_scoring() -> None:
    """Grade 7 at the desk in front makes the 8/9 pair outscore the equal-looking 7/8 pair."""
    assert _layers_after("7") == {"8A", "9A"}


def test_fill_layers_keeps_first_best_pair_when_neighbour_is_neutral() -> None:
    # grade 10 in front adds the same spread bonus to every pair
    assert _layers_after("10") == {"7C", "8A"}


def test_unpaired_desk_takes_queue_head_not_best_pair_member() -> None:
    x = make_person("x", "7A", last="Lee")
    a = make_person("a", "7A", last="Kim")
    b = make_person("b", "7B", last="Lee")
    desk = Desk(id="d0")
    pool = [x, a, b]

    # a/b is the best pair but shares a grade, and there is no shortage of desks
    assert fill_desk(desk, pool, set(), 5, PARAMS) == 1
    assert desk.seats == [x, None]
    assert pool == [a, b]
