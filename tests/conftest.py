from __future__ import annotations

import random
from typing import List, Optional

import pytest

from seatmix.models import Person, Room


def make_person(pid: str, group: str, last: str = "Doe", first: Optional[str] = None,
                gender: Optional[str] = None) -> Person:
    return Person(id=pid, first_name=first or pid, last_name=last, group=group, gender=gender)


def make_roster(n: int, classes: List[str], genders: Optional[List[str]] = None) -> List[Person]:
    """n people cycling through the given classes (and genders, if any)."""
    people = []
    for i in range(n):
        gender = genders[i % len(genders)] if genders else None
        people.append(make_person(f"p{i}", classes[i % len(classes)], last=f"Last{i}", gender=gender))
    return people


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def school():
    """40 people over 8 classes in 4 grades, three rooms with spare seats."""
    classes = ["7A", "7B", "8A", "8B", "9A", "9B", "10A", "10B"]
    people = make_roster(40, classes, genders=["M", "F"])
    rooms = [
        Room(id="R1", name="Room 101", capacity=16, supervisors=("Ms. Kim",)),
        Room(id="R2", name="Room 102", capacity=16),
        Room(id="R3", name="Room 103", capacity=15, supervisors=("Mr. Lee", "Ms. Park")),
    ]
    return people, rooms


@pytest.fixture
def abcd():
    """The four-person scenario: three share grade 7, A and C share class 7A."""
    return [
        make_person("A", "7A", last="Lee"),
        make_person("B", "7B", last="Kim"),
        make_person("C", "7A", last="Park"),
        make_person("D", "8C", last="Choi"),
    ]
