import math
from typing import List, Tuple

import numpy as np
from faker import Faker

from .models import Person, Room

SEED_DEFAULT = 42
GRADES = ["7", "8", "9", "10", "11"]
SECTIONS = ["A", "B", "C"]
BUILDING_ROOMS = [101, 102, 103, 104, 201, 202, 203, 204, 301, 302, 303, 304]


def generate_demo_school(n_people: int = 120, n_rooms: int = 4, seed: int = SEED_DEFAULT,
                         room_capacity: int = None) -> Tuple[List[Person], List[Room]]:
    """Synthetic roster and rooms whose total capacity covers everyone."""
    rng = np.random.default_rng(seed)
    fake = Faker()
    fake.seed_instance(seed)

    classes = [f"{g}{s}" for g in GRADES for s in SECTIONS]
    # uneven class sizes, like a real school
    weights = rng.dirichlet(np.full(len(classes), 4.0))
    people: List[Person] = []
    for i in range(n_people):
        gender = "M" if rng.random() < 0.5 else "F"
        first = fake.first_name_male() if gender == "M" else fake.first_name_female()
        people.append(Person(
            id=f"student-demo-{i}",
            first_name=first,
            last_name=fake.last_name(),
            group=str(rng.choice(classes, p=weights)),
            external_id=f"S{10000 + i}",
            gender=gender,
        ))

    n_rooms = max(1, n_rooms)
    if room_capacity is None:
        # ~10% spare seats, rounded up to an even desk count
        per_room = math.ceil(n_people * 1.1 / n_rooms)
        room_capacity = per_room + per_room % 2
    rooms = []
    for r in range(n_rooms):
        number = BUILDING_ROOMS[r] if r < len(BUILDING_ROOMS) else 400 + r
        rooms.append(Room(
            id=f"R{r + 1:03d}",
            name=f"Room {number}",
            capacity=room_capacity,
            supervisors=(fake.name(),),
        ))
    return people, rooms
