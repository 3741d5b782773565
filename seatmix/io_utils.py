import csv
import io
import os
from collections import Counter
from typing import Dict, List, Sequence, Tuple, Union, IO

import pandas as pd

from .models import Arrangement, Person, Room

TextOrPath = Union[str, os.PathLike, IO]

PEOPLE_REQUIRED = ("first name", "last name", "class")
ROOMS_REQUIRED = ("classroom name", "seat capacity")


def _open_text(src: TextOrPath):
    """Return a text-mode file handle and a flag indicating whether to close it.

    Accepts a filesystem path, a text IO object, or a BytesIO buffer.
    """
    if isinstance(src, (str, os.PathLike)):
        f = open(src, 'r', newline='', encoding='utf-8-sig')
        return f, True
    if isinstance(src, io.BytesIO):
        src.seek(0)
        f = io.TextIOWrapper(src, encoding='utf-8-sig', newline='')
        return f, True
    if hasattr(src, 'read'):
        if hasattr(src, 'seek'):
            src.seek(0)
        return src, False
    raise TypeError("Unsupported input type; expected path or file-like object")


def _read_rows(src: TextOrPath, required: Sequence[str]) -> List[Dict[str, str]]:
    """CSV rows with lower-cased, stripped header names."""
    f, should_close = _open_text(src)
    try:
        r = csv.DictReader(f)
        rows = [{k.strip().lower(): (v or '').strip() for k, v in row.items() if k is not None}
                for row in r]
        headers = {(h or '').strip().lower() for h in (r.fieldnames or [])}
    finally:
        if should_close:
            f.close()
    if not rows:
        raise ValueError("CSV file is empty or has no data rows.")
    missing = [h for h in required if h not in headers]
    if missing:
        quoted = ", ".join(f'"{h}"' for h in required)
        raise ValueError(f"CSV must contain {quoted} columns (missing: {', '.join(missing)}).")
    return rows


def load_people(src: TextOrPath) -> Tuple[List[Person], int]:
    """Return (people, number of duplicate rows dropped).

    Rows without a first name, last name or class are skipped. Duplicates
    are detected by student id, or by first-last-class when there is none.
    """
    people: List[Person] = []
    seen = set()
    duplicates = 0
    for idx, row in enumerate(_read_rows(src, PEOPLE_REQUIRED)):
        first, last, group = row['first name'], row['last name'], row['class']
        if not first or not last or not group:
            continue
        student_id = row.get('student id', '')
        key = student_id or f"{first}-{last}-{group}".lower()
        if key in seen:
            duplicates += 1
            continue
        seen.add(key)
        people.append(Person(
            id=f"student-{idx}",
            first_name=first,
            last_name=last,
            group=group,
            external_id=student_id or None,
            secondary_id=row.get('school id') or None,
            gender=row.get('gender') or None,
            language=row.get('language') or None,
        ))
    return people, duplicates


def load_rooms(src: TextOrPath) -> List[Room]:
    """Rooms from CSV; rows with no name or no seats are skipped.

    An optional "id" column must not repeat a value.
    """
    rooms: List[Room] = []
    seen_ids = set()
    for idx, row in enumerate(_read_rows(src, ROOMS_REQUIRED)):
        name = row['classroom name']
        try:
            cap = int(row['seat capacity'])
        except ValueError:
            cap = 0
        if not name or cap <= 0:
            continue
        sups = tuple(s for s in (row.get('supervisor', ''), row.get('supervisor 2', '')) if s)
        rid = row.get('id') or f"R{idx + 1:03d}"
        if rid in seen_ids:
            raise ValueError(f"Duplicate classroom id \"{rid}\" in rooms CSV.")
        seen_ids.add(rid)
        rooms.append(Room(id=rid, name=name, capacity=cap, supervisors=sups))
    return rooms


def class_summary(people: Sequence[Person]) -> Dict[str, int]:
    return dict(sorted(Counter(p.group for p in people).items()))


def has_mixed_genders(people: Sequence[Person]) -> bool:
    codes = {p.gender_code for p in people}
    return 'M' in codes and 'F' in codes


def placement_table(chart: Arrangement, rooms: Sequence[Room]) -> pd.DataFrame:
    """Everyone seated, grouped by original class and sorted by name."""
    records = []
    for room in rooms:
        for i, desk in enumerate(chart.get(room.id, [])):
            for seat, p in enumerate(desk.seats):
                if p is None:
                    continue
                records.append({
                    "class": p.group,
                    "first_name": p.first_name,
                    "last_name": p.last_name,
                    "student_id": p.external_id or "",
                    "room_id": room.id,
                    "room": room.name,
                    "desk": f"Desk {i + 1}",
                    "seat": seat + 1,
                })
    columns = ["class", "first_name", "last_name", "student_id", "room_id", "room", "desk", "seat"]
    df = pd.DataFrame(records, columns=columns)
    return df.sort_values(["class", "last_name", "first_name"], kind="stable").reset_index(drop=True)


def save_arrangement_csv(path: str, chart: Arrangement, rooms: Sequence[Room]):
    with open(path, 'w', newline='') as f:
        w = csv.writer(f)
        w.writerow(['room_id', 'room', 'desk', 'seat', 'first_name', 'last_name', 'class'])
        for room in rooms:
            for i, desk in enumerate(chart.get(room.id, [])):
                for seat, p in enumerate(desk.seats):
                    if p is None:
                        w.writerow([room.id, room.name, i + 1, seat + 1, '', '', ''])
                    else:
                        w.writerow([room.id, room.name, i + 1, seat + 1, p.first_name, p.last_name, p.group])


def save_placement_csv(path: str, chart: Arrangement, rooms: Sequence[Room]):
    placement_table(chart, rooms).to_csv(path, index=False)
