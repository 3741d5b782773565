from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

@dataclass(frozen=True)
class Person:
    id: str
    first_name: str
    last_name: str
    group: str  # origin class label, e.g. "7A"
    external_id: Optional[str] = None
    secondary_id: Optional[str] = None
    gender: Optional[str] = None
    language: Optional[str] = None

    @property
    def gender_code(self) -> str:
        return (self.gender or "").strip()[:1].upper()

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

@dataclass
class Room:
    id: str
    name: str
    capacity: int
    supervisors: Tuple[str, ...] = ()

    @property
    def desk_count(self) -> int:
        return (max(self.capacity, 0) + 1) // 2

@dataclass
class Desk:
    id: str
    # slot 0, slot 1; order is kept stable for display
    seats: List[Optional[Person]] = field(default_factory=lambda: [None, None])

    @property
    def occupants(self) -> List[Person]:
        return [p for p in self.seats if p is not None]

    @property
    def is_empty(self) -> bool:
        return all(p is None for p in self.seats)

    @property
    def is_full(self) -> bool:
        return all(p is not None for p in self.seats)

    def open_seat(self) -> Optional[int]:
        for i, p in enumerate(self.seats):
            if p is None:
                return i
        return None

# room_id -> ordered desks of that room
Arrangement = Dict[str, List[Desk]]

@dataclass
class SeatingResult:
    arrangement: Arrangement
    unresolved: bool = False
    # rooms still holding a conflicting desk when retries ran out
    conflicting_rooms: Set[str] = field(default_factory=set)
    full_attempts: int = 0
    repair_attempts: int = 0
    message: Optional[str] = None
