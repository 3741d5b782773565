class SeatingError(Exception):
    """Base class for errors raised by the seating engine."""
    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

class PreconditionError(SeatingError):
    """Raised when there are no people or no rooms to work with."""

class CapacityError(SeatingError):
    """Raised when the roster does not fit into the declared seats."""
    def __init__(self, people: int, seats: int):
        self.people = people
        self.seats = seats
        self.deficit = people - seats
        super().__init__(
            f"Not enough seats! You have {people} students but only {seats} seats available.",
            details={"people": people, "seats": seats, "deficit": self.deficit},
        )

class SeatingCancelled(SeatingError):
    """Raised when the caller asks to stop between phases."""
    def __init__(self, phase: str):
        self.phase = phase
        super().__init__(f"Seating cancelled during: {phase}", details={"phase": phase})

class UnresolvedConflictsWarning(UserWarning):
    """Emitted when a usable arrangement still contains conflicting desks."""
