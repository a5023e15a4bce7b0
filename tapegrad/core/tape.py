# tapegrad/core/tape.py
from __future__ import annotations
import itertools
import threading
from contextlib import contextmanager
from typing import Iterator, List, Optional, Tuple

from .errors import TapeMisuseError
from .record import ShadowRecord

_tape_ids = itertools.count()


class Tape:
    """
    Append-only arena of ShadowRecords in forward (creation) order.

    Records are addressed by their integer index. Because records are appended
    synchronously as operations run, every consumer sits after all of its
    producers, so reversed index order is a valid order for the backward pass.
    """
    def __init__(self):
        self.id = next(_tape_ids)
        self.records: List[ShadowRecord] = []
        self._complete = False

    def __len__(self):
        return len(self.records)

    def __getitem__(self, handle: int) -> ShadowRecord:
        return self.records[handle]

    def __repr__(self):
        state = "complete" if self._complete else "open"
        return f"Tape(id={self.id}, records={len(self.records)}, {state})"

    @property
    def is_complete(self) -> bool:
        return self._complete

    def append(self, record: ShadowRecord) -> int:
        """Append a record and return its handle."""
        if self._complete:
            raise TapeMisuseError(f"cannot append to completed {self!r}")
        self.records.append(record)
        return len(self.records) - 1

    def complete(self):
        """Freeze the tape. Allowed exactly once."""
        if self._complete:
            raise TapeMisuseError(f"{self!r} is already complete")
        self._complete = True

    def reversed_handles(self) -> Iterator[int]:
        return iter(range(len(self.records) - 1, -1, -1))


# Per-thread stack of tapes that are currently recording
_context = threading.local()


def active_tapes() -> Tuple[Tape, ...]:
    """Tapes opened by forward passes still running on this thread, outermost first."""
    return tuple(getattr(_context, "stack", ()))


@contextmanager
def recording(tape: Optional[Tape] = None):
    """
    Context manager that marks a tape as open for the duration of a forward pass:
        with recording() as tape:
            ... run the function ...
    """
    stack = getattr(_context, "stack", None)
    if stack is None:
        stack = _context.stack = []
    tape = tape if tape is not None else Tape()
    if tape.is_complete:
        raise TapeMisuseError(f"cannot record on completed {tape!r}")
    stack.append(tape)
    try:
        yield tape
    finally:
        stack.pop()
