from __future__ import annotations
from pathlib import Path
from typing import Generic, Sequence, TypeVar

from codec import decode_line, join_line
from database import read_lines, write_lines
from domain import Patient, Appointment, to_fields
from logconf import get_logger

log = get_logger(__name__)

R = TypeVar("R", Patient, Appointment)


def next_id(records: Sequence) -> int:
    # max + 1, so deleting the highest id frees it for reuse
    return max((r.id for r in records), default=0) + 1


def find_by_id(records: Sequence[R], rid: int) -> R | None:
    for r in records:
        if r.id == rid:
            return r
    return None


def search_by_name(records: Sequence[R], term: str) -> list[R]:
    low = term.lower()
    return [r for r in records if low in r.name.lower()]


class RecordRepo(Generic[R]):
    """Flat-file store for one record kind: one escaped, pipe-delimited line per record."""

    record_type: type[R]

    def __init__(self, path: Path):
        self.path = path

    @property
    def width(self) -> int:
        return len(self.record_type.FIELDS)

    def parse(self, raw: bytes) -> R | None:
        if not raw:
            return None
        try:
            line = raw.decode("utf-8")
        except UnicodeDecodeError:
            return None
        parts = decode_line(line)
        if len(parts) < self.width:
            return None
        try:
            return self.record_type.from_fields(parts[:self.width])
        except ValueError:
            return None

    def render(self, record: R) -> str:
        return join_line(to_fields(record))

    def load(self) -> list[R]:
        rows: list[R] = []
        skipped = 0
        for line in read_lines(self.path):
            rec = self.parse(line)
            if rec is None:
                if line:
                    skipped += 1
                continue
            rows.append(rec)
        if skipped:
            log.warning("%s: skipped %d malformed line(s)", self.path.name, skipped)
        log.debug("%s: loaded %d record(s)", self.path.name, len(rows))
        return rows

    def save(self, records: Sequence[R]) -> None:
        write_lines(self.path, (self.render(r) for r in records))
        log.debug("%s: saved %d record(s)", self.path.name, len(records))


class PatientRepo(RecordRepo[Patient]):
    record_type = Patient


class AppointmentRepo(RecordRepo[Appointment]):
    record_type = Appointment
