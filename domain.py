from __future__ import annotations
from dataclasses import dataclass, astuple
from enum import Enum
from typing import ClassVar


@dataclass
class Patient:
    FIELDS: ClassVar[tuple[str, ...]] = ("id", "name", "age", "gender", "contact", "notes")

    id: int
    name: str
    age: int
    gender: str = ""
    contact: str = ""
    notes: str = ""

    @classmethod
    def from_fields(cls, f: list[str]) -> Patient:
        # raises ValueError on non-integer id/age
        return cls(id=int(f[0]), name=f[1], age=int(f[2]), gender=f[3], contact=f[4], notes=f[5])


@dataclass
class Appointment:
    FIELDS: ClassVar[tuple[str, ...]] = ("id", "patient_id", "doctor", "date", "time", "reason")

    id: int
    patient_id: int
    doctor: str = ""
    date: str = ""   # yyyy-mm-dd, not validated
    time: str = ""   # HH:MM, not validated
    reason: str = ""

    @classmethod
    def from_fields(cls, f: list[str]) -> Appointment:
        return cls(id=int(f[0]), patient_id=int(f[1]), doctor=f[2], date=f[3], time=f[4], reason=f[5])


def to_fields(record) -> list[object]:
    """Field values of a record in its on-disk order."""
    return list(astuple(record))


class Status(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    REJECTED = "rejected"


@dataclass
class OpResult:
    status: Status
    message: str
    record: Patient | Appointment | None = None

    @property
    def ok(self) -> bool:
        return self.status is Status.OK

    @classmethod
    def done(cls, message: str, record=None) -> OpResult:
        return cls(Status.OK, message, record)

    @classmethod
    def not_found(cls, message: str) -> OpResult:
        return cls(Status.NOT_FOUND, message)

    @classmethod
    def rejected(cls, message: str) -> OpResult:
        return cls(Status.REJECTED, message)
