from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path

from clinic import Clinic
from domain import Patient, Appointment


@dataclass
class Command:
    action: str
    args: dict = field(default_factory=dict)


@dataclass
class Reply:
    message: str
    exit: bool = False


# ---------- rendering ----------
def patient_brief(p: Patient) -> str:
    return f"ID: {p.id} | Name: {p.name} | Age: {p.age} | Gender: {p.gender} | Contact: {p.contact}"


def patient_full(p: Patient) -> str:
    return "\n".join([
        "----- Patient -----",
        f"ID      : {p.id}",
        f"Name    : {p.name}",
        f"Age     : {p.age}",
        f"Gender  : {p.gender}",
        f"Contact : {p.contact}",
        f"Notes   : {p.notes}",
        "-------------------",
    ])


def appointment_line(a: Appointment) -> str:
    return (f"Appt ID: {a.id} | Patient ID: {a.patient_id} | Doctor: {a.doctor}"
            f" | Date: {a.date} | Time: {a.time} | Reason: {a.reason}")


# ---------- dispatch ----------
def _list_patients(clinic: Clinic, **_) -> Reply:
    lines = [f"=== Patients ({len(clinic.patients)}) ==="]
    lines += [patient_brief(p) for p in clinic.patients]
    return Reply("\n".join(lines))


def _list_appointments(clinic: Clinic, **_) -> Reply:
    lines = [f"=== Appointments ({len(clinic.appointments)}) ==="]
    lines += [appointment_line(a) for a in clinic.appointments]
    return Reply("\n".join(lines))


def _search(clinic: Clinic, term: str = "", **_) -> Reply:
    hits = clinic.search_patients(term)
    if not hits:
        return Reply("No patients found.")
    return Reply("\n".join([f"{len(hits)} results:"] + [patient_full(p) for p in hits]))


def _exit(clinic: Clinic, **_) -> Reply:
    clinic.flush()
    return Reply("Saving and exiting...", exit=True)


HANDLERS = {
    "add_patient": lambda c, **kw: c.add_patient(**kw),
    "list_patients": _list_patients,
    "search_patients": _search,
    "edit_patient": lambda c, **kw: c.edit_patient(**kw),
    "delete_patient": lambda c, pid, **_: c.delete_patient(pid),
    "add_appointment": lambda c, **kw: c.add_appointment(**kw),
    "list_appointments": _list_appointments,
    "edit_appointment": lambda c, **kw: c.edit_appointment(**kw),
    "delete_appointment": lambda c, aid, **_: c.delete_appointment(aid),
    "export_patients": lambda c, path, **_: c.export_patients(Path(path)),
    "export_appointments": lambda c, path, **_: c.export_appointments(Path(path)),
    "exit": _exit,
}


def handle(clinic: Clinic, cmd: Command) -> Reply:
    """Apply one command to the clinic and return the text to show the user."""
    fn = HANDLERS.get(cmd.action)
    if fn is None:
        return Reply("Unknown choice.")
    out = fn(clinic, **cmd.args)
    # clinic operations hand back an OpResult; only its message is user-facing
    return out if isinstance(out, Reply) else Reply(out.message)
