from __future__ import annotations
from pathlib import Path

from config import Settings
from database import init_store
from domain import Patient, Appointment, OpResult
from export import export_csv
from logconf import get_logger
from repo import PatientRepo, AppointmentRepo, next_id, find_by_id, search_by_name

log = get_logger(__name__)


def _valid_age(age) -> bool:
    return isinstance(age, int) and not isinstance(age, bool) and age >= 0


class Clinic:
    """
    Both collections held in memory, with the patient -> appointment reference
    enforced here. Every mutation is written to disk before returning.
    """

    def __init__(self, patients: PatientRepo, appointments: AppointmentRepo):
        self.patient_repo = patients
        self.appointment_repo = appointments
        self.patients: list[Patient] = patients.load()
        self.appointments: list[Appointment] = appointments.load()
        log.info("loaded %d patient(s), %d appointment(s)", len(self.patients), len(self.appointments))

    @classmethod
    def open(cls, settings: Settings) -> Clinic:
        init_store(settings.data_dir)
        return cls(PatientRepo(settings.patients_path), AppointmentRepo(settings.appointments_path))

    # ----- queries -----
    def get_patient(self, pid: int) -> Patient | None:
        return find_by_id(self.patients, pid)

    def get_appointment(self, aid: int) -> Appointment | None:
        return find_by_id(self.appointments, aid)

    def search_patients(self, term: str) -> list[Patient]:
        return search_by_name(self.patients, term)

    def appointments_for(self, pid: int) -> list[Appointment]:
        return [a for a in self.appointments if a.patient_id == pid]

    # ----- patients -----
    def add_patient(self, name: str, age: int, gender: str = "", contact: str = "", notes: str = "") -> OpResult:
        if not _valid_age(age):
            return OpResult.rejected("Age must be a non-negative whole number.")
        p = Patient(id=next_id(self.patients), name=name, age=age, gender=gender, contact=contact, notes=notes)
        self.patients.append(p)
        self.patient_repo.save(self.patients)
        log.info("patient %d added", p.id)
        return OpResult.done("Patient added.", p)

    def edit_patient(self, pid: int, name: str | None = None, age: int | None = None, gender: str | None = None,
                     contact: str | None = None, notes: str | None = None) -> OpResult:
        p = self.get_patient(pid)
        if p is None:
            return OpResult.not_found("Patient not found.")
        if age is not None and not _valid_age(age):
            return OpResult.rejected("Age must be a non-negative whole number.")
        if name is not None: p.name = name
        if age is not None: p.age = age
        if gender is not None: p.gender = gender
        if contact is not None: p.contact = contact
        if notes is not None: p.notes = notes
        self.patient_repo.save(self.patients)
        log.info("patient %d updated", pid)
        return OpResult.done("Patient updated.", p)

    def delete_patient(self, pid: int) -> OpResult:
        p = self.get_patient(pid)
        if p is None:
            return OpResult.not_found("No such patient.")
        self.patients = [x for x in self.patients if x.id != pid]
        kept = [a for a in self.appointments if a.patient_id != pid]
        dropped = len(self.appointments) - len(kept)
        self.appointments = kept
        self.appointment_repo.save(self.appointments)
        self.patient_repo.save(self.patients)
        log.info("patient %d deleted with %d appointment(s)", pid, dropped)
        return OpResult.done("Patient and related appointments removed.", p)

    # ----- appointments -----
    def add_appointment(self, patient_id: int, doctor: str = "", date: str = "", time: str = "",
                        reason: str = "") -> OpResult:
        if self.get_patient(patient_id) is None:
            return OpResult.rejected("No patient with that ID. Cancelled.")
        a = Appointment(id=next_id(self.appointments), patient_id=patient_id, doctor=doctor,
                        date=date, time=time, reason=reason)
        self.appointments.append(a)
        self.appointment_repo.save(self.appointments)
        log.info("appointment %d added for patient %d", a.id, patient_id)
        return OpResult.done("Appointment scheduled.", a)

    def edit_appointment(self, aid: int, doctor: str | None = None, date: str | None = None,
                         time: str | None = None, reason: str | None = None) -> OpResult:
        a = self.get_appointment(aid)
        if a is None:
            return OpResult.not_found("Appointment not found.")
        if doctor is not None: a.doctor = doctor
        if date is not None: a.date = date
        if time is not None: a.time = time
        if reason is not None: a.reason = reason
        self.appointment_repo.save(self.appointments)
        log.info("appointment %d updated", aid)
        return OpResult.done("Appointment updated.", a)

    def delete_appointment(self, aid: int) -> OpResult:
        a = self.get_appointment(aid)
        if a is None:
            return OpResult.not_found("No such appointment.")
        self.appointments = [x for x in self.appointments if x.id != aid]
        self.appointment_repo.save(self.appointments)
        log.info("appointment %d deleted", aid)
        return OpResult.done("Appointment deleted.", a)

    # ----- export / shutdown -----
    def _export(self, label: str, records, record_type, destination: Path) -> OpResult:
        # a bad export target is reported, not raised; backing-file errors still propagate
        try:
            n = export_csv(records, destination, record_type)
        except OSError as e:
            log.warning("export to %s failed: %s", destination, e)
            return OpResult.rejected(f"Export failed: {e}")
        return OpResult.done(f"{label} exported to {destination} ({n} row(s)).")

    def export_patients(self, destination: Path) -> OpResult:
        return self._export("Patients", self.patients, Patient, destination)

    def export_appointments(self, destination: Path) -> OpResult:
        return self._export("Appointments", self.appointments, Appointment, destination)

    def flush(self) -> None:
        self.patient_repo.save(self.patients)
        self.appointment_repo.save(self.appointments)
        log.info("collections flushed")
