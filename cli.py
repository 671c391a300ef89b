from __future__ import annotations
from typing import Callable

from clinic import Clinic
from commands import Command, handle, patient_full
from config import Settings
from repo import next_id

MENU = """
=== Clinic Management Menu ===
1) Add patient
2) List patients
3) Search patient by name
4) Edit patient
5) Delete patient
6) Add appointment
7) List appointments
8) Edit appointment
9) Delete appointment
10) Export patients CSV
11) Export appointments CSV
0) Exit"""


class TextMenu:
    """Prompt-and-read loop; turns answers into commands for ``commands.handle``."""

    def __init__(self, clinic: Clinic, settings: Settings,
                 read: Callable[[str], str] | None = None, write: Callable[[str], None] | None = None):
        self.clinic = clinic
        self.settings = settings
        self.read = read or input
        self.write = write or print

    # ----- prompts -----
    def ask(self, prompt: str) -> str:
        return self.read(prompt)

    def ask_int(self, prompt: str) -> int:
        while True:
            s = self.ask(prompt)
            try:
                return int(s)
            except ValueError:
                self.write("Invalid number. Try again.")

    def ask_keep(self, label: str, current) -> str | None:
        s = self.ask(f"{label} ({current}): ")
        return s or None

    def ask_keep_int(self, label: str, current: int) -> int | None:
        while True:
            s = self.ask(f"{label} ({current}): ")
            if not s:
                return None
            try:
                return int(s)
            except ValueError:
                self.write("Invalid number. Try again.")

    # ----- menu entries -> commands -----
    def _add_patient(self) -> Command:
        self.write(f"Adding new patient (ID {next_id(self.clinic.patients)})")
        return Command("add_patient", dict(
            name=self.ask("Name: "), age=self.ask_int("Age: "), gender=self.ask("Gender: "),
            contact=self.ask("Contact: "), notes=self.ask("Notes: "),
        ))

    def _search(self) -> Command:
        return Command("search_patients", {"term": self.ask("Enter name search term: ")})

    def _edit_patient(self) -> Command:
        pid = self.ask_int("Enter patient ID to edit: ")
        p = self.clinic.get_patient(pid)
        if p is None:
            return Command("edit_patient", {"pid": pid})
        self.write(patient_full(p))
        self.write("Leave blank to keep current value.")
        return Command("edit_patient", dict(
            pid=pid,
            name=self.ask_keep("Name", p.name),
            age=self.ask_keep_int("Age", p.age),
            gender=self.ask_keep("Gender", p.gender),
            contact=self.ask_keep("Contact", p.contact),
            notes=self.ask_keep("Notes", p.notes),
        ))

    def _delete_patient(self) -> Command:
        return Command("delete_patient", {"pid": self.ask_int("Enter patient ID to delete: ")})

    def _add_appointment(self) -> Command:
        self.write(f"Adding appointment (ID {next_id(self.clinic.appointments)})")
        pid = self.ask_int("Patient ID: ")
        if self.clinic.get_patient(pid) is None:
            # rejected by the clinic without asking for the remaining fields
            return Command("add_appointment", {"patient_id": pid})
        return Command("add_appointment", dict(
            patient_id=pid, doctor=self.ask("Doctor: "), date=self.ask("Date (YYYY-MM-DD): "),
            time=self.ask("Time (HH:MM): "), reason=self.ask("Reason: "),
        ))

    def _edit_appointment(self) -> Command:
        aid = self.ask_int("Enter appointment ID to edit: ")
        a = self.clinic.get_appointment(aid)
        if a is None:
            return Command("edit_appointment", {"aid": aid})
        self.write("Leave blank to keep current value.")
        return Command("edit_appointment", dict(
            aid=aid,
            doctor=self.ask_keep("Doctor", a.doctor),
            date=self.ask_keep("Date", a.date),
            time=self.ask_keep("Time", a.time),
            reason=self.ask_keep("Reason", a.reason),
        ))

    def _delete_appointment(self) -> Command:
        return Command("delete_appointment", {"aid": self.ask_int("Enter appointment ID to delete: ")})

    def command_for(self, choice: int) -> Command:
        table = {
            1: self._add_patient,
            2: lambda: Command("list_patients"),
            3: self._search,
            4: self._edit_patient,
            5: self._delete_patient,
            6: self._add_appointment,
            7: lambda: Command("list_appointments"),
            8: self._edit_appointment,
            9: self._delete_appointment,
            10: lambda: Command("export_patients", {"path": self.settings.patients_export_path}),
            11: lambda: Command("export_appointments", {"path": self.settings.appointments_export_path}),
            0: lambda: Command("exit"),
        }
        build = table.get(choice)
        return build() if build else Command(f"unknown:{choice}")

    def loop(self) -> None:
        self.write("Welcome to Clinic Management System (simple CLI)")
        while True:
            self.write(MENU)
            reply = handle(self.clinic, self.command_for(self.ask_int("Choose an option: ")))
            self.write(reply.message)
            if reply.exit:
                return


def run(settings: Settings) -> None:
    clinic = Clinic.open(settings)
    try:
        TextMenu(clinic, settings).loop()
    except (EOFError, KeyboardInterrupt):
        # input closed without choosing 0; still persist on the way out
        clinic.flush()
