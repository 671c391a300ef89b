from clinic import Clinic
from commands import Command, handle, patient_brief, appointment_line
from config import Settings


def test_list_patients_shows_count_and_brief_lines(clinic: Clinic) -> None:
    clinic.add_patient('Jon Doe', 40, 'M', '555')

    reply = handle(clinic, Command('list_patients'))

    assert reply.message == '=== Patients (1) ===\nID: 1 | Name: Jon Doe | Age: 40 | Gender: M | Contact: 555'
    assert not reply.exit


def test_search_without_hits(clinic: Clinic) -> None:
    assert handle(clinic, Command('search_patients', {'term': 'zed'})).message == 'No patients found.'


def test_search_with_hits_prints_full_blocks(clinic: Clinic) -> None:
    clinic.add_patient('Jon Doe', 40, notes='n/a')
    clinic.add_patient('Ann', 30)

    message = handle(clinic, Command('search_patients', {'term': 'jon'})).message

    assert message.startswith('1 results:\n----- Patient -----')
    assert 'Notes   : n/a' in message
    assert 'Ann' not in message


def test_mutating_commands_return_operation_messages(clinic: Clinic) -> None:
    add = handle(clinic, Command('add_patient', {'name': 'Jon', 'age': 40}))
    bad = handle(clinic, Command('add_appointment', {'patient_id': 99}))
    gone = handle(clinic, Command('delete_patient', {'pid': 1}))
    missing = handle(clinic, Command('delete_appointment', {'aid': 1}))

    assert add.message == 'Patient added.'
    assert bad.message == 'No patient with that ID. Cancelled.'
    assert gone.message == 'Patient and related appointments removed.'
    assert missing.message == 'No such appointment.'


def test_list_appointments(clinic: Clinic) -> None:
    clinic.add_patient('Jon', 40)
    a = clinic.add_appointment(1, 'Dr. A', '2025-01-01', '10:00', 'flu').record

    reply = handle(clinic, Command('list_appointments'))

    assert reply.message == '=== Appointments (1) ===\n' + appointment_line(a)
    assert appointment_line(a) == 'Appt ID: 1 | Patient ID: 1 | Doctor: Dr. A | Date: 2025-01-01 | Time: 10:00 | Reason: flu'


def test_export_commands(settings: Settings, clinic: Clinic) -> None:
    reply = handle(clinic, Command('export_appointments', {'path': settings.appointments_export_path}))

    assert reply.message.startswith('Appointments exported to')
    assert settings.appointments_export_path.exists()


def test_unknown_command(clinic: Clinic) -> None:
    assert handle(clinic, Command('unknown:42')).message == 'Unknown choice.'


def test_exit_flushes_and_stops(settings: Settings, clinic: Clinic) -> None:
    reply = handle(clinic, Command('exit'))

    assert reply.exit
    assert settings.patients_path.exists() and settings.appointments_path.exists()


def test_patient_brief_omits_notes(clinic: Clinic) -> None:
    p = clinic.add_patient('Jon', 40, notes='secret').record

    assert 'secret' not in patient_brief(p)


def test_failed_export_keeps_menu_running(settings: Settings, clinic: Clinic) -> None:
    settings.patients_export_path.mkdir()

    reply = handle(clinic, Command('export_patients', {'path': settings.patients_export_path}))

    assert reply.message.startswith('Export failed:')
    assert not reply.exit
