from domain import Patient, Appointment
from export import export_csv


def test_export_patients_quotes_every_field(tmp_path) -> None:
    dest = tmp_path / 'patients_export.csv'
    rows = [Patient(id=1, name='Ann "Annie" Lee', age=30, gender='F', contact='555, ext 2', notes='line1\nline2')]

    assert export_csv(rows, dest, Patient) == 1
    assert dest.read_text(encoding='utf-8') == (
        'id,name,age,gender,contact,notes\n'
        '"1","Ann ""Annie"" Lee","30","F","555, ext 2","line1\nline2"\n'
    )


def test_export_appointments_header(tmp_path) -> None:
    dest = tmp_path / 'appointments_export.csv'
    rows = [Appointment(id=3, patient_id=1, doctor='Dr. A', date='2025-01-01', time='10:00', reason='flu')]

    export_csv(rows, dest, Appointment)

    assert dest.read_text(encoding='utf-8') == (
        'id,patient_id,doctor,date,time,reason\n'
        '"3","1","Dr. A","2025-01-01","10:00","flu"\n'
    )


def test_export_empty_collection_writes_header_only(tmp_path) -> None:
    dest = tmp_path / 'appointments_export.csv'

    assert export_csv([], dest, Appointment) == 0
    assert dest.read_text(encoding='utf-8') == 'id,patient_id,doctor,date,time,reason\n'


def test_export_empty_patients_writes_header_only(tmp_path) -> None:
    dest = tmp_path / 'patients_export.csv'

    assert export_csv([], dest, Patient) == 0
    assert dest.read_text(encoding='utf-8') == 'id,name,age,gender,contact,notes\n'
