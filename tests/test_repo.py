import logging

import pytest

from domain import Patient, Appointment
from repo import PatientRepo, AppointmentRepo, next_id, find_by_id, search_by_name


def _patient(pid: int, name: str = 'X') -> Patient:
    return Patient(id=pid, name=name, age=30)


def test_next_id_of_empty_collection_is_one() -> None:
    assert next_id([]) == 1


def test_next_id_is_max_plus_one() -> None:
    assert next_id([_patient(3), _patient(7), _patient(1)]) == 8


def test_find_by_id_returns_first_match_or_none() -> None:
    rows = [_patient(1, 'a'), _patient(2, 'b'), _patient(2, 'c')]

    assert find_by_id(rows, 2).name == 'b'
    assert find_by_id(rows, 5) is None


def test_search_by_name_is_case_insensitive_substring() -> None:
    jon, ann = _patient(1, 'Jon Doe'), _patient(2, 'Ann')

    assert search_by_name([jon, ann], 'jon') == [jon]
    assert search_by_name([jon, ann], 'N') == [jon, ann]


def test_search_by_name_empty_term_matches_all_in_order() -> None:
    rows = [_patient(2, 'b'), _patient(1, 'a')]

    assert search_by_name(rows, '') == rows


def test_load_missing_file_returns_empty(tmp_path) -> None:
    assert PatientRepo(tmp_path / 'patients.txt').load() == []


def test_save_then_load_round_trips_patients(tmp_path) -> None:
    repo = PatientRepo(tmp_path / 'patients.txt')
    rows = [
        Patient(id=1, name='Jon | Doe', age=40, gender='M', contact='555-0100', notes='allergic\nto penicillin'),
        Patient(id=4, name='Ann', age=0, gender='', contact='', notes=''),
    ]

    repo.save(rows)

    assert repo.load() == rows


def test_save_then_load_round_trips_appointments(tmp_path) -> None:
    repo = AppointmentRepo(tmp_path / 'appointments.txt')
    rows = [Appointment(id=2, patient_id=1, doctor='Dr. Who', date='2025-01-02', time='09:30', reason='check|up')]

    repo.save(rows)

    assert repo.load() == rows


def test_save_writes_pipe_delimited_escaped_lines(tmp_path) -> None:
    path = tmp_path / 'patients.txt'

    PatientRepo(path).save([Patient(id=1, name='Jon|Doe', age=30, gender='M', contact='555', notes='a\nb')])

    assert path.read_text(encoding='utf-8') == '1|Jon\\|Doe|30|M|555|a\\nb\n'


def test_save_overwrites_previous_contents(tmp_path) -> None:
    repo = PatientRepo(tmp_path / 'patients.txt')
    repo.save([_patient(1), _patient(2)])

    repo.save([_patient(2)])

    assert [p.id for p in repo.load()] == [2]


def test_load_skips_lines_with_too_few_fields(tmp_path) -> None:
    path = tmp_path / 'patients.txt'
    path.write_text('1|Jon|30|M|555|notes\n2|Ann|25\n', encoding='utf-8')

    rows = PatientRepo(path).load()

    assert rows == [Patient(id=1, name='Jon', age=30, gender='M', contact='555', notes='notes')]


@pytest.mark.parametrize(
    'bad_line',
    [
        'x|Jon|30|M|555|n',
        '1|Jon|thirty|M|555|n',
        '',
    ],
)
def test_load_skips_unparseable_lines(tmp_path, bad_line: str) -> None:
    path = tmp_path / 'patients.txt'
    path.write_text(f'{bad_line}\n\n3|Ann|25|F|1|\n', encoding='utf-8')

    assert [p.id for p in PatientRepo(path).load()] == [3]


def test_load_ignores_extra_trailing_fields(tmp_path) -> None:
    path = tmp_path / 'appointments.txt'
    path.write_text('1|2|Dr. A|2025-01-01|10:00|flu|extra\n', encoding='utf-8')

    assert AppointmentRepo(path).load() == [
        Appointment(id=1, patient_id=2, doctor='Dr. A', date='2025-01-01', time='10:00', reason='flu')
    ]


def test_load_logs_skipped_lines(tmp_path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / 'patients.txt'
    path.write_text('bad line\n', encoding='utf-8')
    caplog.set_level(logging.WARNING, logger='clinic')

    assert PatientRepo(path).load() == []
    assert 'skipped 1 malformed line(s)' in caplog.text


def test_load_skips_lines_that_are_not_utf8(tmp_path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / 'patients.txt'
    path.write_bytes(b'1|Jon|30|M|555|ok\n2|Ann\xff|25|F|1|x\n')
    caplog.set_level(logging.WARNING, logger='clinic')

    assert [p.id for p in PatientRepo(path).load()] == [1]
    assert 'skipped 1 malformed line(s)' in caplog.text
