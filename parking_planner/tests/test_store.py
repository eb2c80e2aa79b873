import os
from datetime import date, time

import pytest

from parking_planner.models.member import Role
from parking_planner.models.reservation import FIELDS, MalformedRecordError, Reservation, ReservationProposal
from parking_planner.models.store import (
    CsvReservationStore,
    InMemoryReservationStore,
    InsertOutcome,
    StorageWriteError,
)


def make(start, end, code="01A", lot=1, day=date(2024, 6, 10), email="ana@utp.edu.pe"):
    return Reservation(email, "Ana Torres", Role.STUDENT, lot, code, day, time(*start), time(*end))


def test_new_file_starts_with_header(tmp_path):
    path = tmp_path / "data" / "reservas.csv"
    store = CsvReservationStore(path)
    assert path.read_text(encoding="utf-8") == ",".join(FIELDS) + "\n"
    assert store.load_all() == []


def test_round_trip_preserves_fields(tmp_path):
    path = tmp_path / "reservas.csv"
    original = Reservation("luis@utp.edu.pe", "Rojas, Luis", Role.FACULTY, 3, "24F",
                           date(2024, 12, 31), time(8, 5), time(22, 45))
    assert CsvReservationStore(path).try_insert(original) is InsertOutcome.ACCEPTED

    reloaded = CsvReservationStore(path).load_all()
    assert reloaded == [original]
    assert path.read_text(encoding="utf-8").splitlines()[1] == \
        'luis@utp.edu.pe,"Rojas, Luis",docente,3,24F,2024-12-31,08:05,22:45'


def test_reads_log_written_by_previous_version(tmp_path):
    path = tmp_path / "reservas.csv"
    path.write_text(
        "correo,nombre,categoria,sotano,codigoEspacio,fecha,inicio,fin\n"
        "ana@utp.edu.pe,Ana Torres,alumno,1,01A,2024-06-10,09:00,10:00\n",
        encoding="utf-8",
    )
    assert CsvReservationStore(path).load_all() == [make((9, 0), (10, 0))]


def test_malformed_records_are_skipped(tmp_path):
    path = tmp_path / "reservas.csv"
    path.write_text(
        "correo,nombre,categoria,sotano,codigoEspacio,fecha,inicio,fin\n"
        "ana@utp.edu.pe,Ana Torres,alumno,1,01A,2024-06-10,09:00,10:00\n"
        "ana@utp.edu.pe,Ana Torres,alumno,uno,01A,2024-06-10,09:00,10:00\n"
        "ana@utp.edu.pe,Ana Torres,alumno,1,01A,10/06/2024,09:00,10:00\n"
        "ana@utp.edu.pe,Ana Torres,alumno,1,01A,2024-06-10,10:00,09:00\n"
        "campos,de,menos\n"
        "\n"
        "ana@utp.edu.pe,Ana Torres,alumno,1,02B,2024-06-10,11:00,12:00\n",
        encoding="utf-8",
    )
    loaded = CsvReservationStore(path).load_all()
    assert loaded == [make((9, 0), (10, 0)), make((11, 0), (12, 0), code="02B")]


def test_partial_trailing_record_is_not_visible(tmp_path):
    path = tmp_path / "reservas.csv"
    store = CsvReservationStore(path)
    store.try_insert(make((9, 0), (10, 0)))
    with path.open("a", encoding="utf-8") as f:
        f.write("ana@utp.edu.pe,Ana Torres,alumno,1,01A,2024-06")
    assert store.load_all() == [make((9, 0), (10, 0))]


def test_from_row_rejects_wrong_field_count():
    with pytest.raises(MalformedRecordError):
        Reservation.from_row(["a", "b"])


def test_try_insert_detects_overlap():
    store = InMemoryReservationStore()
    assert store.try_insert(make((9, 0), (10, 0))) is InsertOutcome.ACCEPTED
    assert store.try_insert(make((9, 30), (10, 30))) is InsertOutcome.CONFLICT
    assert store.try_insert(make((8, 0), (12, 0))) is InsertOutcome.CONFLICT
    # tocarse no es solaparse
    assert store.try_insert(make((10, 0), (11, 0))) is InsertOutcome.ACCEPTED
    assert store.try_insert(make((8, 0), (9, 0))) is InsertOutcome.ACCEPTED
    # otro espacio, otro sótano u otra fecha no compiten
    assert store.try_insert(make((9, 0), (10, 0), code="02B")) is InsertOutcome.ACCEPTED
    assert store.try_insert(make((9, 0), (10, 0), lot=2)) is InsertOutcome.ACCEPTED
    assert store.try_insert(make((9, 0), (10, 0), day=date(2024, 6, 11))) is InsertOutcome.ACCEPTED
    assert len(store.load_all()) == 6


def test_has_conflict_accepts_proposals():
    store = InMemoryReservationStore([make((9, 0), (10, 0))])
    hit = ReservationProposal.build("otro@utp.edu.pe", 1, "01a", "2024-06-10", "09:59", "10:30")
    miss = ReservationProposal.build("otro@utp.edu.pe", 1, "01A", "2024-06-10", "10:00", "10:30")
    assert store.has_conflict(hit)
    assert not store.has_conflict(miss)


@pytest.mark.parametrize("a,b", [
    (((9, 0), (10, 0)), ((9, 30), (10, 30))),
    (((9, 0), (10, 0)), ((10, 0), (11, 0))),
    (((9, 0), (12, 0)), ((10, 0), (11, 0))),
    (((9, 0), (10, 0)), ((11, 0), (12, 0))),
])
def test_conflict_is_symmetric(a, b):
    ra, rb = make(*a), make(*b, email="luis@utp.edu.pe")
    assert ra.conflicts_with(rb) == rb.conflicts_with(ra)
    assert InMemoryReservationStore([ra]).has_conflict(rb) == InMemoryReservationStore([rb]).has_conflict(ra)


def test_write_failure_is_reported_distinctly(tmp_path, monkeypatch):
    store = CsvReservationStore(tmp_path / "reservas.csv")

    def broken_fsync(fd):
        raise OSError(5, "Input/output error")

    monkeypatch.setattr(os, "fsync", broken_fsync)
    with pytest.raises(StorageWriteError):
        store.try_insert(make((9, 0), (10, 0)))


def test_undecodable_record_is_skipped_not_fatal(tmp_path):
    path = tmp_path / "reservas.csv"
    path.write_bytes(
        b"correo,nombre,categoria,sotano,codigoEspacio,fecha,inicio,fin\n"
        b"ana@utp.edu.pe,Ana Torres,alumno,1,01A,2024-06-10,09:00,10:00\n"
        b"pe@utp.edu.pe,Pe\xf1a,alumno,1,02B,2024-06-10,09:00,10:00\n"
        b"ana@utp.edu.pe,Ana Torres,alumno,1,03C,2024-06-10,09:00,10:00\n"
    )
    store = CsvReservationStore(path)
    assert store.load_all() == [make((9, 0), (10, 0)), make((9, 0), (10, 0), code="03C")]
    # el registro ilegible no impide seguir reservando
    assert store.try_insert(make((11, 0), (12, 0))) is InsertOutcome.ACCEPTED


def test_name_with_newline_round_trips_and_still_blocks(tmp_path):
    path = tmp_path / "reservas.csv"
    store = CsvReservationStore(path)
    first = Reservation("ana@utp.edu.pe", "Ana\nTorres", Role.STUDENT, 1, "01A",
                        date(2024, 6, 10), time(9, 0), time(10, 0))
    assert store.try_insert(first) is InsertOutcome.ACCEPTED
    assert store.try_insert(make((9, 30), (10, 30))) is InsertOutcome.CONFLICT
    assert store.try_insert(make((10, 0), (11, 0))) is InsertOutcome.ACCEPTED
    assert CsvReservationStore(path).load_all() == [first, make((10, 0), (11, 0))]


def test_empty_existing_file_gets_header(tmp_path):
    path = tmp_path / "reservas.csv"
    path.write_text("", encoding="utf-8")
    store = CsvReservationStore(path)
    store.try_insert(make((9, 0), (10, 0)))
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == ",".join(FIELDS)
    assert store.load_all() == [make((9, 0), (10, 0))]
