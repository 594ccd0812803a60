from __future__ import annotations

import threading
import time
from datetime import date, datetime, timedelta, timezone

import pytest

from src.attendance_checkin.attendance_checkin.attendance.model import AttendanceRecord, NewAttendance
from src.attendance_checkin.attendance_checkin.core.exceptions import DuplicateSubmission


def _new(name: str, when: datetime, company: str = "Ramo", supervisor: str = "Rajesh") -> NewAttendance:
    return NewAttendance(
        date_time=when,
        name=name,
        company=company,
        supervisor=supervisor,
        signature_data="data:image/png;base64,AAAA",
    )


def test_create_writes_primary_and_mirrors_fallback(gateway, primary, fallback, clock):
    rec = gateway.create(_new("Alice", clock.now))

    assert rec.id is not None
    assert primary.records == [rec]
    assert fallback.get(rec.id) == rec


def test_same_day_same_name_is_rejected_case_insensitively(gateway, primary, clock):
    gateway.create(_new("Alice", clock.now))

    with pytest.raises(DuplicateSubmission) as exc:
        gateway.create(_new("alice", clock.now + timedelta(hours=2), company="Ember", supervisor="Yubing"))

    assert "already recorded" in str(exc.value)
    assert exc.value.name == "alice"
    assert len(primary.records) == 1
    assert primary.add_calls == 1


def test_same_name_on_different_days_is_accepted(gateway, primary, clock):
    gateway.create(_new("Alice", clock.now))
    clock.now = clock.now + timedelta(days=1)
    gateway.create(_new("Alice", clock.now))

    assert len(primary.records) == 2


def test_primary_write_outage_falls_back(gateway, primary, fallback, clock):
    primary.go_down()

    rec = gateway.create(_new("Alice", clock.now))

    assert fallback.get(rec.id) == rec
    assert list(gateway.list_all()) == [rec]


def test_duplicate_still_detected_while_primary_is_down(gateway, primary, clock):
    gateway.create(_new("Alice", clock.now))
    primary.go_down()

    with pytest.raises(DuplicateSubmission):
        gateway.create(_new("ALICE", clock.now))


def test_duplicate_written_during_outage_blocks_after_recovery(gateway, primary, clock):
    primary.go_down()
    gateway.create(_new("Alice", clock.now))
    primary.come_back()
    gateway.create(_new("Bob", clock.now))

    with pytest.raises(DuplicateSubmission):
        gateway.create(_new("alice", clock.now))


def test_primary_read_outage_during_write_uses_fallback_check(gateway, primary, fallback, clock):
    gateway.create(_new("Alice", clock.now))
    primary.fail_reads = True

    with pytest.raises(DuplicateSubmission):
        gateway.create(_new("Alice", clock.now))

    # without a listing the primary ids are unknown, so the write stays local
    bob = gateway.create(_new("Bob", clock.now))
    assert [r.name for r in primary.records] == ["Alice"]
    assert fallback.get(bob.id) == bob


def test_unreadable_primary_never_receives_a_reused_id(gateway, primary, clock):
    # fresh process: nothing mirrored, counter at zero
    for i, name in enumerate(["Ann", "Ben", "Cid"], start=1):
        primary.records.append(
            AttendanceRecord(
                id=i,
                date_time=clock.now - timedelta(days=i),
                name=name,
                company="Ramo",
                supervisor="Manoj",
                signature_data="sig",
            )
        )
    primary.fail_reads = True

    gateway.create(_new("Alice", clock.now))
    primary.fail_reads = False

    ids = [r.id for r in primary.records]
    assert ids == [1, 2, 3]
    listed = [r.id for r in gateway.list_all()]
    assert len(listed) == len(set(listed))

    later = gateway.create(_new("Dora", clock.now))
    assert later.id > 3


def test_ids_never_collide_with_records_already_in_primary(gateway, primary, clock):
    primary.records.append(
        AttendanceRecord(
            id=41,
            date_time=clock.now - timedelta(days=3),
            name="Old",
            company="Ramo",
            supervisor="Manoj",
            signature_data="sig",
        )
    )

    rec = gateway.create(_new("Alice", clock.now))

    assert rec.id == 42


def test_list_all_newest_first(gateway, clock):
    base = clock.now
    for i, name in enumerate(["A", "B", "C"]):
        gateway.create(_new(name, base - timedelta(days=i)))

    records = gateway.list_all()

    assert [r.name for r in records] == ["A", "B", "C"]
    assert len({r.id for r in records}) == 3


def test_list_all_empty_primary_uses_fallback(gateway, primary, fallback, clock):
    rec = gateway.create(_new("Alice", clock.now))
    primary.records.clear()

    assert list(gateway.list_all()) == [rec]


def test_list_by_date_filters_by_calendar_day(gateway, clock):
    gateway.create(_new("Alice", clock.now))
    gateway.create(_new("Bob", clock.now - timedelta(days=1)))

    day = clock.now.date()
    records = gateway.list_by_date(day)

    assert [r.name for r in records] == ["Alice"]


def test_list_by_date_without_matches_is_empty(gateway, primary):
    assert list(gateway.list_by_date(date(2024, 1, 1))) == []
    primary.go_down()
    assert list(gateway.list_by_date(date(2024, 1, 1))) == []


def test_successful_writes_are_readable_from_fallback_alone(gateway, primary, clock):
    rec = gateway.create(_new("Alice", clock.now, company="Ember", supervisor="Yubing"))
    primary.go_down()

    (only,) = gateway.list_all()
    assert (only.id, only.name, only.company, only.supervisor, only.signature_data) == (
        rec.id, "Alice", "Ember", "Yubing", rec.signature_data,
    )


def test_dedup_invariant_over_mixed_sequence(gateway, primary, fallback, clock):
    names = ["Alice", "alice", "Bob", "ALICE", "bob", "Carol"]
    outages = [False, True, False, True, True, False]

    for name, down in zip(names, outages):
        primary.fail_reads = primary.fail_writes = down
        try:
            gateway.create(_new(name, clock.now))
        except DuplicateSubmission:
            pass

    visible = {r.id: r for r in primary.records}
    visible.update({r.id: r for r in fallback.list_all()})
    keys = [(r.name.casefold(), r.date_time.date()) for r in visible.values()]
    assert sorted(keys) == sorted(set(keys))
    assert len(keys) == 3


def test_explicit_datetime_on_other_day_is_checked_against_that_day(gateway, clock):
    yesterday = clock.now - timedelta(days=1)
    gateway.create(_new("Alice", yesterday))

    with pytest.raises(DuplicateSubmission) as exc:
        gateway.create(_new("alice", yesterday.replace(hour=23)))

    assert str(exc.value).endswith(f"already recorded for {yesterday.date().isoformat()}.")
    gateway.create(_new("Alice", clock.now))


def test_documents_without_numeric_id_do_not_advance_the_counter(gateway, primary, clock):
    primary.records.append(
        AttendanceRecord(
            id=-3_000_000_001,
            date_time=clock.now - timedelta(days=1),
            name="Imported",
            company="Ramo",
            supervisor="Manoj",
            signature_data="sig",
        )
    )

    rec = gateway.create(_new("Alice", clock.now))

    assert rec.id == 1


def test_concurrent_check_ins_for_one_name_store_exactly_one(gateway, primary, clock):
    workers = 8
    barrier = threading.Barrier(workers)
    real_add = primary.add

    def slow_add(record):
        time.sleep(0.05)
        return real_add(record)

    primary.add = slow_add
    stored, rejected = [], []

    def submit():
        barrier.wait()
        try:
            stored.append(gateway.create(_new("Alice", clock.now)))
        except DuplicateSubmission as e:
            rejected.append(e)

    threads = [threading.Thread(target=submit) for _ in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)

    assert len(stored) == 1
    assert len(rejected) == workers - 1
    assert len(primary.records) == 1
