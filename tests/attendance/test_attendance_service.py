from datetime import datetime

import pytest

from conftest import ALICE, BOB, OUTSIDER

from src.college_attendance.college_attendance.attendance.model import RecordedEntry
from src.college_attendance.college_attendance.core.enums import MarkedBy
from src.college_attendance.college_attendance.core.exceptions import (
    AuthorizationError,
    NotFoundError,
    ValidationError,
)


def test_marking_twice_keeps_one_record_with_latest_value(container, attendance_repo, fixed_now):
    svc = container.attendance_service

    svc.mark_attendance(1, ALICE.student_id, True, "teacher", now=fixed_now)
    svc.mark_attendance(1, ALICE.student_id, False, "teacher", now=fixed_now)

    records = attendance_repo.list_for_session(1)
    assert len(records) == 1
    assert records[0].is_present is False


def test_provenance_flags_follow_last_writer(container, fixed_now):
    svc = container.attendance_service

    first = svc.mark_attendance(1, ALICE.student_id, True, MarkedBy.SELF, now=fixed_now)
    assert (first.marked_by_self, first.marked_by_teacher) == (True, False)

    second = svc.mark_attendance(1, ALICE.student_id, True, "teacher", now=fixed_now, updated_by=100)
    assert (second.marked_by_self, second.marked_by_teacher) == (False, True)
    assert second.updated_by == 100
    assert second.attendance_id == first.attendance_id


def test_mark_uses_supplied_clock(container, fixed_now):
    rec = container.attendance_service.mark_attendance(1, BOB.student_id, True, "teacher", now=fixed_now)

    assert rec.marked_at == fixed_now


@pytest.mark.parametrize("is_present", [1, "true", None])
def test_mark_rejects_non_boolean_flag(container, attendance_repo, is_present):
    with pytest.raises(ValidationError):
        container.attendance_service.mark_attendance(1, ALICE.student_id, is_present, "teacher")

    assert attendance_repo.records == {}


def test_mark_rejects_unknown_provenance(container):
    with pytest.raises(ValidationError):
        container.attendance_service.mark_attendance(1, ALICE.student_id, True, "admin")


def test_mark_unknown_session_or_student(container):
    svc = container.attendance_service

    with pytest.raises(NotFoundError):
        svc.mark_attendance(99, ALICE.student_id, True, "teacher")
    with pytest.raises(NotFoundError):
        svc.mark_attendance(1, 404, True, "teacher")


def test_bulk_mark_reports_unknown_student_without_rolling_back(container, attendance_repo, fixed_now):
    result = container.attendance_service.bulk_mark_all(1, [1, 2, 404], True, "teacher", now=fixed_now)

    assert [r.student_id for r in result.succeeded] == [1, 2]
    assert len(result.failed) == 1
    assert result.failed[0].student_id == 404
    assert result.failed[0].kind == "not_found"
    assert result.ok is False
    assert {k[1] for k in attendance_repo.records} == {1, 2}


def test_bulk_mark_collects_malformed_ids(container):
    result = container.attendance_service.bulk_mark_all(1, [1, "x", True], False, "teacher")

    assert [r.student_id for r in result.succeeded] == [1]
    assert [f.kind for f in result.failed] == ["validation_error", "validation_error"]


def test_bulk_mark_empty_list_is_a_no_op(container, attendance_repo):
    result = container.attendance_service.bulk_mark_all(1, [], True, "teacher")

    assert result.ok
    assert result.succeeded == []
    assert attendance_repo.records == {}


def test_bulk_mark_batch_errors_raise(container):
    svc = container.attendance_service

    with pytest.raises(NotFoundError):
        svc.bulk_mark_all(99, [1], True, "teacher")
    with pytest.raises(ValidationError):
        svc.bulk_mark_all(1, [1], "yes", "teacher")


def test_self_mark_during_session(container, fixed_now):
    rec = container.attendance_service.self_mark(1, ALICE.student_id, now=fixed_now)

    assert rec.is_present is True
    assert rec.marked_by_self is True
    assert rec.marked_by_teacher is False


def test_self_mark_outside_window_is_rejected(container, fixed_now):
    with pytest.raises(ValidationError, match="inactive session"):
        container.attendance_service.self_mark(2, ALICE.student_id, now=fixed_now)


def test_self_mark_allowed_when_session_flagged_active(container, sessions_repo, fixed_now):
    sessions_repo.set_active(2, is_active=True)

    rec = container.attendance_service.self_mark(2, ALICE.student_id, now=fixed_now)

    assert rec.session_id == 2


def test_self_mark_requires_enrollment(container, fixed_now):
    with pytest.raises(AuthorizationError):
        container.attendance_service.self_mark(1, 9, now=fixed_now)


def test_mark_during_a_view_read_is_visible_to_the_next_read(container, attendance_repo, fixed_now):
    svc = container.attendance_service
    read_records = attendance_repo.list_for_session

    def read_then_mark(session_id):
        snapshot = read_records(session_id)
        svc.mark_attendance(session_id, ALICE.student_id, True, "teacher", now=fixed_now)
        return snapshot

    attendance_repo.list_for_session = read_then_mark
    stale = svc.reconciled_view(1)
    attendance_repo.list_for_session = read_records

    assert stale.entry_for(ALICE.student_id).is_present is False
    fresh = svc.reconciled_view(1)
    assert fresh.entry_for(ALICE.student_id).is_present is True
    assert isinstance(fresh.entry_for(ALICE.student_id), RecordedEntry)


def test_staff_cannot_mark_students_outside_the_unit_roster(container, attendance_repo):
    with pytest.raises(ValidationError, match="not enrolled"):
        container.attendance_service.mark_attendance(1, OUTSIDER.student_id, True, "teacher")

    result = container.attendance_service.bulk_mark_all(1, [ALICE.student_id, OUTSIDER.student_id], True, "teacher")

    assert [r.student_id for r in result.succeeded] == [ALICE.student_id]
    assert [(f.student_id, f.kind) for f in result.failed] == [(OUTSIDER.student_id, "validation_error")]
    assert set(attendance_repo.records) == {(1, ALICE.student_id)}


def test_correct_record_updates_the_same_pair(container, attendance_repo, fixed_now):
    svc = container.attendance_service
    original = svc.self_mark(1, ALICE.student_id, now=fixed_now)

    corrected = svc.correct_record(original.attendance_id, False, updated_by=100, now=fixed_now)

    assert corrected.attendance_id == original.attendance_id
    assert (corrected.session_id, corrected.student_id) == (1, ALICE.student_id)
    assert corrected.is_present is False
    assert (corrected.marked_by_self, corrected.marked_by_teacher) == (False, True)
    assert corrected.updated_by == 100
    assert len(attendance_repo.records) == 1


def test_correct_record_errors(container, fixed_now):
    svc = container.attendance_service
    rec = svc.mark_attendance(1, BOB.student_id, True, "teacher", now=fixed_now)

    with pytest.raises(NotFoundError):
        svc.correct_record(999, True, updated_by=100)
    with pytest.raises(ValidationError):
        svc.correct_record(rec.attendance_id, "no", updated_by=100)


def test_records_for_student(container):
    svc = container.attendance_service
    svc.mark_attendance(1, ALICE.student_id, True, "teacher", now=datetime(2026, 3, 2, 10, 10))
    svc.mark_attendance(2, ALICE.student_id, False, "teacher", now=datetime(2026, 3, 2, 14, 10))

    assert {r.session_id for r in svc.records_for_student(ALICE.student_id)} == {1, 2}
    with pytest.raises(NotFoundError):
        svc.records_for_student(404)
