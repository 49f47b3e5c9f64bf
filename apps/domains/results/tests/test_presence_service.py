from datetime import timedelta
from unittest import mock

import pytest

from apps.domains.results.models import ExamAttempt, ExamResult
from apps.domains.results.services import presence_service
from apps.domains.results.services.attempt_service import ExamAttemptService
from apps.domains.results.services.presence_service import PresenceService

pytestmark = pytest.mark.django_db


def _attempt(paper, student):
    return ExamAttempt.objects.get(exam=paper.exam, student=student)


@pytest.fixture
def started(paper, student, frozen_clock):
    ExamAttemptService.start_or_resume(exam_id=paper.exam.id, student_id=student.id)
    return paper


def test_disconnect_marks_attempt(started, student, frozen_clock):
    frozen_clock.advance(minutes=5)

    assert PresenceService.record_disconnect(student_id=student.id) == []
    assert _attempt(started, student).disconnected_at == frozen_clock.now


def test_repeated_disconnect_keeps_first_mark(started, student, frozen_clock):
    first = frozen_clock.advance(minutes=5)
    PresenceService.record_disconnect(student_id=student.id)
    frozen_clock.advance(seconds=10)
    PresenceService.record_disconnect(student_id=student.id)

    assert _attempt(started, student).disconnected_at == first


def test_reconnect_within_grace_clears_mark(started, student, frozen_clock, live_events):
    disconnected = frozen_clock.advance(minutes=5)
    PresenceService.record_disconnect(student_id=student.id)
    frozen_clock.set(disconnected + timedelta(seconds=29))

    assert PresenceService.reconcile_on_connect(student_id=student.id) == []

    attempt = _attempt(started, student)
    assert attempt.status == ExamAttempt.Status.IN_PROGRESS
    assert attempt.disconnected_at is None
    live_events.assert_not_called()


def test_reconnect_after_grace_auto_submits(started, student, frozen_clock, live_events):
    disconnected = frozen_clock.advance(minutes=5)
    PresenceService.record_disconnect(student_id=student.id)
    frozen_clock.set(disconnected + timedelta(seconds=31))

    assert PresenceService.reconcile_on_connect(student_id=student.id) == [started.exam.id]

    attempt = _attempt(started, student)
    assert attempt.status == ExamAttempt.Status.SUBMITTED
    assert attempt.disconnected_at is None
    assert ExamResult.objects.filter(exam=started.exam, student=student).count() == 1
    live_events.assert_called_once_with(
        student_id=student.id,
        exam_id=started.exam.id,
        submitted_at=frozen_clock.now,
    )


def test_zero_grace_reconnect_auto_submits(make_exam, student, frozen_clock):
    paper = make_exam(grace=0)
    ExamAttemptService.start_or_resume(exam_id=paper.exam.id, student_id=student.id)
    PresenceService.record_disconnect(student_id=student.id)
    frozen_clock.advance(seconds=1)

    assert PresenceService.reconcile_on_connect(student_id=student.id) == [paper.exam.id]


def test_disconnect_after_deadline_auto_submits(started, student, frozen_clock, live_events):
    frozen_clock.advance(minutes=60, seconds=31)

    assert PresenceService.record_disconnect(student_id=student.id) == [started.exam.id]
    assert _attempt(started, student).is_submitted
    live_events.assert_called_once()


def test_connect_after_deadline_without_disconnect_auto_submits(started, student, frozen_clock):
    frozen_clock.advance(hours=2)

    assert PresenceService.reconcile_on_connect(student_id=student.id) == [started.exam.id]


def test_submitted_attempts_are_left_alone(started, student, frozen_clock, live_events):
    ExamAttempt.objects.filter(exam=started.exam, student=student).update(
        status=ExamAttempt.Status.SUBMITTED,
        submitted_at=frozen_clock.now,
    )
    frozen_clock.advance(hours=2)

    assert PresenceService.record_disconnect(student_id=student.id) == []
    assert PresenceService.reconcile_on_connect(student_id=student.id) == []
    live_events.assert_not_called()


def test_failure_on_one_attempt_does_not_block_others(make_exam, student, frozen_clock):
    a = make_exam()
    b = make_exam()
    for p in (a, b):
        ExamAttemptService.start_or_resume(exam_id=p.exam.id, student_id=student.id)
    frozen_clock.advance(hours=2)

    real_finalize = presence_service.finalize_attempt

    def flaky(attempt, **kwargs):
        if attempt.exam_id == a.exam.id:
            raise RuntimeError("boom")
        return real_finalize(attempt, **kwargs)

    with mock.patch(
        "apps.domains.results.services.presence_service.finalize_attempt",
        side_effect=flaky,
    ):
        done = PresenceService.reconcile_on_connect(student_id=student.id)

    assert done == [b.exam.id]
    assert not ExamAttempt.objects.get(exam=a.exam, student=student).is_submitted
