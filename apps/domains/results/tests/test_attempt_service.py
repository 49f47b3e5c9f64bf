from datetime import timedelta

import pytest

from apps.domains.enrollment.models import Course, Enrollment
from apps.domains.results.errors import (
    AlreadySubmitted,
    AttemptNotFound,
    ExamNotFound,
    NotEnrolled,
)
from apps.domains.results.models import ExamAnswer, ExamAttempt, ExamResult
from apps.domains.results.services.attempt_service import ExamAttemptService
from apps.domains.results.services.submission_service import AnswerInput, ExamSubmissionService

pytestmark = pytest.mark.django_db


def test_start_creates_window_from_db_clock(paper, student, frozen_clock):
    window = ExamAttemptService.start_or_resume(exam_id=paper.exam.id, student_id=student.id)

    assert window.status == ExamAttempt.Status.IN_PROGRESS
    assert window.start_time == frozen_clock.now
    assert window.end_time == frozen_clock.now + timedelta(minutes=60)
    assert window.deadline == window.end_time + timedelta(seconds=30)
    assert window.server_time == frozen_clock.now


def test_start_is_idempotent_and_never_extends(paper, student, frozen_clock):
    first = ExamAttemptService.start_or_resume(exam_id=paper.exam.id, student_id=student.id)
    frozen_clock.advance(minutes=10)
    second = ExamAttemptService.start_or_resume(exam_id=paper.exam.id, student_id=student.id)

    assert (second.start_time, second.end_time) == (first.start_time, first.end_time)
    assert second.server_time == first.server_time + timedelta(minutes=10)
    assert ExamAttempt.objects.filter(exam=paper.exam, student=student).count() == 1


def test_start_after_submit_is_rejected(paper, student, frozen_clock):
    ExamAttemptService.start_or_resume(exam_id=paper.exam.id, student_id=student.id)
    ExamSubmissionService.submit_exam(exam_id=paper.exam.id, student_id=student.id, answers=[])

    with pytest.raises(AlreadySubmitted):
        ExamAttemptService.start_or_resume(exam_id=paper.exam.id, student_id=student.id)
    assert ExamAttempt.objects.filter(exam=paper.exam, student=student).count() == 1


def test_resume_after_deadline_auto_submits(paper, student, frozen_clock, live_events):
    ExamAttemptService.start_or_resume(exam_id=paper.exam.id, student_id=student.id)
    frozen_clock.advance(minutes=60, seconds=31)

    with pytest.raises(AlreadySubmitted):
        ExamAttemptService.start_or_resume(exam_id=paper.exam.id, student_id=student.id)

    attempt = ExamAttempt.objects.get(exam=paper.exam, student=student)
    assert attempt.status == ExamAttempt.Status.SUBMITTED
    assert ExamResult.objects.filter(exam=paper.exam, student=student).count() == 1
    live_events.assert_called_once()


def test_resume_within_grace_clears_disconnect(paper, student, frozen_clock):
    ExamAttemptService.start_or_resume(exam_id=paper.exam.id, student_id=student.id)
    ExamAttempt.objects.filter(exam=paper.exam, student=student).update(
        disconnected_at=frozen_clock.now,
    )
    frozen_clock.advance(seconds=29)

    window = ExamAttemptService.start_or_resume(exam_id=paper.exam.id, student_id=student.id)

    assert window.status == ExamAttempt.Status.IN_PROGRESS
    assert window.disconnected_at is None


def test_inactive_or_missing_exam(paper, student, frozen_clock):
    paper.exam.is_active = False
    paper.exam.save(update_fields=["is_active"])

    with pytest.raises(ExamNotFound):
        ExamAttemptService.start_or_resume(exam_id=paper.exam.id, student_id=student.id)
    with pytest.raises(ExamNotFound):
        ExamAttemptService.start_or_resume(exam_id=999999, student_id=student.id)


def test_course_linked_exam_requires_active_enrollment(make_exam, student, frozen_clock):
    course = Course.objects.create(title="CS101")
    paper = make_exam(course=course)

    with pytest.raises(NotEnrolled):
        ExamAttemptService.start_or_resume(exam_id=paper.exam.id, student_id=student.id)

    Enrollment.objects.create(student=student, course=course, status=Enrollment.Status.PENDING)
    with pytest.raises(NotEnrolled):
        ExamAttemptService.start_or_resume(exam_id=paper.exam.id, student_id=student.id)

    Enrollment.objects.filter(student=student, course=course).update(status=Enrollment.Status.ACTIVE)
    window = ExamAttemptService.start_or_resume(exam_id=paper.exam.id, student_id=student.id)
    assert window.status == ExamAttempt.Status.IN_PROGRESS


def test_status_before_start(paper, student, frozen_clock):
    with pytest.raises(AttemptNotFound):
        ExamAttemptService.get_status(exam_id=paper.exam.id, student_id=student.id)


def test_status_reports_submission(paper, student, frozen_clock):
    ExamAttemptService.start_or_resume(exam_id=paper.exam.id, student_id=student.id)
    frozen_clock.advance(minutes=5)
    ExamSubmissionService.submit_exam(exam_id=paper.exam.id, student_id=student.id, answers=[])

    window = ExamAttemptService.get_status(exam_id=paper.exam.id, student_id=student.id)
    assert window.status == ExamAttempt.Status.SUBMITTED
    assert window.submitted_at == frozen_clock.now


def test_rewrite_resets_window_answers_and_result(paper, student, frozen_clock):
    ExamAttemptService.start_or_resume(exam_id=paper.exam.id, student_id=student.id)
    ExamSubmissionService.submit_exam(
        exam_id=paper.exam.id,
        student_id=student.id,
        answers=[AnswerInput(question_id=paper.mcq.id, selected_option_id=paper.right.id)],
    )
    frozen_clock.advance(hours=3)

    window = ExamAttemptService.rewrite(exam_id=paper.exam.id, student_id=student.id)

    assert window.status == ExamAttempt.Status.IN_PROGRESS
    assert window.start_time == frozen_clock.now
    assert window.end_time == frozen_clock.now + timedelta(minutes=60)
    assert window.submitted_at is None
    assert not ExamAnswer.objects.filter(exam=paper.exam, student=student).exists()
    assert not ExamResult.objects.filter(exam=paper.exam, student=student).exists()


def test_rewrite_without_attempt_opens_one(paper, student, frozen_clock):
    window = ExamAttemptService.rewrite(exam_id=paper.exam.id, student_id=student.id)
    assert window.status == ExamAttempt.Status.IN_PROGRESS
    assert window.end_time == frozen_clock.now + timedelta(minutes=60)
