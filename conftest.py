# conftest.py
"""
공용 pytest fixture

- frozen_clock: DB 시계(clock.db_now) 고정 / 이동
- live_events: 실시간 알림(exam:autoSubmitted) 기록용 mock (autouse)
- cert_issuer: 수료증 발급 협력자 mock
"""
from __future__ import annotations

import itertools
from datetime import datetime, timedelta, timezone as dt_timezone
from types import SimpleNamespace
from unittest import mock

import pytest

from apps.shared.contracts.certificate import IssueOutcome

T0 = datetime(2026, 3, 2, 9, 0, 0, tzinfo=dt_timezone.utc)


class FrozenClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def set(self, now: datetime) -> None:
        self.now = now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def frozen_clock(monkeypatch):
    c = FrozenClock(T0)
    monkeypatch.setattr("apps.domains.results.services.clock.db_now", c)
    return c


@pytest.fixture(autouse=True)
def live_events(monkeypatch):
    notify = mock.Mock()
    monkeypatch.setattr(
        "apps.domains.results.services.finalizer.notify_auto_submitted",
        notify,
    )
    return notify


@pytest.fixture
def cert_issuer(monkeypatch):
    issuer = mock.Mock()
    issuer.issue.return_value = IssueOutcome.ok()
    monkeypatch.setattr(
        "apps.domains.results.services.finalizer.get_certificate_issuer",
        lambda: issuer,
    )
    return issuer


@pytest.fixture
def make_user(db):
    from apps.core.models import User

    seq = itertools.count(1)

    def _make(role=User.Role.STUDENT, **kwargs):
        n = next(seq)
        return User.objects.create_user(
            username=f"{str(role).lower()}{n}",
            password="pw-1234",
            role=role,
            **kwargs,
        )

    return _make


@pytest.fixture
def student(make_user):
    return make_user()


@pytest.fixture
def instructor(make_user):
    from apps.core.models import User

    return make_user(role=User.Role.INSTRUCTOR)


@pytest.fixture
def make_exam(db):
    """
    mcq(10점, 정답 1개) + descriptive(10점, keywords 2개, 최소 5단어) 기본 구성.
    coding=True 면 coding 문항(10점) 추가.
    """
    from apps.domains.exams.models import Exam, ExamQuestion, McqOption

    def _make(*, duration_minutes=60, grace=0, pass_percentage=50, course=None, coding=False):
        exam = Exam.objects.create(
            title="Algorithms midterm",
            duration_minutes=duration_minutes,
            disconnect_grace_seconds=grace,
            pass_percentage=pass_percentage,
            course=course,
        )
        mcq = ExamQuestion.objects.create(
            exam=exam,
            question_type=ExamQuestion.QuestionType.MCQ,
            text="Which structure is LIFO?",
            marks=10,
            order=1,
        )
        right = McqOption.objects.create(question=mcq, text="Stack", is_correct=True)
        wrong = McqOption.objects.create(question=mcq, text="Queue", is_correct=False)
        desc = ExamQuestion.objects.create(
            exam=exam,
            question_type=ExamQuestion.QuestionType.DESCRIPTIVE,
            text="Explain recursion.",
            marks=10,
            order=2,
            keywords=["recursion", "base case"],
            min_word_count=5,
        )
        code = None
        if coding:
            code = ExamQuestion.objects.create(
                exam=exam,
                question_type=ExamQuestion.QuestionType.CODING,
                text="Implement fib(n).",
                marks=10,
                order=3,
            )
        return SimpleNamespace(
            exam=exam, mcq=mcq, right=right, wrong=wrong, desc=desc, code=code,
        )

    return _make


@pytest.fixture
def paper(make_exam):
    return make_exam(grace=30)
