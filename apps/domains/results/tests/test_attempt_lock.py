from unittest import mock

from django.db import connection
from django.db.backends.postgresql.base import DatabaseWrapper as PostgresWrapper

from apps.domains.results.services.finalizer import attempt_lock_queryset


def _compile_for_postgres(qs) -> str:
    pg = PostgresWrapper(
        {**connection.settings_dict, "ENGINE": "django.db.backends.postgresql", "NAME": "lms"},
        alias="pg_compile",
    )
    # 실제 연결 없이 트랜잭션 안인 것처럼 컴파일
    with mock.patch.object(pg, "get_autocommit", return_value=False):
        sql, _ = qs.query.get_compiler(connection=pg).as_sql()
    return sql


def test_attempt_lock_does_not_lock_shared_exam_row():
    sql = _compile_for_postgres(attempt_lock_queryset(exam_id=1, student_id=2))

    assert 'INNER JOIN "exams_exam"' in sql
    assert 'FOR UPDATE OF "results_exam_attempt"' in sql
