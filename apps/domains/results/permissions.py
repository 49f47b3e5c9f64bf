# PATH: apps/domains/results/permissions.py
from __future__ import annotations

from rest_framework.permissions import BasePermission

from apps.core.permissions import is_admin_user, is_instructor_user


def can_manage_exam(u, exam) -> bool:
    """관리자는 전체, 강사는 본인 출제 시험(exam.instructor)만."""
    if not (u and getattr(u, "is_authenticated", False)):
        return False
    if is_admin_user(u):
        return True
    return bool(is_instructor_user(u) and exam.instructor_id == u.id)


class IsExamOwnerOrAdmin(BasePermission):
    """
    object permission (obj = Exam)
    view 에서 exam 을 읽은 뒤 self.check_object_permissions(request, exam) 호출.
    """

    message = "Only the exam's instructor or an admin can do this."

    def has_object_permission(self, request, view, obj):
        return can_manage_exam(getattr(request, "user", None), obj)
