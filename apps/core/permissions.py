# PATH: apps/core/permissions.py
from __future__ import annotations

from rest_framework.permissions import BasePermission


def _role(u) -> str:
    v = getattr(u, "role", None) or ""
    return str(v).upper()


def is_admin_user(u) -> bool:
    return bool(
        getattr(u, "is_superuser", False)
        or getattr(u, "is_staff", False)
        or _role(u) == "ADMIN"
    )


def is_instructor_user(u) -> bool:
    return bool(is_admin_user(u) or _role(u) == "INSTRUCTOR")


def is_student_user(u) -> bool:
    # 명시적으로 instructor/admin 아니면 student로 취급
    return bool(not is_instructor_user(u))


class IsStudent(BasePermission):
    message = "Student account required."

    def has_permission(self, request, view):
        u = getattr(request, "user", None)
        return bool(u and u.is_authenticated and is_student_user(u))


class IsInstructorOrAdmin(BasePermission):
    """
    시험 재응시(rewrite) 등 특권 작업 전용.
    """

    message = "Instructor or admin account required."

    def has_permission(self, request, view):
        u = getattr(request, "user", None)
        return bool(u and u.is_authenticated and is_instructor_user(u))
