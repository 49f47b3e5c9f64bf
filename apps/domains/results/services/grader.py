# apps/domains/results/services/grader.py
"""
채점 엔진 (순수 함수)

- DB / 시계 / 외부 I/O 없음
- 잘못된 입력은 예외가 아니라 0점 (단일 문항 payload 오류로 제출 전체를 잃지 않게)
- 반올림은 round-half-up 고정 (1.5 → 2, 33.33 → 33)
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable, List, Optional

MCQ = "mcq"
DESCRIPTIVE = "descriptive"
CODING = "coding"


def _ratio_marks(max_marks: int, numerator: int, denominator: int) -> int:
    if denominator <= 0:
        return 0
    return int(
        (Decimal(int(max_marks)) * Decimal(int(numerator)) / Decimal(int(denominator)))
        .quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    )


# ============================================================
# MCQ
# ============================================================

def grade_mcq(
    *,
    selected_option_id: Optional[int],
    correct_option_ids: Iterable[int],
    max_marks: int,
) -> int:
    """정답 option 선택 시 만점, 그 외(오답/미선택) 0점. 부분점수 없음."""
    if selected_option_id is None:
        return 0
    try:
        correct = {int(x) for x in correct_option_ids}
        return int(max_marks) if int(selected_option_id) in correct else 0
    except (TypeError, ValueError):
        return 0


# ============================================================
# Descriptive (키워드 휴리스틱)
# ============================================================

def _normalize_keywords(keywords: Any) -> List[str]:
    """
    list[str] 또는 JSON 문자열만 허용. 그 외 형태는 빈 목록.
    빈 문자열 키워드는 버린다.
    """
    if isinstance(keywords, str):
        try:
            keywords = json.loads(keywords or "[]")
        except ValueError:
            return []

    if not isinstance(keywords, (list, tuple)):
        return []

    out: List[str] = []
    for k in keywords:
        if not isinstance(k, str):
            return []
        k = k.strip().lower()
        if k:
            out.append(k)
    return out


def count_words(text: Optional[str]) -> int:
    if not isinstance(text, str):
        return 0
    return len(text.split())


def grade_descriptive(
    *,
    answer_text: Optional[str],
    keywords: Any,
    min_word_count: int,
    max_marks: int,
) -> int:
    """
    marks = round(max_marks * matched / total_keywords)

    - 키워드는 답안 전체(소문자)에 대한 substring 매칭. 근사치이며
      다른 단어 안에 포함된 경우도 매칭된다 (알려진 한계).
    - 키워드 없음 / 단어 수 미달 → 0
    """
    if not isinstance(answer_text, str) or not answer_text.strip():
        return 0

    kws = _normalize_keywords(keywords)
    if not kws:
        return 0

    try:
        minimum = int(min_word_count or 0)
    except (TypeError, ValueError):
        return 0

    if count_words(answer_text) < minimum:
        return 0

    haystack = answer_text.lower()
    matched = sum(1 for k in kws if k in haystack)

    return _ratio_marks(max_marks, matched, len(kws))


# ============================================================
# Dispatch
# ============================================================

def grade_answer(
    *,
    question_type: str,
    max_marks: int,
    selected_option_id: Optional[int] = None,
    correct_option_ids: Iterable[int] = (),
    answer_text: Optional[str] = None,
    keywords: Any = None,
    min_word_count: int = 0,
) -> Optional[int]:
    """
    문항 유형별 채점.

    Returns:
        점수(int). coding 은 자동채점 대상이 아니므로 None (미채점 = 0점 취급).
    """
    qtype = (question_type or "").strip().lower()

    if qtype == MCQ:
        return grade_mcq(
            selected_option_id=selected_option_id,
            correct_option_ids=correct_option_ids,
            max_marks=max_marks,
        )

    if qtype == DESCRIPTIVE:
        return grade_descriptive(
            answer_text=answer_text,
            keywords=keywords,
            min_word_count=min_word_count,
            max_marks=max_marks,
        )

    return None


# ============================================================
# Aggregate
# ============================================================

@dataclass(frozen=True)
class Aggregate:
    total_marks: int
    obtained_marks: int
    percentage: int
    passed: bool


def compute_percentage(obtained_marks: int, total_marks: int) -> int:
    if not total_marks or total_marks <= 0:
        return 0
    return _ratio_marks(100, obtained_marks, total_marks)


def compute_aggregate(
    *,
    question_marks: Iterable[int],
    obtained: Iterable[Optional[int]],
    pass_percentage: int,
) -> Aggregate:
    """
    total = Σ 문항 배점 (문항당 1회), obtained = Σ 문항 점수 (None → 0)
    """
    total = sum(int(m or 0) for m in question_marks)
    got = sum(int(x or 0) for x in obtained)
    pct = compute_percentage(got, total)

    return Aggregate(
        total_marks=total,
        obtained_marks=got,
        percentage=pct,
        passed=bool(pct >= int(pass_percentage or 0)),
    )
