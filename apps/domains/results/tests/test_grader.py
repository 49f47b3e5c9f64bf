import pytest

from apps.domains.results.services import grader

KEYWORDS = ["recursion", "base case"]


# ==================================================
# mcq
# ==================================================

def test_mcq_correct_option_gets_full_marks():
    assert grader.grade_mcq(selected_option_id=7, correct_option_ids=[7], max_marks=10) == 10


@pytest.mark.parametrize("selected", [8, None, "abc"])
def test_mcq_wrong_or_missing_selection_is_zero(selected):
    assert grader.grade_mcq(selected_option_id=selected, correct_option_ids=[7], max_marks=10) == 0


# ==================================================
# descriptive
# ==================================================

def test_descriptive_both_keywords():
    text = "Recursion needs a base case to stop calling itself"
    assert grader.grade_descriptive(
        answer_text=text, keywords=KEYWORDS, min_word_count=5, max_marks=10,
    ) == 10


def test_descriptive_one_keyword_is_half():
    text = "Recursion is when a function calls itself"
    assert grader.grade_descriptive(
        answer_text=text, keywords=KEYWORDS, min_word_count=5, max_marks=10,
    ) == 5


def test_descriptive_no_keyword_is_zero():
    text = "A loop repeats statements many times over"
    assert grader.grade_descriptive(
        answer_text=text, keywords=KEYWORDS, min_word_count=5, max_marks=10,
    ) == 0


def test_descriptive_below_min_word_count_is_zero():
    assert grader.grade_descriptive(
        answer_text="recursion base case", keywords=KEYWORDS, min_word_count=5, max_marks=10,
    ) == 0


def test_descriptive_without_keywords_is_zero():
    assert grader.grade_descriptive(
        answer_text="any long enough answer text here", keywords=[], min_word_count=0, max_marks=10,
    ) == 0


def test_descriptive_substring_match_inside_other_words():
    # "recursion" 이 "recursions" 안에서도 매칭 (알려진 한계 유지)
    text = "tail recursions avoid growing the stack"
    assert grader.grade_descriptive(
        answer_text=text, keywords=["recursion"], min_word_count=0, max_marks=4,
    ) == 4


def test_descriptive_rounds_half_up():
    # 3 * 1/2 = 1.5 → 2
    assert grader.grade_descriptive(
        answer_text="alpha only here", keywords=["alpha", "beta"], min_word_count=0, max_marks=3,
    ) == 2


def test_descriptive_accepts_json_encoded_keywords():
    text = "Recursion needs a base case to stop calling itself"
    assert grader.grade_descriptive(
        answer_text=text, keywords='["recursion", "base case"]', min_word_count=5, max_marks=10,
    ) == 10


@pytest.mark.parametrize("bad", ["{not json", {"k": "v"}, [1, 2], 42])
def test_descriptive_malformed_keywords_score_zero(bad):
    assert grader.grade_descriptive(
        answer_text="recursion base case and more words", keywords=bad, min_word_count=0, max_marks=10,
    ) == 0


# ==================================================
# dispatch / aggregate
# ==================================================

def test_coding_is_ungraded():
    assert grader.grade_answer(question_type="coding", max_marks=10, answer_text="def f(): pass") is None


def test_percentage_rounding():
    assert grader.compute_percentage(10, 30) == 33
    assert grader.compute_percentage(1, 8) == 13  # 12.5 → 13
    assert grader.compute_percentage(0, 0) == 0


def test_aggregate_counts_missing_and_ungraded_as_zero():
    agg = grader.compute_aggregate(
        question_marks=[10, 10, 10],
        obtained=[10, None, None],
        pass_percentage=33,
    )
    assert agg == grader.Aggregate(total_marks=30, obtained_marks=10, percentage=33, passed=True)


def test_aggregate_fails_below_pass_percentage():
    agg = grader.compute_aggregate(question_marks=[10, 10], obtained=[5, 0], pass_percentage=60)
    assert agg.percentage == 25
    assert agg.passed is False
