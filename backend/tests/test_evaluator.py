"""Answer evaluator tests, pure and without a database."""
import pytest

from prereq_coach.domain.evaluation.evaluator import AnswerEvaluator, parse_choice, percentage
from prereq_coach.domain.question.models import Question


def _questions(*correct, concept_id=None):
    return [
        Question(id=10 * (i + 1), text=f"Q{i}", options=["a", "b", "c", "d"],
                 correct_option_index=c, question_type="dsa", concept_id=concept_id)
        for i, c in enumerate(correct)
    ]


def test_all_correct():
    result = AnswerEvaluator().evaluate(_questions(1, 2, 3), [1, 2, 3])
    assert result.score == 3
    assert result.total == 3
    assert result.percentage == 100.0
    assert result.failed_question_ids == []


def test_failed_ids_keep_question_order():
    result = AnswerEvaluator().evaluate(_questions(1, 2, 3, 4), [2, 2, 1, 4])
    assert result.failed_question_ids == [10, 30]
    assert [r.is_correct for r in result.results] == [False, True, False, True]


def test_short_answer_list_marks_tail_incorrect():
    result = AnswerEvaluator().evaluate(_questions(1, 2, 3), [1])
    assert [r.is_correct for r in result.results] == [True, False, False]
    assert result.failed_question_ids == [20, 30]


def test_missing_answers_list_is_not_an_error():
    result = AnswerEvaluator().evaluate(_questions(1, 2), None)
    assert result.score == 0
    assert result.failed_question_ids == [10, 20]


@pytest.mark.parametrize("answer", ["abc", None, "", True, 2.5, [], {}])
def test_garbage_answers_compare_incorrect(answer):
    result = AnswerEvaluator().evaluate(_questions(1), [answer])
    assert result.results[0].is_correct is False


def test_numeric_strings_are_accepted():
    result = AnswerEvaluator().evaluate(_questions(2, 3), ["2", " 3 "])
    assert result.score == 2


def test_result_rows_carry_question_details():
    result = AnswerEvaluator().evaluate(_questions(4, concept_id=7), [1])
    row = result.results[0].to_dict()
    assert row == {
        "questionIndex": 0,
        "questionId": 10,
        "isCorrect": False,
        "correctAnswer": 4,
        "conceptId": 7,
    }


def test_empty_quiz_reports_zero_percent():
    result = AnswerEvaluator().evaluate([], [1, 2])
    assert result.total == 0
    assert result.percentage == 0.0


def test_percentage_rounds_to_two_places():
    assert percentage(1, 3) == 33.33
    assert percentage(2, 3) == 66.67
    assert percentage(0, 0) == 0.0


def test_parse_choice():
    assert parse_choice(3) == 3
    assert parse_choice("4") == 4
    assert parse_choice(2.0) == 2
    assert parse_choice("two") is None
    assert parse_choice(False) is None
