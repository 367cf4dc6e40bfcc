"""Question upload validation and listing."""
import pytest

from prereq_coach.domain.question.rules import validate_question_content


def _payload(**overrides):
    data = {
        "question": "What does len([1, 2]) return?",
        "option1": "1",
        "option2": "2",
        "option3": "3",
        "option4": "Error",
        "correctAnswer": "2",
        "question_type": "python",
        "concept_id": None,
    }
    data.update(overrides)
    return data


# ------------------------------------------------------------------
# Rules
# ------------------------------------------------------------------
def test_flat_option_fields_are_collected():
    question = validate_question_content(_payload()).unwrap()
    assert question.options == ["1", "2", "3", "Error"]
    assert question.correct_option_index == 2


def test_blank_middle_option_rejected():
    result = validate_question_content(
        _payload(option1="A", option2="", option3="C", option4="D", correctAnswer=3)
    )
    assert not result.is_success
    assert "Option 2" in result.error


def test_blank_middle_option_in_list_rejected():
    result = validate_question_content(_payload(options=["A", None, "C"], correctAnswer=3))
    assert not result.is_success


def test_trailing_blank_options_keep_answer_position():
    question = validate_question_content(
        _payload(option1="A", option2="B", option3="C", option4="  ", correctAnswer=3)
    ).unwrap()
    assert question.options == ["A", "B", "C"]
    assert question.options[question.correct_option_index - 1] == "C"


def test_options_list_may_have_fewer_than_four():
    question = validate_question_content(
        _payload(options=["True", "False"], correctAnswer=2)
    ).unwrap()
    assert question.options == ["True", "False"]


@pytest.mark.parametrize(
    "overrides",
    [
        {"question": "  "},
        {"options": []},
        {"options": ["a", "b", "c", "d", "e"]},
        {"correctAnswer": 5},
        {"correctAnswer": 0},
        {"correctAnswer": "b"},
        {"options": ["a", "b"], "correctAnswer": 3},
        {"question_type": ""},
        {"concept_id": "abc"},
    ],
)
def test_invalid_questions_rejected(overrides):
    assert not validate_question_content(_payload(**overrides)).is_success


def test_oversized_concept_id_rejected():
    assert not validate_question_content(_payload(concept_id=2 ** 64)).is_success


@pytest.mark.parametrize("blank", [None, "", "undefined", "null"])
def test_blank_concept_reference_means_unlinked(blank):
    assert validate_question_content(_payload(concept_id=blank)).unwrap().concept_id is None


# ------------------------------------------------------------------
# Application service
# ------------------------------------------------------------------
def test_upload_with_unknown_concept_writes_nothing(question_svc):
    result = question_svc.upload_question(_payload(concept_id=42))
    assert not result.is_success
    assert "42" in result.error
    assert question_svc.list_questions("python") == []


def test_upload_without_concept_stores_null(question_svc):
    question = question_svc.upload_question(_payload(concept_id="")).unwrap()
    stored = question_svc.get_question(question.id)
    assert stored.concept_id is None
    assert stored.options == ["1", "2", "3", "Error"]


def test_upload_with_existing_concept(question_svc, concept_svc):
    concept = concept_svc.create_concept({"name": "Lists"}).unwrap()
    question = question_svc.upload_question(_payload(concept_id=str(concept.id))).unwrap()
    assert question_svc.get_question(question.id).concept_id == concept.id


def test_upload_with_gap_in_options_writes_nothing(question_svc):
    result = question_svc.upload_question(_payload(option2=None, correctAnswer=3))
    assert not result.is_success
    assert question_svc.list_questions("python") == []


def test_list_questions_in_id_order_and_by_type(question_svc):
    first = question_svc.upload_question(_payload(question="First?")).unwrap()
    question_svc.upload_question(_payload(question="Other type?", question_type="sql")).unwrap()
    second = question_svc.upload_question(_payload(question="Second?")).unwrap()
    listed = question_svc.list_questions("python")
    assert [q.id for q in listed] == [first.id, second.id]
