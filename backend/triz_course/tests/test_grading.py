"""Tests for answer grading and the pass decision."""

import pathlib
import sys

# Allow importing the triz_course package
sys.path.append(str(pathlib.Path(__file__).resolve().parents[2]))

from triz_course.grading import check_answer, decide_pass, grade_question, grade_set
from triz_course.schemas import FreeFormQuestion, MultipleChoiceQuestion, PassCriteria


def _mc(correct="b"):
    return MultipleChoiceQuestion(
        id="q-mc",
        text="Pick one",
        options=[
            {"id": "a", "label": "First"},
            {"id": "b", "label": "Second"},
            {"id": "ab", "label": "Both"},
        ],
        correct_answer=correct,
    )


def _free(reference="авторучка"):
    return FreeFormQuestion(id="q-free", text="Name it", correct_answer=reference)


def test_multiple_choice_is_case_insensitive():
    q = _mc(correct="b")
    assert grade_question(q, "b")
    assert grade_question(q, "B")
    assert grade_question(q, "  b ")


def test_multiple_choice_does_not_accept_containment():
    q = _mc(correct="b")
    assert not grade_question(q, "ab")
    assert not grade_question(q, "a")
    assert not grade_question(q, "")


def test_free_form_empty_answer_is_wrong():
    assert not grade_question(_free(), "")
    assert not grade_question(_free(), "   ")
    assert not grade_question(_free(), None)


def test_free_form_exact_and_containment():
    q = _free("авторучка")
    assert grade_question(q, "Авторучка")
    assert grade_question(q, "ручка")  # reference contains the answer
    assert grade_question(q, "это авторучка с колпачком")  # answer contains reference
    assert not grade_question(q, "карандаш")


def test_grade_set_counts_correct_answers_and_treats_missing_as_empty():
    questions = [_mc("b"), _free("авторучка")]
    results, score = grade_set(questions, {"q-mc": "b"})
    assert results == {"q-mc": True, "q-free": False}
    assert score == 1


def test_decide_pass_uses_threshold_for_both_criteria_types():
    for kind in ("min_score", "max_score"):
        criteria = PassCriteria(type=kind, threshold=2, total_questions=3)
        assert [decide_pass(s, criteria) for s in range(4)] == [False, False, True, True]


def test_example_attempt_passes():
    q1 = MultipleChoiceQuestion(
        id="Q1",
        text="?",
        options=[{"id": "a", "label": "A"}, {"id": "b", "label": "B"}],
        correct_answer="b",
    )
    q2 = FreeFormQuestion(id="Q2", text="?", correct_answer="авторучка")
    results, score = grade_set([q1, q2], {"Q1": "b", "Q2": "ручка"})
    assert results == {"Q1": True, "Q2": True}
    assert score == 2
    assert decide_pass(score, PassCriteria(threshold=1, total_questions=2))


def test_check_answer_feedback():
    correct, feedback = check_answer("Разделение во времени", "разделение во времени")
    assert correct
    assert feedback == "Ответ совпадает с эталонным."

    correct, feedback = check_answer("в пространстве", "во времени")
    assert not correct
    assert "во времени" in feedback
