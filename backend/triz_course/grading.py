"""Answer grading and pass/fail decisions.

All functions here are pure: they never touch progress or storage.
"""

from typing import Iterable, Mapping

from triz_course.schemas.course import (
    FreeFormQuestion,
    MultipleChoiceQuestion,
    PassCriteria,
    Question,
)


def _normalize(text: str | None) -> str:
    return (text or "").strip().lower()


def answers_match(submitted: str | None, reference: str | None) -> bool:
    """Lenient containment match used for free-form answers.

    An empty submission never matches.
    """
    user = _normalize(submitted)
    ref = _normalize(reference)
    if not user:
        return False
    return ref in user or user in ref


def grade_question(question: Question, submitted: str | None) -> bool:
    if isinstance(question, MultipleChoiceQuestion):
        return _normalize(submitted) == _normalize(question.correct_answer)
    if isinstance(question, FreeFormQuestion):
        return answers_match(submitted, question.correct_answer)
    raise TypeError(f"Unsupported question type: {type(question).__name__}")


def grade_set(
    questions: Iterable[Question], answers: Mapping[str, str]
) -> tuple[dict[str, bool], int]:
    """Grade every question; missing answers count as empty strings."""
    results: dict[str, bool] = {}
    score = 0
    for q in questions:
        correct = grade_question(q, answers.get(q.id, ""))
        results[q.id] = correct
        if correct:
            score += 1
    return results, score


def decide_pass(score: int, criteria: PassCriteria) -> bool:
    # min_score and max_score share one rule until max_score gets its own
    # product definition.
    return score >= criteria.threshold


MATCH_FEEDBACK = "Ответ совпадает с эталонным."


def check_answer(user_answer: str, reference_answer: str) -> tuple[bool, str]:
    """Compare a free-text answer to a reference and phrase feedback for it.

    Stand-in for model-based grading: it only applies containment matching.
    """
    correct = answers_match(user_answer, reference_answer)
    if correct:
        return True, MATCH_FEEDBACK
    return False, f"Эталонный ответ: {reference_answer}. Сравните с вашим ответом."
