"""Tutor chat context and the random-task trainer."""

import random
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from triz_course.catalog import Catalog
from triz_course.schemas.course import (
    MultipleChoiceQuestion,
    PracticeExercise,
    Question,
    Section,
)

SYSTEM_PROMPT_PREFIX = (
    "Ты — преподаватель теории решения изобретательских задач (ТРИЗ). "
    "Твоя задача — помочь студенту разобраться в теме. Изучи задание, ответы "
    "студента, его вопрос и проконсультируй его по теме. Будь вежлив, обсуждай "
    "только ТРИЗ и смежные темы (например, креативность, алгоритмы и т.д.). "
    "Но не обсуждай нерелевантные темы. Обращайся к студенту напрямую на «вы» — "
    "например, «ваш ответ», «вы правильно заметили», «давайте разберём». "
    "Не упоминай студента в третьем лице."
)

NOT_ANSWERED = "Не отвечено"


def _answer_label(question: Question, answer: str) -> str:
    if isinstance(question, MultipleChoiceQuestion):
        return question.option_label(answer) or answer
    return answer


def _section_context(section: Section, answers: Mapping[str, str]) -> str:
    context = f"\n\n--- Задание: {section.title} ---"
    if section.description:
        context += f"\n{section.description}"
    for q in section.questions:
        user_answer = answers.get(q.id) or NOT_ANSWERED
        context += f"\n\nВопрос: {q.text}"
        context += f"\nОтвет студента: {_answer_label(q, user_answer)}"
        context += f"\nПравильный ответ: {_answer_label(q, q.correct_answer)}"
    return context


def section_prompt(section: Section, answers: Mapping[str, str]) -> str:
    return SYSTEM_PROMPT_PREFIX + _section_context(section, answers)


def attempt_prompt(sections: Sequence[Section], answers: Mapping[str, str]) -> str:
    """Prompt covering every section of a graded module attempt."""
    return SYSTEM_PROMPT_PREFIX + "".join(
        _section_context(s, answers) for s in sections
    )


def exercise_prompt(exercise: PracticeExercise) -> str:
    context = f"\n\n--- Задание ---\n{exercise.title}\n{exercise.description}"
    if exercise.hints:
        context += "\n\n--- Ответ и пояснение ---"
        for hint in exercise.hints:
            context += f"\n{hint.title}: {hint.content}"
    return SYSTEM_PROMPT_PREFIX + context


@dataclass
class TrainerTask:
    id: str
    module_id: str
    module_title: str
    exercise: Optional[PracticeExercise] = None
    section: Optional[Section] = None

    @property
    def kind(self) -> str:
        return "exercise" if self.exercise is not None else "quiz"

    @property
    def title(self) -> str:
        return self.exercise.title if self.exercise is not None else self.section.title


def build_trainer_tasks(catalog: Catalog) -> list[TrainerTask]:
    """Every practice exercise and section of the authored modules."""
    tasks = []
    for module in catalog:
        if module.coming_soon:
            continue
        for exercise in module.practice_exercises:
            tasks.append(
                TrainerTask(
                    id=f"{module.id}:{exercise.id}",
                    module_id=module.id,
                    module_title=module.title,
                    exercise=exercise,
                )
            )
        for section in module.practice_sections:
            tasks.append(
                TrainerTask(
                    id=f"{module.id}:{section.id}",
                    module_id=module.id,
                    module_title=module.title,
                    section=section,
                )
            )
    return tasks


def pick_random_task(
    tasks: list[TrainerTask],
    exclude: Optional[str] = None,
    rng: random.Random | None = None,
) -> Optional[TrainerTask]:
    """Random task, different from ``exclude`` whenever there is a choice."""
    if not tasks:
        return None
    rng = rng or random
    candidates = [t for t in tasks if t.id != exclude] if len(tasks) > 1 else tasks
    return rng.choice(candidates or tasks)
