"""Trainer: random practice tasks from across the course."""

from fastapi import APIRouter, Depends, HTTPException

from triz_course.grading import grade_set
from triz_course.progress import ProgressStore, get_progress_store
from triz_course.schemas import (
    SectionRead,
    TrainerCheck,
    TrainerCheckResult,
    TrainerTaskRead,
)
from triz_course.tutor import (
    TrainerTask,
    build_trainer_tasks,
    exercise_prompt,
    pick_random_task,
    section_prompt,
)

router = APIRouter(prefix="/trainer", tags=["trainer"])


def _read(task: TrainerTask) -> TrainerTaskRead:
    return TrainerTaskRead(
        id=task.id,
        kind=task.kind,
        module_id=task.module_id,
        module_title=task.module_title,
        title=task.title,
        exercise=task.exercise,
        section=SectionRead.from_section(task.section) if task.section else None,
    )


@router.get("/tasks", response_model=list[TrainerTaskRead])
def list_tasks(store: ProgressStore = Depends(get_progress_store)):
    return [_read(t) for t in build_trainer_tasks(store.catalog)]


@router.get("/random", response_model=TrainerTaskRead)
def random_task(
    exclude: str | None = None,
    store: ProgressStore = Depends(get_progress_store),
):
    """Pick a task, avoiding ``exclude`` (usually the current one)."""
    task = pick_random_task(build_trainer_tasks(store.catalog), exclude=exclude)
    if task is None:
        raise HTTPException(status_code=404, detail="No trainer tasks")
    return _read(task)


@router.post("/tasks/{task_id}/check", response_model=TrainerCheckResult)
def check_task(
    task_id: str,
    data: TrainerCheck,
    store: ProgressStore = Depends(get_progress_store),
):
    """Grade a trainer task and build the tutor prompt; progress is untouched."""
    task = next((t for t in build_trainer_tasks(store.catalog) if t.id == task_id), None)
    if task is None:
        raise HTTPException(status_code=404, detail="Task not found")
    if task.exercise is not None:
        return TrainerCheckResult(system_prompt=exercise_prompt(task.exercise))
    results, score = grade_set(task.section.questions, data.answers)
    return TrainerCheckResult(
        results=results,
        score=score,
        explanations={q.id: q.explanation for q in task.section.questions},
        system_prompt=section_prompt(task.section, data.answers),
    )
