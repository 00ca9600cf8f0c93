"""Endpoints for reading and resetting learner progress."""

from fastapi import APIRouter, Depends, HTTPException

from triz_course.models import ModuleProgress
from triz_course.progress import ProgressStore, get_progress_store
from triz_course.schemas import ModuleProgressRead
from triz_course.tutor import attempt_prompt

router = APIRouter(prefix="/progress", tags=["progress"])


def _read(record: ModuleProgress) -> ModuleProgressRead:
    return ModuleProgressRead(
        module_id=record.module_id,
        completed=record.completed,
        best_score=record.best_score,
        total_questions=record.total_questions,
        last_attempt_answers=record.last_attempt_answers,
        last_attempt_results=record.last_attempt_results,
        practice_completed=record.practice_completed,
        practice_answers=record.practice_answers,
        practice_results=record.practice_results,
    )


@router.get("/", response_model=list[ModuleProgressRead])
def list_progress(store: ProgressStore = Depends(get_progress_store)):
    return [_read(p) for p in store.progress]


@router.get("/{module_id}", response_model=ModuleProgressRead)
def read_progress(
    module_id: str, store: ProgressStore = Depends(get_progress_store)
):
    record = store.get(module_id)
    if record is None:
        raise HTTPException(status_code=404, detail="No progress for module")
    return _read(record)


@router.get("/{module_id}/prompt")
def attempt_chat_prompt(
    module_id: str, store: ProgressStore = Depends(get_progress_store)
):
    """Tutor system prompt for the last graded test attempt."""
    module = store.catalog.get(module_id)
    record = store.get(module_id)
    if module is None or record is None or record.last_attempt_results is None:
        raise HTTPException(status_code=404, detail="No graded attempt for module")
    return {
        "system_prompt": attempt_prompt(
            module.test_sections, record.last_attempt_answers
        )
    }


@router.post("/{module_id}/reset")
def reset_attempt(
    module_id: str, store: ProgressStore = Depends(get_progress_store)
):
    """Clear the last test attempt so the test can be retaken."""
    store.reset_attempt(module_id)
    return {"status": "ok"}


@router.delete("/")
def clear_progress(store: ProgressStore = Depends(get_progress_store)):
    store.clear()
    return {"status": "ok"}
