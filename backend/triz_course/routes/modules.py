"""Routes for course modules, tests and practice."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from triz_course.progress import ProgressStore, get_progress_store
from triz_course.schemas import (
    AvailabilityRead,
    Module,
    ModuleRead,
    ModuleSummary,
    PracticeResult,
    PracticeSubmission,
    SectionRead,
    TestResult,
    TestSubmission,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/modules", tags=["modules"])


def _get_module(store: ProgressStore, module_id: str) -> Module:
    module = store.catalog.get(module_id)
    if module is None:
        raise HTTPException(status_code=404, detail="Module not found")
    return module


def _get_open_module(store: ProgressStore, module_id: str) -> Module:
    """Module whose test and practice may be taken right now."""
    module = _get_module(store, module_id)
    if not store.is_available(module_id):
        logger.warning("Attempt on locked module %s rejected", module_id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Module is locked"
        )
    if module.coming_soon:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Module content is not available yet",
        )
    return module


@router.get("/", response_model=list[ModuleSummary])
def list_modules(store: ProgressStore = Depends(get_progress_store)):
    summaries = []
    for m in store.catalog:
        record = store.get(m.id)
        summaries.append(
            ModuleSummary(
                id=m.id,
                title=m.title,
                coming_soon=m.coming_soon,
                available=store.is_available(m.id),
                completed=store.is_completed(m.id),
                practice_completed=store.is_practice_completed(m.id),
                best_score=record.best_score if record else 0,
            )
        )
    return summaries


@router.get("/{module_id}", response_model=ModuleRead)
def read_module(
    module_id: str, store: ProgressStore = Depends(get_progress_store)
):
    """Module content without the correct answers."""
    module = _get_module(store, module_id)
    if not store.is_available(module_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Module is locked"
        )
    return ModuleRead(
        id=module.id,
        title=module.title,
        theory=module.theory,
        practice_exercises=module.practice_exercises,
        practice_sections=[SectionRead.from_section(s) for s in module.practice_sections],
        test_sections=[SectionRead.from_section(s) for s in module.test_sections],
        pass_criteria=module.pass_criteria,
        coming_soon=module.coming_soon,
        next_module_id=store.catalog.next_module_id(module.id),
    )


@router.get("/{module_id}/available", response_model=AvailabilityRead)
def module_available(
    module_id: str, store: ProgressStore = Depends(get_progress_store)
):
    return AvailabilityRead(module_id=module_id, available=store.is_available(module_id))


@router.post("/{module_id}/test", response_model=TestResult)
def submit_test(
    module_id: str,
    submission: TestSubmission,
    store: ProgressStore = Depends(get_progress_store),
):
    module = _get_open_module(store, module_id)
    results, score, passed = store.submit_test(module_id, submission.answers)
    record = store.get(module_id)
    return TestResult(
        score=score,
        passed=passed,
        results=results,
        total_questions=len(results),
        best_score=record.best_score,
        completed=record.completed,
        pass_criteria=module.pass_criteria,
        explanations={q.id: q.explanation for q in store.catalog.test_questions(module)},
        next_module_id=store.catalog.next_module_id(module_id),
    )


@router.post("/{module_id}/practice", response_model=PracticeResult)
def submit_practice(
    module_id: str,
    submission: PracticeSubmission,
    store: ProgressStore = Depends(get_progress_store),
):
    module = _get_open_module(store, module_id)
    try:
        questions = store.catalog.practice_questions(module, submission.section_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Section not found")
    results = store.submit_practice(module_id, submission.answers, submission.section_id)
    return PracticeResult(
        results=results,
        explanations={q.id: q.explanation for q in questions},
    )
