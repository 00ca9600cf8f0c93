"""Learner progress: attempts, completion and module gating.

``ProgressStore`` is the single owner of the progress records. Callers only
ever receive copies, so nothing outside the store can change a record
without going through one of its methods.
"""

import logging
from typing import Mapping, Optional

from fastapi import Request

from triz_course.catalog import Catalog, default_catalog
from triz_course.errors import StorageError
from triz_course.grading import decide_pass, grade_set
from triz_course.models import ModuleProgress

logger = logging.getLogger(__name__)


class ProgressStore:
    def __init__(self, storage, catalog: Catalog = default_catalog):
        self.storage = storage
        self.catalog = catalog
        self._progress: list[ModuleProgress] = self._load()

    # --- persistence -------------------------------------------------------

    def _load(self) -> list[ModuleProgress]:
        try:
            return list(self.storage.load())
        except StorageError:
            logger.exception("Saved progress unreadable, starting empty")
            return []

    def _persist(self) -> None:
        try:
            self.storage.save(self._progress)
        except StorageError:
            # The in-memory state stays authoritative for this process.
            logger.exception("Failed to save progress")

    def _find(self, module_id: str) -> Optional[ModuleProgress]:
        for record in self._progress:
            if record.module_id == module_id:
                return record
        return None

    def _replace(self, record: ModuleProgress) -> None:
        self._progress = [
            p for p in self._progress if p.module_id != record.module_id
        ]
        self._progress.append(record)
        self._persist()

    # --- queries -----------------------------------------------------------

    @property
    def progress(self) -> list[ModuleProgress]:
        return [p.copy_record() for p in self._progress]

    def get(self, module_id: str) -> Optional[ModuleProgress]:
        record = self._find(module_id)
        return record.copy_record() if record else None

    def is_completed(self, module_id: str) -> bool:
        record = self._find(module_id)
        return record.completed if record else False

    def is_practice_completed(self, module_id: str) -> bool:
        record = self._find(module_id)
        return record.practice_completed if record else False

    def is_available(self, module_id: str) -> bool:
        """A module is open once the nearest earlier authored module is done.

        Placeholder modules are skipped when looking back, and a module with
        only placeholders before it is open.
        """
        idx = self.catalog.index_of(module_id)
        if idx == -1:
            return False
        modules = self.catalog.modules
        for previous in reversed(modules[:idx]):
            if previous.coming_soon:
                continue
            return self.is_completed(previous.id)
        return True

    # --- attempts ----------------------------------------------------------

    def submit_test_attempt(
        self,
        module_id: str,
        answers: Mapping[str, str],
        results: Mapping[str, bool],
        score: int,
        total_questions: int,
    ) -> bool:
        """Record a graded test attempt and return whether it passed.

        Completion is sticky and the best score only grows. The last-attempt
        answers and results are replaced wholesale.
        """
        module = self.catalog.get(module_id)
        if module is None:
            logger.warning("Test attempt for unknown module %s ignored", module_id)
            return False

        passed = decide_pass(score, module.pass_criteria)
        existing = self._find(module_id)
        record = existing.copy_record() if existing else ModuleProgress(module_id=module_id)
        was_completed = record.completed

        record.best_score = max(record.best_score, score)
        record.completed = record.completed or passed
        record.total_questions = total_questions
        record.last_attempt_answers = dict(answers)
        record.last_attempt_results = dict(results)
        self._replace(record)

        logger.info(
            "Test attempt for %s: score %s/%s, passed=%s",
            module_id,
            score,
            total_questions,
            passed,
        )
        if record.completed and not was_completed:
            logger.info("Module %s completed", module_id)
        return passed

    def submit_practice_attempt(
        self,
        module_id: str,
        answers: Mapping[str, str],
        results: Mapping[str, bool],
    ) -> None:
        """Mark practice done and merge answers/results into earlier ones."""
        existing = self._find(module_id)
        record = existing.copy_record() if existing else ModuleProgress(module_id=module_id)
        record.practice_completed = True
        record.practice_answers = {**record.practice_answers, **answers}
        record.practice_results = {**record.practice_results, **results}
        self._replace(record)
        logger.info("Practice attempt for %s recorded (%s answers)", module_id, len(answers))

    def reset_attempt(self, module_id: str) -> None:
        """Forget the last test attempt, keeping completion and best score."""
        existing = self._find(module_id)
        if existing is None:
            return
        record = existing.copy_record()
        record.last_attempt_answers = {}
        record.last_attempt_results = None
        self._replace(record)
        logger.info("Last attempt for %s reset", module_id)

    def clear(self) -> None:
        self._progress = []
        try:
            self.storage.clear()
        except StorageError:
            logger.exception("Failed to clear saved progress")
        logger.info("All progress cleared")

    # --- grading + recording -----------------------------------------------

    def submit_test(
        self, module_id: str, answers: Mapping[str, str]
    ) -> tuple[dict[str, bool], int, bool]:
        """Grade the module's whole test and record the attempt.

        Returns ``(results, score, passed)``. Raises ``KeyError`` for an
        unknown module.
        """
        module = self.catalog.get(module_id)
        if module is None:
            raise KeyError(module_id)
        questions = self.catalog.test_questions(module)
        results, score = grade_set(questions, answers)
        passed = self.submit_test_attempt(
            module_id, answers, results, score, len(questions)
        )
        return results, score, passed

    def submit_practice(
        self,
        module_id: str,
        answers: Mapping[str, str],
        section_id: Optional[str] = None,
    ) -> dict[str, bool]:
        """Grade practice questions (one section or all) and record them.

        Raises ``KeyError`` for an unknown module or section.
        """
        module = self.catalog.get(module_id)
        if module is None:
            raise KeyError(module_id)
        questions = self.catalog.practice_questions(module, section_id)
        results, _ = grade_set(questions, answers)
        self.submit_practice_attempt(module_id, answers, results)
        return results


def get_progress_store(request: Request) -> ProgressStore:
    """FastAPI dependency returning the store built at startup."""
    return request.app.state.progress_store
