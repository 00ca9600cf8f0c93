"""Database models used by the TRIZ course service.

Only learner progress is stored; course content is static and lives in
``course_content.py``.
"""

from typing import Dict, Optional
from sqlmodel import SQLModel, Field
from sqlalchemy import Column, JSON


class ModuleProgress(SQLModel, table=True):
    """Learner progress for a single module.

    ``position`` keeps the order in which records were last written.
    """

    module_id: str = Field(primary_key=True)
    position: int = 0
    completed: bool = False
    best_score: int = 0
    total_questions: int = 0  # size of the last graded test attempt
    last_attempt_answers: Dict[str, str] = Field(
        sa_column=Column(JSON), default_factory=dict
    )
    last_attempt_results: Optional[Dict[str, bool]] = Field(
        default=None, sa_column=Column(JSON, nullable=True)
    )
    practice_completed: bool = False
    practice_answers: Dict[str, str] = Field(
        sa_column=Column(JSON), default_factory=dict
    )
    practice_results: Dict[str, bool] = Field(
        sa_column=Column(JSON), default_factory=dict
    )

    def copy_record(self) -> "ModuleProgress":
        """Detached copy with its own answer/result maps."""
        return ModuleProgress(
            module_id=self.module_id,
            position=self.position,
            completed=self.completed,
            best_score=self.best_score,
            total_questions=self.total_questions,
            last_attempt_answers=dict(self.last_attempt_answers or {}),
            last_attempt_results=(
                None
                if self.last_attempt_results is None
                else dict(self.last_attempt_results)
            ),
            practice_completed=self.practice_completed,
            practice_answers=dict(self.practice_answers or {}),
            practice_results=dict(self.practice_results or {}),
        )
