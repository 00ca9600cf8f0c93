from typing import Dict, Literal, Optional
from pydantic import BaseModel, Field

from .course import PracticeExercise, SectionRead


class TrainerTaskRead(BaseModel):
    id: str
    kind: Literal["exercise", "quiz"]
    module_id: str
    module_title: str
    title: str
    exercise: Optional[PracticeExercise] = None
    section: Optional[SectionRead] = None


class TrainerCheck(BaseModel):
    answers: Dict[str, str] = Field(default_factory=dict)


class TrainerCheckResult(BaseModel):
    results: Dict[str, bool] = Field(default_factory=dict)
    score: int = 0
    explanations: Dict[str, str] = Field(default_factory=dict)
    system_prompt: str
