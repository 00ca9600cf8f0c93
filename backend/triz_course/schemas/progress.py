"""Request and response models for test/practice submissions and progress."""

from typing import Dict, Optional
from pydantic import BaseModel, Field

from .course import PassCriteria


class TestSubmission(BaseModel):
    answers: Dict[str, str] = Field(default_factory=dict)


class PracticeSubmission(BaseModel):
    answers: Dict[str, str] = Field(default_factory=dict)
    section_id: Optional[str] = None


class TestResult(BaseModel):
    score: int
    passed: bool
    results: Dict[str, bool]
    total_questions: int
    best_score: int
    completed: bool
    pass_criteria: PassCriteria
    explanations: Dict[str, str] = Field(default_factory=dict)
    next_module_id: Optional[str] = None


class PracticeResult(BaseModel):
    results: Dict[str, bool]
    explanations: Dict[str, str] = Field(default_factory=dict)


class ModuleProgressRead(BaseModel):
    module_id: str
    completed: bool
    best_score: int
    total_questions: int
    last_attempt_answers: Dict[str, str] = Field(default_factory=dict)
    last_attempt_results: Optional[Dict[str, bool]] = None
    practice_completed: bool = False
    practice_answers: Dict[str, str] = Field(default_factory=dict)
    practice_results: Dict[str, bool] = Field(default_factory=dict)


class AvailabilityRead(BaseModel):
    module_id: str
    available: bool
