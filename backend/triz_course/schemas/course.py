"""Pydantic models describing the static course catalog."""

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field, model_validator


class QuestionOption(BaseModel):
    id: str
    label: str


class MultipleChoiceQuestion(BaseModel):
    """Question answered by picking one of the listed options."""

    kind: Literal["mc"] = "mc"
    id: str
    text: str
    options: List[QuestionOption] = Field(min_length=1)
    correct_answer: str
    explanation: str = ""

    @model_validator(mode="after")
    def correct_answer_is_an_option(self):
        if self.correct_answer not in {o.id for o in self.options}:
            raise ValueError(
                f"Question {self.id}: correct answer {self.correct_answer!r} "
                "is not one of its options"
            )
        return self

    def option_label(self, option_id: str) -> Optional[str]:
        for option in self.options:
            if option.id == option_id:
                return option.label
        return None


class FreeFormQuestion(BaseModel):
    """Question answered with free text, graded against a reference answer."""

    kind: Literal["free-form"] = "free-form"
    id: str
    text: str
    correct_answer: str
    explanation: str = ""


Question = Annotated[
    Union[MultipleChoiceQuestion, FreeFormQuestion], Field(discriminator="kind")
]


class Section(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    questions: List[Question]


class ExerciseHint(BaseModel):
    title: str
    content: str


class ExerciseTable(BaseModel):
    headers: List[str]
    rows: List[List[str]]


class PracticeExercise(BaseModel):
    id: str
    title: str
    description: str
    table: Optional[ExerciseTable] = None
    hints: List[ExerciseHint] = Field(default_factory=list)


class PassCriteria(BaseModel):
    # ``max_score`` is kept for content compatibility; both types use the
    # same ``score >= threshold`` rule.
    type: Literal["min_score", "max_score"] = "min_score"
    threshold: int
    total_questions: int


class Module(BaseModel):
    id: str
    title: str
    theory: str = ""
    practice_exercises: List[PracticeExercise] = Field(default_factory=list)
    practice_sections: List[Section] = Field(default_factory=list)
    test_sections: List[Section] = Field(default_factory=list)
    pass_criteria: PassCriteria
    coming_soon: bool = False


# Client-facing variants: questions are sent without their answers.


class QuestionRead(BaseModel):
    id: str
    kind: Literal["mc", "free-form"]
    text: str
    options: List[QuestionOption] = Field(default_factory=list)


class SectionRead(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    questions: List[QuestionRead]

    @classmethod
    def from_section(cls, section: Section) -> "SectionRead":
        return cls(
            id=section.id,
            title=section.title,
            description=section.description,
            questions=[
                QuestionRead(
                    id=q.id,
                    kind=q.kind,
                    text=q.text,
                    options=getattr(q, "options", []),
                )
                for q in section.questions
            ],
        )


class ModuleSummary(BaseModel):
    id: str
    title: str
    coming_soon: bool
    available: bool
    completed: bool
    practice_completed: bool
    best_score: int = 0


class ModuleRead(BaseModel):
    id: str
    title: str
    theory: str
    practice_exercises: List[PracticeExercise]
    practice_sections: List[SectionRead]
    test_sections: List[SectionRead]
    pass_criteria: PassCriteria
    coming_soon: bool
    next_module_id: Optional[str] = None
