from typing import List, Literal, Optional
from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    messages: List[ChatMessage] = Field(default_factory=list)


class AnswerCheck(BaseModel):
    user_answer: str = ""
    reference_answer: str = ""
    question_text: Optional[str] = None


class AnswerCheckResult(BaseModel):
    correct: bool
    feedback: str
    is_stub: bool = True
