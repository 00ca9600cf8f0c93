"""AI assistant endpoints: streamed tutor chat and answer checking."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from triz_course.errors import ValidationError
from triz_course.gigachat import CompletionProxy, get_completion_proxy
from triz_course.grading import check_answer
from triz_course.schemas import AnswerCheck, AnswerCheckResult, ChatRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])


@router.post("/chat")
async def relay_chat(
    data: ChatRequest,
    proxy: CompletionProxy = Depends(get_completion_proxy),
):
    """Relay the provider's event stream for the given conversation.

    Each ``data:`` frame carries a JSON chunk whose
    ``choices[0].delta.content`` holds the next piece of the answer; the
    stream ends with ``data: [DONE]`` or when the connection closes.
    """
    stream = await proxy.stream_completion([m.model_dump() for m in data.messages])
    logger.info("Relaying chat completion for %s messages", len(data.messages))
    return StreamingResponse(
        stream,
        media_type=stream.media_type,
        headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
        background=BackgroundTask(stream.aclose),
    )


@router.post("/check-answer", response_model=AnswerCheckResult)
async def check_free_answer(data: AnswerCheck):
    """Compare a free-text answer with the reference answer."""
    if not data.user_answer or not data.reference_answer:
        raise ValidationError("Missing user_answer or reference_answer")
    correct, feedback = check_answer(data.user_answer, data.reference_answer)
    return AnswerCheckResult(correct=correct, feedback=feedback, is_stub=True)
