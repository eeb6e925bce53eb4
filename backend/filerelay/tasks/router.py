"""Task echo router."""
import logging

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from .schemas import TaskRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["tasks"])


@router.post("/task", response_class=PlainTextResponse)
async def echo_task(request: Request) -> PlainTextResponse:
    """Decode a JSON task request and echo its debug representation.

    Raises:
        HTTPException 400: If the body is not a valid task request
    """
    body = await request.body()
    try:
        task = TaskRequest.model_validate_json(body)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.debug("[tasks] Echoing %r", task)
    return PlainTextResponse(f"Task Request: {task!r}\n")
