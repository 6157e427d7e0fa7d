import time
from http import HTTPStatus
from typing import Iterable, NamedTuple, Optional, Union

from fastapi.responses import JSONResponse, PlainTextResponse, Response

from todo_api.models import TaskItem


class Reply(NamedTuple):
    status_code: int
    content: Optional[Union[str, dict]] = None


def todo_envelope(items: Iterable[TaskItem]) -> dict:
    results = [item.model_dump(mode="json") for item in items]
    return {
        "results": results,
        "date": int(time.time()),
        "total_results": len(results),
    }


def render(reply: Reply) -> Response:
    if reply.status_code == HTTPStatus.NO_CONTENT or reply.content is None:
        return Response(status_code=reply.status_code)
    if isinstance(reply.content, dict):
        return JSONResponse(reply.content, status_code=reply.status_code)
    return PlainTextResponse(reply.content, status_code=reply.status_code)


def render_error(status_code: int) -> PlainTextResponse:
    """Plain-text error body carrying only the standard reason phrase."""
    try:
        phrase = HTTPStatus(status_code).phrase
    except ValueError:
        phrase = "Error"
    return PlainTextResponse(phrase, status_code=status_code)
