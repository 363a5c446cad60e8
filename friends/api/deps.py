"""Request dependencies and error-to-status mapping for the routers."""

import httpx
from fastapi import HTTPException, Request

from friends.core import Board
from friends.errors import (
    BackendError,
    ConflictError,
    FriendsError,
    NotFoundError,
    ValidationError,
)

STATUS_CODES: dict[type[FriendsError], int] = {
    ValidationError: 400,
    NotFoundError: 404,
    ConflictError: 400,
    BackendError: 503,
}


def http_error(e: Exception) -> HTTPException:
    status = next((code for kind, code in STATUS_CODES.items() if isinstance(e, kind)), 500)
    return HTTPException(status_code=status, detail=str(e))


def get_board(request: Request) -> Board:
    state = request.app.state
    if state.board is None:
        from friends.core import open_board

        state.board = open_board()
    return state.board


def get_http_client(request: Request) -> httpx.AsyncClient | None:
    return request.app.state.http_client


def get_skills_timeout(request: Request) -> float:
    timeout = request.app.state.skills_timeout
    if timeout is None:
        from friends.lib import config

        timeout = config.get("skills_timeout")
    return timeout
