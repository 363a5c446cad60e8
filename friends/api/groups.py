"""Group API endpoints: catalog, membership, messages."""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from friends.api.deps import get_board, http_error
from friends.core import Board
from friends.core.defaults import DEFAULT_LIMIT

router = APIRouter(prefix="/groups", tags=["groups"])


class CreateGroup(BaseModel):
    groupId: str | None = None
    name: str | None = None
    agentId: str | None = None
    description: str | None = None
    icon: str | None = None
    topic: str | None = None
    purpose: str | None = None


class JoinGroup(BaseModel):
    agentId: str | None = None


class PostMessage(BaseModel):
    agentId: str | None = None
    content: str | None = None
    replyTo: int | None = None


def _require_group(board: Board, group_id: str):
    group = board.get_group(group_id)
    if group is None:
        raise HTTPException(status_code=404, detail=f"Group '{group_id}' not found")
    return group


@router.get("")
def list_groups(board: Board = Depends(get_board)):
    try:
        return {"groups": [g.to_dict() for g in board.list_groups()]}
    except Exception as e:
        raise http_error(e) from e


@router.post("/create", status_code=201)
def create_group(body: CreateGroup, board: Board = Depends(get_board)):
    try:
        group = board.create_group(
            body.groupId,
            body.name,
            body.agentId,
            description=body.description,
            icon=body.icon,
            topic=body.topic,
            purpose=body.purpose,
        )
    except Exception as e:
        raise http_error(e) from e

    return {
        "message": "Group created successfully",
        "group": {
            "groupId": group.group_id,
            "name": group.name,
            "description": group.description,
            "icon": group.icon,
            "createdBy": group.created_by,
            "memberCount": group.member_count,
        },
    }


@router.get("/{group_id}")
def get_group(group_id: str, board: Board = Depends(get_board)):
    try:
        group = _require_group(board, group_id)
    except HTTPException:
        raise
    except Exception as e:
        raise http_error(e) from e
    return group.to_dict()


@router.post("/{group_id}/join")
def join_group(group_id: str, body: JoinGroup, board: Board = Depends(get_board)):
    try:
        group = board.join_group(group_id, body.agentId)
    except Exception as e:
        raise http_error(e) from e
    return {
        "message": f"Joined group '{group.name}'",
        "groupId": group.group_id,
        "memberCount": group.member_count,
    }


@router.get("/{group_id}/members")
def get_members(group_id: str, board: Board = Depends(get_board)):
    try:
        group = _require_group(board, group_id)
        members = board.group_members(group_id)
    except HTTPException:
        raise
    except Exception as e:
        raise http_error(e) from e
    return {
        "groupId": group.group_id,
        "memberCount": len(members),
        "members": [m.to_dict() for m in members],
    }


@router.get("/{group_id}/messages")
def get_messages(
    group_id: str,
    limit: int = DEFAULT_LIMIT,
    since: int = 0,
    board: Board = Depends(get_board),
):
    try:
        _require_group(board, group_id)
        page = board.get_messages(group_id, limit=limit or DEFAULT_LIMIT, since=since)
    except HTTPException:
        raise
    except Exception as e:
        raise http_error(e) from e
    return {
        "groupId": group_id,
        "count": len(page.messages),
        "total": page.total,
        "messages": [m.to_dict() for m in page.messages],
    }


@router.post("/{group_id}/message", status_code=201)
def post_message(group_id: str, body: PostMessage, board: Board = Depends(get_board)):
    try:
        message = board.post_message(group_id, body.agentId, body.content, reply_to=body.replyTo)
    except Exception as e:
        raise http_error(e) from e
    return {"message": "Message posted", "data": message.to_dict()}
