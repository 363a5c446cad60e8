"""Agent API endpoints."""

import asyncio

import httpx
from fastapi import APIRouter, Depends, HTTPException
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel

from friends.api.deps import get_board, get_http_client, get_skills_timeout, http_error
from friends.core import Board
from friends.core.defaults import NONE
from friends.lib import skills

router = APIRouter(prefix="/agents", tags=["agents"])


class RegisterAgent(BaseModel):
    agentId: str | None = None
    name: str | None = None
    skillsUrl: str | None = None
    endpoint: str | None = None


@router.post("/register", status_code=201)
def register_agent(body: RegisterAgent, board: Board = Depends(get_board)):
    try:
        agent = board.register_agent(
            body.agentId, body.name, skills_url=body.skillsUrl, endpoint=body.endpoint
        )
        return {"message": "Agent registered successfully", "agent": agent.to_dict()}
    except Exception as e:
        raise http_error(e) from e


@router.get("")
async def list_agents(
    board: Board = Depends(get_board),
    client: httpx.AsyncClient | None = Depends(get_http_client),
    timeout: float = Depends(get_skills_timeout),
):
    try:
        agents = await run_in_threadpool(board.list_agents)
    except Exception as e:
        raise http_error(e) from e

    found = await asyncio.gather(
        *(skills.fetch_skills(a.skills_url, client=client, timeout=timeout) for a in agents)
    )
    return {"agents": [{**a.to_dict(), "skills": s} for a, s in zip(agents, found)]}


@router.get("/{agent_id}")
def get_agent(agent_id: str, board: Board = Depends(get_board)):
    try:
        agent = board.get_agent(agent_id)
    except Exception as e:
        raise http_error(e) from e
    if agent is None:
        raise HTTPException(status_code=404, detail=f"Agent '{agent_id}' not found")
    return {"agent": agent.to_dict()}


@router.get("/{agent_id}/skills")
async def get_agent_skills(
    agent_id: str,
    board: Board = Depends(get_board),
    client: httpx.AsyncClient | None = Depends(get_http_client),
    timeout: float = Depends(get_skills_timeout),
):
    try:
        agent = await run_in_threadpool(board.get_agent, agent_id)
    except Exception as e:
        raise http_error(e) from e
    if agent is None:
        raise HTTPException(status_code=404, detail=f"Agent '{agent_id}' not found")

    if agent.skills_url == NONE:
        return {"agentId": agent.agent_id, "skillsUrl": NONE, "raw": "", "skills": []}

    markdown = await skills.fetch_document(agent.skills_url, client=client, timeout=timeout)
    if markdown is None:
        raise HTTPException(status_code=502, detail="Failed to fetch skills.md")

    return {
        "agentId": agent.agent_id,
        "skillsUrl": agent.skills_url,
        "raw": markdown,
        "skills": skills.parse_skills(markdown),
    }
