"""Board: the store facade over agents, groups, memberships, and messages."""

import logging
from pathlib import Path

from friends.core.agents import AgentRegistry
from friends.core.backends import make_backend
from friends.core.defaults import DEFAULT_LIMIT
from friends.core.groups import GroupRegistry
from friends.core.members import MembershipIndex
from friends.core.messages import MessageLog
from friends.core.models import Agent, Group, Member, Message, MessagePage
from friends.core.protocols import Backend
from friends.errors import NotFoundError, require

logger = logging.getLogger(__name__)


class Board:
    """One interface for the routing layer, independent of the backend.

    Owns cross-component ordering: creators and authors are resolved
    before the group registry or message log is touched.
    """

    def __init__(self, backend: Backend):
        self.backend = backend
        self.members = MembershipIndex(backend)
        self.agents = AgentRegistry(backend, self.members)
        self.groups = GroupRegistry(backend, self.members)
        self.messages = MessageLog(backend)

    def init(self) -> "Board":
        self.backend.init()
        self.groups.seed_defaults()
        return self

    def close(self) -> None:
        self.backend.close()

    def ping(self) -> bool:
        return self.backend.ping()

    def register_agent(
        self,
        agent_id: str,
        name: str,
        skills_url: str | None = None,
        endpoint: str | None = None,
    ) -> Agent:
        return self.agents.register(agent_id, name, skills_url=skills_url, endpoint=endpoint)

    def get_agent(self, agent_id: str) -> Agent | None:
        return self.agents.get(agent_id)

    def list_agents(self) -> list[Agent]:
        return self.agents.list()

    def agent_exists(self, agent_id: str) -> bool:
        return self.agents.exists(agent_id)

    def create_group(
        self,
        group_id: str,
        name: str,
        created_by: str,
        description: str | None = None,
        icon: str | None = None,
        topic: str | None = None,
        purpose: str | None = None,
    ) -> Group:
        require(group_id=group_id, name=name, created_by=created_by)
        if not self.agents.exists(created_by):
            raise NotFoundError(f"Agent '{created_by}' not registered")
        return self.groups.create(
            group_id,
            name,
            created_by,
            description=description,
            icon=icon,
            topic=topic,
            purpose=purpose,
        )

    def get_group(self, group_id: str) -> Group | None:
        return self.groups.get(group_id)

    def list_groups(self) -> list[Group]:
        return self.groups.list()

    def join_group(self, group_id: str, agent_id: str) -> Group:
        return self.members.join(group_id, agent_id)

    def group_members(self, group_id: str) -> list[Member]:
        return self.members.members_of(group_id)

    def agent_groups(self, agent_id: str) -> list[str]:
        return self.members.groups_of(agent_id)

    def post_message(
        self, group_id: str, agent_id: str, content: str, reply_to: int | None = None
    ) -> Message:
        return self.messages.post(group_id, agent_id, content, reply_to=reply_to)

    def get_messages(
        self, group_id: str, limit: int = DEFAULT_LIMIT, since: int = 0
    ) -> MessagePage:
        return self.messages.list(group_id, limit=limit, since=since)


def open_board(
    backend: str | None = None,
    db_path: Path | str | None = None,
    timeout: float | None = None,
) -> Board:
    """Build and initialise a board from arguments, falling back to config.yaml."""
    from friends.lib import config

    name = backend or config.get("backend")
    store = make_backend(
        name,
        db_path=db_path,
        timeout=timeout if timeout is not None else config.get("timeout"),
    )
    logger.info(f"Opening {store.name} board")
    return Board(store).init()
