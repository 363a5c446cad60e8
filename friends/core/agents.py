"""Agent registry: registration upsert, lookup, listing."""

from dataclasses import replace

from friends.core.defaults import NONE, PUBLIC_GROUP
from friends.core.models import Agent, now_iso
from friends.core.protocols import Backend
from friends.errors import require

# Re-registration merge policy.
OVERWRITE = ("name", "skills_url", "endpoint")
PRESERVE = ("agent_id", "registered_at")


def merge_profile(existing: Agent | None, incoming: Agent) -> Agent:
    """Apply a registration to an existing profile.

    First registration stamps registered_at. Later ones overwrite only the
    OVERWRITE fields; PRESERVE fields and memberships stay as they were.
    """
    if existing is None:
        return replace(incoming, registered_at=incoming.registered_at or now_iso(), groups=[])
    return replace(existing, **{f: getattr(incoming, f) for f in OVERWRITE})


class AgentRegistry:
    def __init__(self, backend: Backend, members):
        self.backend = backend
        self.members = members

    def register(
        self,
        agent_id: str,
        name: str,
        skills_url: str | None = None,
        endpoint: str | None = None,
    ) -> Agent:
        require(agent_id=agent_id, name=name)
        incoming = Agent(
            agent_id=agent_id,
            name=name,
            skills_url=skills_url or NONE,
            endpoint=endpoint or NONE,
        )
        merged = merge_profile(self.backend.get_agent(agent_id), incoming)
        stored = self.backend.upsert_agent(merged)
        self.members.join(PUBLIC_GROUP, agent_id)
        return self._with_groups(stored)

    def get(self, agent_id: str) -> Agent | None:
        agent = self.backend.get_agent(agent_id)
        return self._with_groups(agent) if agent else None

    def list(self) -> list[Agent]:
        return [self._with_groups(a) for a in self.backend.list_agents()]

    def exists(self, agent_id: str) -> bool:
        return self.backend.agent_exists(agent_id)

    def _with_groups(self, agent: Agent) -> Agent:
        return replace(agent, groups=self.members.groups_of(agent.agent_id))
