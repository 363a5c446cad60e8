"""Volatile backend: insertion-ordered maps guarded by one lock."""

import threading
from dataclasses import replace

from friends.core.models import Agent, Group, Member, Message
from friends.errors import ConflictError


class MemoryBackend:
    name = "memory"

    def __init__(self):
        self._lock = threading.RLock()
        self._agents: dict[str, Agent] = {}
        self._groups: dict[str, Group] = {}
        # dicts as ordered sets: join order is listing order
        self._members: dict[str, dict[str, None]] = {}
        self._agent_groups: dict[str, dict[str, None]] = {}
        self._messages: dict[str, list[Message]] = {}
        self._last_id = 0

    def init(self) -> None:
        pass

    def close(self) -> None:
        pass

    def ping(self) -> bool:
        return True

    def upsert_agent(self, agent: Agent) -> Agent:
        with self._lock:
            existing = self._agents.get(agent.agent_id)
            if existing is None:
                stored = replace(agent, groups=[])
            else:
                stored = replace(
                    existing,
                    name=agent.name,
                    skills_url=agent.skills_url,
                    endpoint=agent.endpoint,
                )
            self._agents[agent.agent_id] = stored
            return replace(stored)

    def get_agent(self, agent_id: str) -> Agent | None:
        with self._lock:
            agent = self._agents.get(agent_id)
            return replace(agent) if agent else None

    def list_agents(self) -> list[Agent]:
        with self._lock:
            return [replace(a) for a in self._agents.values()]

    def agent_exists(self, agent_id: str) -> bool:
        with self._lock:
            return agent_id in self._agents

    def insert_group(self, group: Group) -> Group:
        with self._lock:
            if group.group_id in self._groups:
                raise ConflictError(f"Group '{group.group_id}' already exists")
            stored = replace(group, member_count=0, message_count=0)
            self._groups[group.group_id] = stored
            self._members[group.group_id] = {}
            self._messages[group.group_id] = []
            return replace(stored)

    def get_group(self, group_id: str) -> Group | None:
        with self._lock:
            group = self._groups.get(group_id)
            return replace(group) if group else None

    def list_groups(self) -> list[Group]:
        with self._lock:
            return [replace(g) for g in self._groups.values()]

    def group_exists(self, group_id: str) -> bool:
        with self._lock:
            return group_id in self._groups

    def add_member(self, group_id: str, agent_id: str) -> bool:
        with self._lock:
            members = self._members.setdefault(group_id, {})
            if agent_id in members:
                return False
            members[agent_id] = None
            self._agent_groups.setdefault(agent_id, {})[group_id] = None
            return True

    def list_members(self, group_id: str) -> list[Member]:
        with self._lock:
            return [
                Member(agent_id=agent_id, name=self._agents[agent_id].name)
                for agent_id in self._members.get(group_id, {})
                if agent_id in self._agents
            ]

    def count_members(self, group_id: str) -> int:
        with self._lock:
            return len(self._members.get(group_id, {}))

    def agent_groups(self, agent_id: str) -> list[str]:
        with self._lock:
            return list(self._agent_groups.get(agent_id, {}))

    def append_message(
        self,
        group_id: str,
        agent_id: str,
        agent_name: str,
        content: str,
        reply_to: int | None,
        timestamp: str,
    ) -> Message:
        with self._lock:
            self._last_id += 1
            message = Message(
                id=self._last_id,
                group_id=group_id,
                agent_id=agent_id,
                agent_name=agent_name,
                content=content,
                reply_to=reply_to,
                timestamp=timestamp,
            )
            self._messages.setdefault(group_id, []).append(message)
            return replace(message)

    def list_messages(self, group_id: str, since: int, limit: int) -> list[Message]:
        with self._lock:
            filtered = [m for m in self._messages.get(group_id, []) if m.id > since]
            return [replace(m) for m in filtered[-limit:]]

    def count_messages(self, group_id: str) -> int:
        with self._lock:
            return len(self._messages.get(group_id, []))
