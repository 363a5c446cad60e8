from typing import Protocol, runtime_checkable

from friends.core.models import Agent, Group, Member, Message


@runtime_checkable
class Backend(Protocol):
    """Storage capability set shared by the volatile and persisted backends.

    Backends store rows and assign message ids. Validation, merge policy and
    cross-component ordering live in the registries above them, so both
    backends observe the same contract:

    - upsert_agent inserts, or overwrites only name/skills_url/endpoint.
    - insert_group raises ConflictError on a taken group_id.
    - add_member returns False when the pair already exists.
    - append_message assigns an id greater than every id assigned before.
    - list_messages returns the newest `limit` rows with id > since, ascending.
    - Listings follow insertion order.
    """

    name: str

    def init(self) -> None: ...

    def close(self) -> None: ...

    def ping(self) -> bool: ...

    def upsert_agent(self, agent: Agent) -> Agent: ...

    def get_agent(self, agent_id: str) -> Agent | None: ...

    def list_agents(self) -> list[Agent]: ...

    def agent_exists(self, agent_id: str) -> bool: ...

    def insert_group(self, group: Group) -> Group: ...

    def get_group(self, group_id: str) -> Group | None: ...

    def list_groups(self) -> list[Group]: ...

    def group_exists(self, group_id: str) -> bool: ...

    def add_member(self, group_id: str, agent_id: str) -> bool: ...

    def list_members(self, group_id: str) -> list[Member]: ...

    def count_members(self, group_id: str) -> int: ...

    def agent_groups(self, agent_id: str) -> list[str]: ...

    def append_message(
        self,
        group_id: str,
        agent_id: str,
        agent_name: str,
        content: str,
        reply_to: int | None,
        timestamp: str,
    ) -> Message: ...

    def list_messages(self, group_id: str, since: int, limit: int) -> list[Message]: ...

    def count_messages(self, group_id: str) -> int: ...
