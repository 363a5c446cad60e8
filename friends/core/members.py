"""Membership index: the agent <-> group relation."""

import logging

from friends.core.models import Group, Member
from friends.core.protocols import Backend
from friends.errors import NotFoundError, require

logger = logging.getLogger(__name__)


class MembershipIndex:
    def __init__(self, backend: Backend):
        self.backend = backend

    def join(self, group_id: str, agent_id: str) -> Group:
        """Add agent to group. Joining twice is a no-op that still returns the group."""
        require(group_id=group_id, agent_id=agent_id)
        group = self.backend.get_group(group_id)
        if group is None:
            raise NotFoundError(f"Group '{group_id}' not found")
        if not self.backend.agent_exists(agent_id):
            raise NotFoundError(f"Agent '{agent_id}' not found")

        if not self.backend.add_member(group_id, agent_id):
            logger.debug(f"{agent_id} already in {group_id}")
        group.member_count = self.backend.count_members(group_id)
        group.message_count = self.backend.count_messages(group_id)
        return group

    def members_of(self, group_id: str) -> list[Member]:
        return self.backend.list_members(group_id)

    def groups_of(self, agent_id: str) -> list[str]:
        return self.backend.agent_groups(agent_id)
