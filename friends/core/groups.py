"""Group registry: default catalog, creation, lookup with live counts."""

import logging

from friends.core.defaults import DEFAULT_GROUPS, DEFAULT_ICON, SYSTEM_AGENT
from friends.core.members import MembershipIndex
from friends.core.models import Group, now_iso
from friends.core.protocols import Backend
from friends.errors import ConflictError, require

logger = logging.getLogger(__name__)


class GroupRegistry:
    def __init__(self, backend: Backend, members: MembershipIndex):
        self.backend = backend
        self.members = members

    def seed_defaults(self) -> list[str]:
        """Create any missing catalog group. Existing rows are left untouched.

        Returns:
            Ids of the groups created by this call
        """
        created = []
        for entry in DEFAULT_GROUPS:
            if self.backend.group_exists(entry["group_id"]):
                continue
            self.backend.insert_group(
                Group(**entry, created_by=SYSTEM_AGENT, created_at=now_iso())
            )
            created.append(entry["group_id"])
        if created:
            logger.info(f"Seeded {len(created)} default groups: {', '.join(created)}")
        return created

    def create(
        self,
        group_id: str,
        name: str,
        created_by: str,
        description: str | None = None,
        icon: str | None = None,
        topic: str | None = None,
        purpose: str | None = None,
    ) -> Group:
        """Create a group and auto-join its creator.

        The caller must have verified that created_by names a registered agent.
        """
        require(group_id=group_id, name=name, created_by=created_by)
        if self.backend.group_exists(group_id):
            raise ConflictError(f"Group '{group_id}' already exists")

        self.backend.insert_group(
            Group(
                group_id=group_id,
                name=name,
                description=description or "",
                icon=icon or DEFAULT_ICON,
                topic=topic or "",
                purpose=purpose or "",
                created_by=created_by,
                created_at=now_iso(),
            )
        )
        return self.members.join(group_id, created_by)

    def get(self, group_id: str) -> Group | None:
        group = self.backend.get_group(group_id)
        return self._with_counts(group) if group else None

    def list(self) -> list[Group]:
        return [self._with_counts(g) for g in self.backend.list_groups()]

    def exists(self, group_id: str) -> bool:
        return self.backend.group_exists(group_id)

    def _with_counts(self, group: Group) -> Group:
        group.member_count = self.backend.count_members(group.group_id)
        group.message_count = self.backend.count_messages(group.group_id)
        return group
