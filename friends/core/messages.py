"""Message log: append-only per-group log with global ids."""

import logging

from friends.core.defaults import DEFAULT_LIMIT
from friends.core.models import Message, MessagePage, now_iso
from friends.core.protocols import Backend
from friends.errors import NotFoundError, ValidationError, require

logger = logging.getLogger(__name__)

# Signed 64-bit, the range of a persisted message id.
MIN_INT = -(2**63)
MAX_INT = 2**63 - 1


class MessageLog:
    def __init__(self, backend: Backend):
        self.backend = backend

    def post(
        self, group_id: str, agent_id: str, content: str, reply_to: int | None = None
    ) -> Message:
        """Append a message, snapshotting the author's current name.

        All checks run before an id is assigned, so a rejected post never
        consumes one. reply_to is stored as given, without existence checks.
        """
        require(group_id=group_id, agent_id=agent_id, content=content)
        if reply_to is not None and not MIN_INT <= reply_to <= MAX_INT:
            raise ValidationError(f"reply_to out of range: {reply_to}")
        if not self.backend.group_exists(group_id):
            raise NotFoundError(f"Group '{group_id}' not found")
        agent = self.backend.get_agent(agent_id)
        if agent is None:
            raise NotFoundError(f"Agent '{agent_id}' not found")

        message = self.backend.append_message(
            group_id, agent_id, agent.name, content, reply_to, now_iso()
        )
        logger.debug(f"Message {message.id} appended to {group_id} by {agent_id}")
        return message

    def list(self, group_id: str, limit: int = DEFAULT_LIMIT, since: int = 0) -> MessagePage:
        """Return the newest `limit` messages with id > since, oldest first.

        total counts every message in the group regardless of since/limit.
        Unknown groups yield an empty page. limit and since are clamped to
        the signed 64-bit range, which holds every id.
        """
        if limit < 1:
            raise ValidationError(f"limit must be a positive integer, got {limit}")
        limit = min(limit, MAX_INT)
        since = min(max(since, MIN_INT), MAX_INT)
        if not self.backend.group_exists(group_id):
            return MessagePage(messages=[], total=0)
        return MessagePage(
            messages=self.backend.list_messages(group_id, since, limit),
            total=self.backend.count_messages(group_id),
        )
