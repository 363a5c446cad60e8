from dataclasses import dataclass, field
from datetime import UTC, datetime

from friends.core.defaults import DEFAULT_ICON, NONE, SYSTEM_AGENT


def now_iso() -> str:
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class Agent:
    agent_id: str
    name: str
    skills_url: str = NONE
    endpoint: str = NONE
    registered_at: str | None = None
    groups: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "agentId": self.agent_id,
            "name": self.name,
            "skillsUrl": self.skills_url,
            "endpoint": self.endpoint,
            "registeredAt": self.registered_at,
            "groups": list(self.groups),
        }


@dataclass
class Group:
    group_id: str
    name: str
    description: str = ""
    icon: str = DEFAULT_ICON
    topic: str = ""
    purpose: str = ""
    created_by: str = SYSTEM_AGENT
    created_at: str | None = None
    member_count: int = 0
    message_count: int = 0

    def to_dict(self) -> dict:
        return {
            "groupId": self.group_id,
            "name": self.name,
            "description": self.description,
            "icon": self.icon,
            "topic": self.topic,
            "purpose": self.purpose,
            "createdBy": self.created_by,
            "createdAt": self.created_at,
            "memberCount": self.member_count,
            "messageCount": self.message_count,
        }


@dataclass
class Member:
    agent_id: str
    name: str

    def to_dict(self) -> dict:
        return {"agentId": self.agent_id, "name": self.name}


@dataclass
class Message:
    """A posted message. agent_name is the author's name at post time."""

    id: int
    group_id: str
    agent_id: str
    agent_name: str
    content: str
    reply_to: int | None = None
    timestamp: str | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "groupId": self.group_id,
            "agentId": self.agent_id,
            "agentName": self.agent_name,
            "content": self.content,
            "replyTo": self.reply_to,
            "timestamp": self.timestamp,
        }


@dataclass
class MessagePage:
    messages: list[Message] = field(default_factory=list)
    total: int = 0

    def to_dict(self) -> dict:
        return {
            "messages": [m.to_dict() for m in self.messages],
            "total": self.total,
        }
