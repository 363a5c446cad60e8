from friends.core.board import Board, open_board
from friends.core.models import Agent, Group, Member, Message, MessagePage

__all__ = ["Board", "open_board", "Agent", "Group", "Member", "Message", "MessagePage"]
