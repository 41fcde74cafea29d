"""Player-facing views and the game journal."""

from .views import own_player, public_player, room_snapshot
from .markdown_logger import MarkdownLogger

__all__ = ["own_player", "public_player", "room_snapshot", "MarkdownLogger"]
