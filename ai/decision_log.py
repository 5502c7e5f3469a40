"""
Decision log for the extreme bot.

Each move the bot makes produces one DecisionLogEntry, handed to whatever
sink the caller injected. DecisionLog is a simple append-only sink.
"""

from enum import Enum
from dataclasses import dataclass, asdict
from typing import Any, Callable, Dict, List, Optional


class ActionKind(Enum):
    """Why the bot chose its move."""
    WIN = "WIN"
    BLOCK = "BLOCK"
    FORCE_BAD_BOARD = "FORCE_BAD_BOARD"
    META_WIN_SETUP = "META_WIN_SETUP"
    HEURISTIC = "HEURISTIC"
    FALLBACK = "FALLBACK"


@dataclass(frozen=True)
class DecisionLogEntry:
    """One recorded decision."""
    move_number: int
    action: ActionKind
    board: Optional[int]
    cell: Optional[int]
    reason: str
    score: float                    # Normalized to 0-10

    @property
    def sent_opponent_to(self) -> Optional[int]:
        return self.cell

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["action"] = self.action.value
        data["sent_opponent_to"] = self.sent_opponent_to
        return data


DecisionSink = Callable[[DecisionLogEntry], None]


class DecisionLog:
    """Append-only in-memory sink."""

    def __init__(self):
        self._entries: List[DecisionLogEntry] = []

    def __call__(self, entry: DecisionLogEntry):
        self._entries.append(entry)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> List[DecisionLogEntry]:
        return list(self._entries)

    def as_dicts(self) -> List[Dict[str, Any]]:
        return [entry.to_dict() for entry in self._entries]
