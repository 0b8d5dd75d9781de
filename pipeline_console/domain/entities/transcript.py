"""Conversation transcript for the Ask stage."""

from enum import Enum


class Sender(str, Enum):
    """Who said a turn. Derived from position, never stored."""

    OPERATOR = "You"
    ASSISTANT = "Jon"


def sender_for(index: int) -> Sender:
    """Even turns belong to the operator, odd turns to the assistant."""
    return Sender.OPERATOR if index % 2 == 0 else Sender.ASSISTANT


class ConversationTranscript:
    """Append-only sequence of alternating operator/assistant turns.

    Lives for the whole session; nothing in the pipeline clears it.
    """

    def __init__(self) -> None:
        self._turns: list[str] = []

    def append(self, turn: str) -> None:
        self._turns.append(turn)

    def turns(self) -> list[str]:
        return list(self._turns)

    def labelled(self) -> list[tuple[Sender, str]]:
        """Turns paired with their parity-derived sender."""
        return [(sender_for(i), turn) for i, turn in enumerate(self._turns)]

    def __len__(self) -> int:
        return len(self._turns)
