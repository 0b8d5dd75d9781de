"""Per-run execution log for the non-conversational stages."""

START_NOTICE = "Working on it..."


def missing_field_notice(field: str) -> str:
    return f'Mandatory setting field missing: fill "{field}".'


def success_notice(result: str) -> str:
    return f"Execution result: {result}."


def error_notice(message: str) -> str:
    return f"Error: {message}."


class ExecutionLog:
    """Append-only entries of the latest run. reset() starts a new run."""

    def __init__(self) -> None:
        self._entries: list[str] = []

    def reset(self) -> None:
        self._entries.clear()

    def append(self, entry: str) -> None:
        self._entries.append(entry)

    def entries(self) -> list[str]:
        """Return a copy of the entries in append order."""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
