"""Track the messages a session is responsible for deleting."""


class CleanupTracker:
    """Ordered, duplicate-free list of message ids.

    Append-only until sealed. Sealing hands the ids over for purging;
    anything offered afterwards is refused so the caller can delete it itself.
    """

    def __init__(self) -> None:
        self._ids: list[int] = []
        self._seen: set[int] = set()
        self._sealed = False

    def add(self, message_id: int) -> bool:
        """Track a message id.

        Returns:
            False if the tracker is sealed, True otherwise (including duplicates)
        """
        if self._sealed:
            return False
        if message_id not in self._seen:
            self._seen.add(message_id)
            self._ids.append(message_id)
        return True

    def seal(self) -> list[int]:
        """Stop accepting ids and return everything tracked, in order."""
        self._sealed = True
        return list(self._ids)

    @property
    def sealed(self) -> bool:
        return self._sealed

    @property
    def message_ids(self) -> list[int]:
        return list(self._ids)

    def __len__(self) -> int:
        return len(self._ids)

    def __contains__(self, message_id: object) -> bool:
        return message_id in self._seen
