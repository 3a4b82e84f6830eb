"""Ticket provider interface."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class TicketProvider(Protocol):
    """Anything that can look up the status of a ticket."""

    def fetch_status(self, ticket_id: str) -> str:
        """Return the status name of a ticket.

        Args:
            ticket_id: Identifier extracted from a commit message (e.g. "PROJ-123")

        Returns:
            Status name as reported by the tracker

        Raises:
            ProviderUnavailable: If the status could not be fetched
        """
        ...
