"""Best-effort ticket status enrichment of commit records."""

import re
from typing import Dict, List, Optional, Union

import structlog

from commitsync.errors import ConfigError, ProviderUnavailable
from commitsync.models.commit import CommitRecord
from commitsync.tickets.base import TicketProvider

logger = structlog.get_logger(__name__)


class TicketStatusEnricher:
    """Fills ``ticket_status`` on commit records.

    A ticket id is extracted from each message with a one-group regex and
    looked up through the provider. Records without a ticket id, and records
    whose lookup fails, keep ``ticket_status = None``. Statuses are memoized
    per ticket id for the lifetime of the enricher.
    """

    def __init__(self, pattern: Union[str, "re.Pattern[str]"], provider: TicketProvider) -> None:
        """Initialize the enricher.

        Args:
            pattern: Regex with exactly one capture group for the ticket id
            provider: Ticket status provider

        Raises:
            ConfigError: If the pattern is invalid or does not have one group
        """
        if isinstance(pattern, str):
            try:
                pattern = re.compile(pattern)
            except re.error as e:
                raise ConfigError(f"Invalid ticket id regex: {e}") from e
        if pattern.groups != 1:
            raise ConfigError(
                f"Ticket id regex must have exactly one capture group, got {pattern.groups}"
            )
        self.pattern = pattern
        self.provider = provider
        self._statuses: Dict[str, Optional[str]] = {}

    def extract_ticket_id(self, message: str) -> Optional[str]:
        match = self.pattern.search(message)
        if match is None:
            return None
        return match.group(1)

    def status_for(self, ticket_id: str) -> Optional[str]:
        if ticket_id in self._statuses:
            return self._statuses[ticket_id]

        try:
            status = self.provider.fetch_status(ticket_id)
        except ProviderUnavailable as e:
            logger.warning("ticket_status_unavailable", ticket_id=ticket_id, error=e.detail)
            status = None

        self._statuses[ticket_id] = status
        return status

    def enrich(self, records: List[CommitRecord]) -> List[CommitRecord]:
        """Set ``ticket_status`` on each record in place.

        Returns:
            The same list, same order and length
        """
        for record in records:
            ticket_id = self.extract_ticket_id(record.message)
            if ticket_id is None:
                record.ticket_status = None
                continue
            record.ticket_status = self.status_for(ticket_id)
        return records
