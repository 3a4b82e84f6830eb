"""Ticket tracker integration."""

from commitsync.tickets.base import TicketProvider
from commitsync.tickets.enricher import TicketStatusEnricher
from commitsync.tickets.factory import build_provider
from commitsync.tickets.jira import JiraTicketProvider

__all__ = [
    "TicketProvider",
    "TicketStatusEnricher",
    "JiraTicketProvider",
    "build_provider",
]
