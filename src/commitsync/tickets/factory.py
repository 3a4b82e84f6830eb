"""Provider selection from configuration."""

from commitsync.errors import ConfigError
from commitsync.models.config import ProjectManagementConfig, TicketProviderName
from commitsync.tickets.jira import JiraTicketProvider


def build_provider(config: ProjectManagementConfig, timeout: float = 10.0) -> JiraTicketProvider:
    """Create the ticket provider named by ``config.provider``.

    Args:
        config: Project management section, with ``credential`` already resolved
        timeout: HTTP timeout in seconds

    Returns:
        A ticket provider that closes its HTTP client when used as a context manager

    Raises:
        ConfigError: If the provider is unknown or its settings are invalid
    """
    if config.provider == TicketProviderName.JIRA:
        return JiraTicketProvider(
            url_template=config.url,
            credential=config.credential,
            auth_type=config.auth_type,
            timeout=timeout,
        )
    raise ConfigError(f"Unknown ticket provider: {config.provider}")
