"""Git access for reading branch history and mutating the target branch."""

from commitsync.extraction.git_client import HASH_WIDTH, LOG_DELIMITER, GitClient

__all__ = ["GitClient", "LOG_DELIMITER", "HASH_WIDTH"]
