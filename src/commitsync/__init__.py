"""commitsync - compare branches by commit message and replay the difference."""

__version__ = "0.1.0"
