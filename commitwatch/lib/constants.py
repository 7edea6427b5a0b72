"""Shared constants for commitwatch."""

# CLI exit codes
EXIT_OK = 0
EXIT_ERROR = 1
EXIT_CONFIG = 2
EXIT_PUSH_FAILED = 3  # committed locally, push did not go through
