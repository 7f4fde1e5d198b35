"""Shared utilities: logging, personal data scrubbing and error reporting."""
