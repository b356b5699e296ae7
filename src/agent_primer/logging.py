"""Logging configuration for Agent Primer.

Logs go to stderr so stdout stays clean for the report itself
(it is typically redirected into an agent context file).
"""

import logging
import sys

logger = logging.getLogger("agent_primer")
logger.setLevel(logging.WARNING)

# Only add handler if not already configured
if not logger.handlers:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("[agent-primer] %(levelname)s: %(message)s"))
    logger.addHandler(handler)


def set_verbose(verbose: bool) -> None:
    """Switch the package logger between quiet (WARNING) and DEBUG output."""
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
