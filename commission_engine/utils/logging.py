"""Logger factory shared by data and reporting layers."""

from __future__ import annotations

import logging

# Handlers and levels belong to the embedding application.
logging.getLogger('commission_engine').addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return a module logger under the package root."""
    return logging.getLogger(name)
