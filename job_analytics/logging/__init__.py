"""Structured logging helpers for report runs."""

import logging
from typing import Optional


class ComponentLoggerAdapter(logging.LoggerAdapter):
    """LoggerAdapter that tags records with a component and keeps call extras."""

    def process(self, msg, kwargs):
        # Extras passed at the call site win over the adapter defaults
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def get_logger(name: str, component: Optional[str] = None):
    """Return a module logger, optionally tagged with a component name.

    Example:
        >>> logger = get_logger(__name__, component="reporting")
        >>> logger.info("Report finished", extra={"event": "report.query.completed"})
    """
    logger = logging.getLogger(name)
    if component:
        return ComponentLoggerAdapter(logger, {"component": component})
    return logger
