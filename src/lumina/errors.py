"""🚨 Lumina exceptions.

The graph engine itself never raises for data-shape problems. These are
raised by the external seams (connectors, assistant service) and caught by
the hub and bridge, which turn them into status flags or fallback text.
"""

from __future__ import annotations


class LuminaError(Exception):
    """Base exception for Lumina."""

    pass


class ConnectorError(LuminaError):
    """A catalog connector failed to authenticate or crawl."""

    pass


class MalformedPayloadError(LuminaError):
    """A connector returned a payload that is not a valid ingestion result."""

    def __init__(self, message: str, payload: object = None):
        super().__init__(message)
        self.payload = payload


class AssistantError(LuminaError):
    """The text generation service failed."""

    pass


class MissingCredentialsError(AssistantError):
    """No API key configured for the text generation service."""

    pass


class InvalidConfigError(LuminaError):
    """A configuration file does not have the expected shape."""

    pass
