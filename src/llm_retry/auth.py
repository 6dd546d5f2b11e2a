"""
Authentication modes and the escalation policy tied to them.
"""

from enum import Enum


class AuthMode(str, Enum):
    """How the caller is authenticated against the service."""

    OAUTH_PERSONAL = "oauth-personal"
    API_KEY = "gemini-api-key"
    VERTEX_AI = "vertex-ai"
    CLOUD_SHELL = "cloud-shell"


def allows_escalation(auth_mode: AuthMode | str | None) -> bool:
    """
    Check whether persistent rate limiting may be escalated for an auth mode.

    API-key callers are never offered a fallback. Any other tag, including
    an unknown one or None, permits escalation.
    """
    return auth_mode != AuthMode.API_KEY
