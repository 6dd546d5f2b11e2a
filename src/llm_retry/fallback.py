"""
Model fallback escalation hook.

Plugs into `RetryPolicy.on_persistent_rate_limit` and switches the active
model to a fallback model once persistent rate limiting is detected.
"""

import logging
from typing import Awaitable, Callable

from .auth import AuthMode

logger = logging.getLogger(__name__)

FallbackHandler = Callable[[str, str, Exception], Awaitable[bool]]


class ModelFallback:
    """
    Escalation hook that swaps the active model for a fallback model.

    Features:
    - Optional approval handler(current_model, fallback_model, error)
    - No-op once the fallback model is already active
    - Reset back to the original model
    """

    def __init__(
        self,
        active_model: str,
        fallback_model: str,
        handler: FallbackHandler | None = None,
    ):
        """
        Initialize the fallback hook.

        Args:
            active_model: Model currently used by the caller
            fallback_model: Model to switch to under persistent rate limiting
            handler: Async approval callback; None accepts automatically
        """
        self.original_model = active_model
        self.active_model = active_model
        self.fallback_model = fallback_model
        self.handler = handler

    @property
    def in_fallback_mode(self) -> bool:
        return self.active_model == self.fallback_model

    def reset(self) -> None:
        """Return to the original model."""
        self.active_model = self.original_model

    async def __call__(
        self, auth_mode: AuthMode | str | None, error: Exception
    ) -> str | None:
        if self.in_fallback_mode:
            logger.debug(f"Already using fallback model {self.fallback_model}")
            return None

        if self.handler is not None:
            accepted = await self.handler(self.active_model, self.fallback_model, error)
            if not accepted:
                logger.info(f"Fallback from {self.active_model} to {self.fallback_model} declined")
                return None

        logger.warning(
            f"Switching from {self.active_model} to {self.fallback_model} "
            f"after persistent rate limiting ({auth_mode}): {error}"
        )
        self.active_model = self.fallback_model
        return self.fallback_model
