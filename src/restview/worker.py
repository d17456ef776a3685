"""Background caching agent registration."""

from __future__ import annotations

import logging

from restview.exceptions import RegistrationError
from restview.interfaces import CachingAgentContainer

_logger = logging.getLogger(__name__)


async def register_caching_agent(container: CachingAgentContainer | None, script_path: str) -> bool:
    """Register *script_path* with the caching agent; report success.

    Failures are logged and swallowed: offline caching never affects rendering.
    """
    if container is None:
        return False
    try:
        await container.register(script_path)
    except RegistrationError as exc:
        _logger.error("Error while registering caching agent %s: %s", script_path, exc)
        return False
    except Exception:
        _logger.error("Unexpected error while registering caching agent %s", script_path, exc_info=True)
        return False
    _logger.info("Caching agent %s registered successfully", script_path)
    return True
