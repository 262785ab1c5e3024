"""
Health probe functions for dependency checks.

Each probe returns a bool (True = healthy), swallows its own errors and
bounds its runtime with a timeout so readiness checks never hang.
"""

import httpx

from viral_or_vile.core.config import settings


async def check_ollama(timeout_seconds: float = 3.0) -> bool:
    """
    Check that the Ollama server is reachable.

    Lists installed models via GET /api/tags, which is cheap and does not
    load any model into memory.

    Args:
        timeout_seconds: Maximum time to wait for response (default: 3.0)

    Returns:
        True if the server answered with a 2xx status, False otherwise

    Example:
        >>> if not await check_ollama():
        ...     print("Ollama unavailable")
    """
    try:
        async with httpx.AsyncClient(timeout=timeout_seconds) as client:
            response = await client.get(f"{settings.ollama_host}/api/tags")
            return 200 <= response.status_code < 300

    except httpx.TimeoutException:
        return False
    except httpx.RequestError:
        # Network error, DNS failure, connection refused
        return False
    except Exception:
        return False
