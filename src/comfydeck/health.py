"""Reachability check for the ComfyUI backend."""

from __future__ import annotations

import errno
import logging
from typing import Any

import requests
from pydantic import BaseModel

__all__ = ["BackendProber", "HealthStatus", "describe_error", "describe_status", "probe"]

logger = logging.getLogger(__name__)

STATUS_MEANINGS: dict[int, str] = {
    200: "ComfyUI is running.",
}
UNKNOWN_RESPONSE = "Unknown response."

ERROR_MEANINGS: dict[str, str] = {
    "ECONNREFUSED": "Make sure ComfyUI is running and is accessible at the URL in the config.json file.",
}


class HealthStatus(BaseModel):
    """Outcome of a single probe.

    A reachable backend carries the HTTP status code; an unreachable one
    carries the connection error code (e.g. ``ECONNREFUSED``).
    """

    url: str
    reachable: bool
    status_code: int | None = None
    error_code: str | None = None
    message: str

    def summary(self) -> str:
        """One-line text in the form ``<code>: <message>``."""
        code = self.status_code if self.reachable else self.error_code
        return f"{code}: {self.message}"


def describe_status(status_code: int) -> str:
    """Human readable meaning of an HTTP status code returned by ComfyUI."""
    return STATUS_MEANINGS.get(status_code, UNKNOWN_RESPONSE)


def describe_error(error_code: str | None, exc: BaseException) -> str:
    """Actionable message for a known error code, the exception text otherwise."""
    if error_code is not None and error_code in ERROR_MEANINGS:
        return ERROR_MEANINGS[error_code]
    return str(exc)


def _find_error_code(exc: BaseException) -> str | None:
    """Find the symbolic errno (e.g. ECONNREFUSED) behind a requests exception.

    requests wraps socket errors several levels deep (ConnectionError ->
    MaxRetryError -> NewConnectionError -> ConnectionRefusedError), so the
    chain is searched through args, ``reason`` and exception causes.
    """
    pending: list[Any] = [exc]
    seen: set[int] = set()
    while pending:
        current = pending.pop(0)
        if not isinstance(current, BaseException) or id(current) in seen:
            continue
        seen.add(id(current))

        if isinstance(current, OSError) and current.errno in errno.errorcode:
            return errno.errorcode[current.errno]

        pending.extend(current.args)
        pending.append(getattr(current, "reason", None))
        pending.append(current.__cause__)
        pending.append(current.__context__)
    return None


class BackendProber:
    """HTTP client probing whether ComfyUI answers."""

    def __init__(self, session: requests.Session | None = None, timeout: float | None = None) -> None:
        """Initialize the prober.

        Args:
            session: requests session to use. A new one is created if None.
            timeout: Request timeout in seconds. None keeps the requests
                default, which waits for the OS to give up.
        """
        self.session = session or requests.Session()
        self.timeout = timeout

    def probe(self, service_url: str) -> HealthStatus:
        """Send one GET request to the backend and classify the outcome.

        Any HTTP response counts as reachable. Transport failures are
        returned as an unreachable status and never raised.
        """
        try:
            response = self.session.get(service_url, timeout=self.timeout)
        except (requests.RequestException, OSError) as e:
            error_code = _find_error_code(e) or type(e).__name__
            status = HealthStatus(
                url=service_url,
                reachable=False,
                error_code=error_code,
                message=describe_error(error_code, e),
            )
            logger.warning(status.summary())
            return status

        status = HealthStatus(
            url=service_url,
            reachable=True,
            status_code=response.status_code,
            message=describe_status(response.status_code),
        )
        logger.info(status.summary())
        return status


def probe(service_url: str) -> HealthStatus:
    """Probe the backend once with a fresh session."""
    return BackendProber().probe(service_url)
