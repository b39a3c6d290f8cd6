"""
Optional Sentry error tracking.

Enabled only when a DSN is configured. Events are scrubbed of the
``authorization`` and ``cookie`` request headers before they leave the
process.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

logger = logging.getLogger(__name__)

SCRUBBED_HEADERS = frozenset({"authorization", "cookie"})
PROFILES_SAMPLE_RATE = 0.1


def scrub_event(event: dict[str, Any], hint: dict[str, Any] | None = None) -> dict[str, Any]:
    """``before_send`` hook: drop credential headers and stamp ``extra``."""
    headers = (event.get("request") or {}).get("headers")
    if isinstance(headers, dict):
        for name in [h for h in headers if h.lower() in SCRUBBED_HEADERS]:
            del headers[name]

    extra = event.get("extra")
    if isinstance(extra, dict):
        extra["timestamp"] = datetime.now(timezone.utc).isoformat()

    return event


def init_sentry(dsn: str, environment: str, traces_sample_rate: float = 0.1) -> bool:
    """Initialise the SDK; returns False and does nothing without a DSN."""
    if not dsn:
        logger.info("Sentry DSN not configured - error tracking disabled")
        return False

    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        traces_sample_rate=traces_sample_rate,
        profiles_sample_rate=PROFILES_SAMPLE_RATE,
        send_default_pii=False,
        integrations=[StarletteIntegration(), FastApiIntegration()],
        before_send=scrub_event,
    )
    logger.info("Sentry initialized", extra={"_extra": {"environment": environment}})
    return True
