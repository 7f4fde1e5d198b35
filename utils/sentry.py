"""Sentry integration helpers."""

from __future__ import annotations

import os
from typing import Any, Final

import sentry_sdk

from utils.meta import SERVICE_VERSION
from utils.personal_data import mask_identifier, scrub_sensitive_mapping

ENVIRONMENT: Final[str] = os.getenv("ENV", "development")
"""Deployment environment name used for Sentry tagging."""

_RELEASE: Final[str] = f"club-invoicing@{SERVICE_VERSION}"
_SENTRY_INITIALIZED = False


def _scrub_event(event: dict[str, Any]) -> dict[str, Any]:
    for section in ("user", "extra", "contexts", "request"):
        payload = event.get(section)
        if isinstance(payload, dict):
            scrub_sensitive_mapping(payload)

    breadcrumbs = event.get("breadcrumbs")
    values = breadcrumbs.get("values") if isinstance(breadcrumbs, dict) else None
    if isinstance(values, list):
        for breadcrumb in values:
            data = breadcrumb.get("data") if isinstance(breadcrumb, dict) else None
            if isinstance(data, dict):
                scrub_sensitive_mapping(data)
    return event


def _before_send(event: dict[str, Any], hint: Any) -> dict[str, Any] | None:
    if isinstance(event, dict):
        return _scrub_event(event)
    return event


def init_sentry(dsn: str | None = None) -> bool:
    """Initialise Sentry SDK if a DSN is given or ``SENTRY_DSN`` is set."""

    global _SENTRY_INITIALIZED
    if _SENTRY_INITIALIZED:
        return True

    dsn = dsn or os.getenv("SENTRY_DSN")
    if not dsn:
        return False

    sentry_sdk.init(
        dsn=dsn,
        environment=ENVIRONMENT,
        release=_RELEASE,
        send_default_pii=False,
        before_send=_before_send,
    )
    sentry_sdk.set_tag("service_version", SERVICE_VERSION)
    sentry_sdk.set_tag("environment", ENVIRONMENT)
    _SENTRY_INITIALIZED = True
    return True


def capture_exception(exc: BaseException, *, club_owner_id: str | None = None) -> None:
    """Report ``exc`` to Sentry if the SDK was initialised."""

    if not _SENTRY_INITIALIZED:
        return

    with sentry_sdk.push_scope() as scope:
        scope.set_tag("service_version", SERVICE_VERSION)
        scope.set_tag("environment", ENVIRONMENT)
        if club_owner_id is not None:
            scope.set_user({"id": mask_identifier(club_owner_id, prefix="club")})
        sentry_sdk.capture_exception(exc)
