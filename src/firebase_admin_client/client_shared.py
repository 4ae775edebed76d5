"""Shared helpers for sync/async client bootstrap."""

from __future__ import annotations

import os
from collections.abc import Mapping

from .config import FirebaseClientConfig
from .core.errors import ErrorCode, FirebaseError

PROJECT_ID_ENV_VARS = ("GOOGLE_CLOUD_PROJECT", "GCLOUD_PROJECT")


def validate_client_config(config: FirebaseClientConfig) -> None:
    try:
        config.validate()
    except ValueError as exc:
        raise FirebaseError(str(exc), code=ErrorCode.INVALID_ARGUMENT) from exc


def resolve_project_id(
    config: FirebaseClientConfig,
    *,
    environ: Mapping[str, str] | None = None,
) -> str:
    if config.project_id:
        return config.project_id
    env = os.environ if environ is None else environ
    for name in PROJECT_ID_ENV_VARS:
        value = env.get(name, "").strip()
        if value:
            return value
    raise FirebaseError(
        "Project ID is required to access Firebase services. Set the project ID "
        "explicitly via FirebaseClientConfig.project_id, or via the "
        "GOOGLE_CLOUD_PROJECT environment variable.",
        code=ErrorCode.INVALID_ARGUMENT,
    )


__all__ = [
    "PROJECT_ID_ENV_VARS",
    "validate_client_config",
    "resolve_project_id",
]
