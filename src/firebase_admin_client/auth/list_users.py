"""Request building and response parsing for ``accounts:batchGet``."""

from __future__ import annotations

from collections.abc import Mapping

from ..core.errors import ErrorCode, FirebaseError
from ..core.models import HttpResponse
from ..core.pagination import normalize_page_token
from ..core.response_parsing import load_json_object, optional_str, parse_json_payload
from .models import ExportedUserRecord, ExportedUserRecords, ListUsersOptions

LIST_USERS_PATH_TEMPLATE = "/projects/{project_id}/accounts:batchGet"


def build_list_users_url(base_url: str, project_id: str) -> str:
    return base_url.rstrip("/") + LIST_USERS_PATH_TEMPLATE.format(project_id=project_id)


def build_list_users_params(
    options: ListUsersOptions,
    *,
    max_results: int,
) -> dict[str, str]:
    page_size = options.page_size if options.page_size is not None else max_results
    if page_size > max_results:
        raise ValueError(f"Page size must not exceed {max_results}.")
    if page_size <= 0:
        raise ValueError("Page size must be a positive integer.")
    if options.page_token == "":
        raise ValueError("Starting page token must not be empty.")

    params = {"maxResults": str(page_size)}
    if options.page_token is not None:
        params["nextPageToken"] = options.page_token
    return params


def _to_int(value: object) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def parse_user_record(item: Mapping[str, object]) -> ExportedUserRecord:
    uid = item.get("localId")
    if not isinstance(uid, str) or not uid:
        raise FirebaseError("user record is missing localId", code=ErrorCode.UNKNOWN)
    custom_attributes = item.get("customAttributes")
    return ExportedUserRecord(
        uid=uid,
        email=optional_str(item, "email"),
        email_verified=bool(item.get("emailVerified", False)),
        display_name=optional_str(item, "displayName"),
        phone_number=optional_str(item, "phoneNumber"),
        photo_url=optional_str(item, "photoUrl"),
        disabled=bool(item.get("disabled", False)),
        password_hash=optional_str(item, "passwordHash"),
        password_salt=optional_str(item, "salt"),
        tenant_id=optional_str(item, "tenantId"),
        custom_claims=(
            load_json_object(custom_attributes) if isinstance(custom_attributes, str) else None
        ),
        created_at=_to_int(item.get("createdAt")),
        last_login_at=_to_int(item.get("lastLoginAt")),
    )


def parse_list_users_response(response: HttpResponse) -> ExportedUserRecords:
    payload = parse_json_payload(response, service="Firebase Auth")
    raw_users = payload.get("users")
    if raw_users is None:
        raw_users = []
    if not isinstance(raw_users, list) or any(not isinstance(item, dict) for item in raw_users):
        raise FirebaseError(
            "users must be a list of objects",
            code=ErrorCode.UNKNOWN,
            http_status=response.status_code,
            response_body=response.text,
            cause="parse",
        )
    return ExportedUserRecords(
        users=[parse_user_record(item) for item in raw_users],
        next_page_token=normalize_page_token(payload.get("nextPageToken")),
    )


__all__ = [
    "build_list_users_url",
    "build_list_users_params",
    "parse_user_record",
    "parse_list_users_response",
]
