"""Client configuration."""

from __future__ import annotations

from dataclasses import dataclass, field

MAX_BATCH_SIZE = 500
MAX_LIST_USERS_RESULTS = 1000


@dataclass(slots=True, frozen=True)
class TransportConfig:
    """Transport-related settings."""

    timeout_connect_seconds: float = 10.0
    timeout_read_seconds: float = 120.0
    timeout_write_seconds: float = 120.0
    timeout_pool_seconds: float = 10.0

    def validate(self) -> None:
        for field_name in (
            "timeout_connect_seconds",
            "timeout_read_seconds",
            "timeout_write_seconds",
            "timeout_pool_seconds",
        ):
            if getattr(self, field_name) <= 0:
                raise ValueError(f"transport.{field_name} must be > 0")


@dataclass(slots=True, frozen=True)
class MessagingConfig:
    """Cloud Messaging settings."""

    base_url: str = "https://fcm.googleapis.com"
    max_batch_size: int = MAX_BATCH_SIZE

    def validate(self) -> None:
        if not self.base_url:
            raise ValueError("messaging.base_url must not be empty")
        if not 1 <= self.max_batch_size <= MAX_BATCH_SIZE:
            raise ValueError(f"messaging.max_batch_size must be in 1..{MAX_BATCH_SIZE}")


@dataclass(slots=True, frozen=True)
class AuthConfig:
    """Auth user management settings."""

    base_url: str = "https://identitytoolkit.googleapis.com/v1"
    max_list_users_results: int = MAX_LIST_USERS_RESULTS

    def validate(self) -> None:
        if not self.base_url:
            raise ValueError("auth.base_url must not be empty")
        if not 1 <= self.max_list_users_results <= MAX_LIST_USERS_RESULTS:
            raise ValueError(
                f"auth.max_list_users_results must be in 1..{MAX_LIST_USERS_RESULTS}"
            )


@dataclass(slots=True, frozen=True)
class FirebaseClientConfig:
    """Runtime configuration for Firebase clients."""

    project_id: str | None = None
    user_agent: str = "firebase-admin-client/0.1.0"

    transport: TransportConfig = field(default_factory=TransportConfig)
    messaging: MessagingConfig = field(default_factory=MessagingConfig)
    auth: AuthConfig = field(default_factory=AuthConfig)

    def validate(self) -> None:
        if self.project_id is not None and not self.project_id.strip():
            raise ValueError("project_id must not be blank")
        if not self.user_agent:
            raise ValueError("user_agent must not be empty")
        self.transport.validate()
        self.messaging.validate()
        self.auth.validate()


__all__ = [
    "MAX_BATCH_SIZE",
    "MAX_LIST_USERS_RESULTS",
    "TransportConfig",
    "MessagingConfig",
    "AuthConfig",
    "FirebaseClientConfig",
]
