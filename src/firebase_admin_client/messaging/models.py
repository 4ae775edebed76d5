"""Cloud Messaging request and response models."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from ..config import MAX_BATCH_SIZE
from ..core.errors import FirebaseError


def _freeze_mapping(value: Mapping[str, object] | None, *, name: str) -> dict | None:
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise TypeError(f"{name} must be a mapping")
    return dict(value)


@dataclass(slots=True, frozen=True)
class Notification:
    title: str | None = None
    body: str | None = None
    image: str | None = None


@dataclass(slots=True, frozen=True)
class Message:
    """A single message addressed to a token, a topic or a condition.

    ``android``, ``apns``, ``webpush`` and ``fcm_options`` are passed through
    to the wire unchanged and are expected to already use the REST field names.
    """

    token: str | None = None
    topic: str | None = None
    condition: str | None = None
    data: Mapping[str, str] | None = None
    notification: Notification | None = None
    android: Mapping[str, object] | None = None
    apns: Mapping[str, object] | None = None
    webpush: Mapping[str, object] | None = None
    fcm_options: Mapping[str, object] | None = None

    def __post_init__(self) -> None:
        targets = [value for value in (self.token, self.topic, self.condition) if value is not None]
        if len(targets) != 1:
            raise ValueError("Exactly one of token, topic or condition must be specified.")
        if self.data is not None:
            if not isinstance(self.data, Mapping):
                raise TypeError("Message.data must be a mapping of str to str")
            for key, value in self.data.items():
                if not isinstance(key, str) or not isinstance(value, str):
                    raise TypeError("Message.data must be a mapping of str to str")
        if self.notification is not None and not isinstance(self.notification, Notification):
            raise TypeError("Message.notification must be a Notification")
        object.__setattr__(self, "data", _freeze_mapping(self.data, name="Message.data"))
        for name in ("android", "apns", "webpush", "fcm_options"):
            object.__setattr__(
                self,
                name,
                _freeze_mapping(getattr(self, name), name=f"Message.{name}"),
            )


@dataclass(slots=True, frozen=True)
class MulticastMessage:
    """The same payload addressed to several registration tokens."""

    tokens: Sequence[str]
    data: Mapping[str, str] | None = None
    notification: Notification | None = None
    android: Mapping[str, object] | None = None
    apns: Mapping[str, object] | None = None
    webpush: Mapping[str, object] | None = None
    fcm_options: Mapping[str, object] | None = None

    def __post_init__(self) -> None:
        if isinstance(self.tokens, str) or not isinstance(self.tokens, Sequence):
            raise TypeError("MulticastMessage.tokens must be a list of strings.")
        if any(not isinstance(token, str) for token in self.tokens):
            raise TypeError("MulticastMessage.tokens must not contain non-string values.")
        if not self.tokens:
            raise ValueError("MulticastMessage.tokens must not be empty.")
        if len(self.tokens) > MAX_BATCH_SIZE:
            raise ValueError(
                f"MulticastMessage.tokens must not contain more than {MAX_BATCH_SIZE} tokens."
            )
        object.__setattr__(self, "tokens", tuple(self.tokens))

    def to_messages(self) -> list[Message]:
        return [
            Message(
                token=token,
                data=self.data,
                notification=self.notification,
                android=self.android,
                apns=self.apns,
                webpush=self.webpush,
                fcm_options=self.fcm_options,
            )
            for token in self.tokens
        ]


@dataclass(slots=True, frozen=True)
class SendResponse:
    """Outcome of one message in a batch."""

    message_id: str | None = None
    exception: FirebaseError | None = None

    @property
    def success(self) -> bool:
        return self.exception is None


@dataclass(slots=True, frozen=True)
class BatchResponse:
    responses: tuple[SendResponse, ...] | list[SendResponse] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if isinstance(self.responses, tuple):
            return
        object.__setattr__(self, "responses", tuple(self.responses))

    @property
    def success_count(self) -> int:
        return sum(1 for response in self.responses if response.success)

    @property
    def failure_count(self) -> int:
        return len(self.responses) - self.success_count


__all__ = [
    "Notification",
    "Message",
    "MulticastMessage",
    "SendResponse",
    "BatchResponse",
]
