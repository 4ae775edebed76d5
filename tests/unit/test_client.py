from __future__ import annotations

import pytest

from firebase_admin_client.auth.models import ListUsersOptions
from firebase_admin_client.client import FirebaseClient, _GuardedAuthService
from firebase_admin_client.config import FirebaseClientConfig, MessagingConfig
from firebase_admin_client.core.errors import ErrorCode, FirebaseClientClosedError, FirebaseError
from firebase_admin_client.core.transport import SyncTransport
from firebase_admin_client.messaging.models import Message
from tests.shared.transport import Response, SyncSequencedClient, build_config


def _client(steps) -> tuple[FirebaseClient, SyncSequencedClient]:
    http = SyncSequencedClient(steps)
    config = build_config()
    return FirebaseClient(config=config, transport=SyncTransport(config, client=http)), http


def test_client_context_manager_closes_transport():
    http = SyncSequencedClient([])
    config = build_config()
    with FirebaseClient(config=config, http_client=http) as client:
        assert client is not None
    # injected clients are owned by the caller
    assert http.closed is False


def test_client_closes_owned_transport():
    config = build_config()
    transport = SyncTransport(config)
    client = FirebaseClient(config=config, transport=transport)
    client.close()
    assert transport._closed is True


def test_client_raises_when_used_after_close():
    client, _ = _client([])
    client.close()
    with pytest.raises(FirebaseClientClosedError):
        client.messaging.send(Message(token="t"))
    with pytest.raises(FirebaseClientClosedError):
        client.auth.list_users()


def test_client_delegates_messaging_and_auth():
    client, http = _client(
        [
            Response(200, '{"name": "m1"}'),
            Response(200, '{"users": [{"localId": "u1"}]}'),
        ]
    )
    with client:
        assert client.messaging.send(Message(topic="news")) == "m1"
        users = list(client.auth.iter_users(ListUsersOptions(page_size=5)))
    assert [u.uid for u in users] == ["u1"]
    assert http.calls == 2


def test_client_iter_raises_when_closed_mid_iteration():
    client, _ = _client(
        [
            Response(200, '{"users": [{"localId": "u1"}, {"localId": "u2"}]}'),
        ]
    )
    iterator = client.auth.iter_users()
    assert next(iterator).uid == "u1"
    client.close()
    with pytest.raises(FirebaseClientClosedError):
        next(iterator)


def test_client_iter_pages_follows_tokens():
    client, http = _client(
        [
            Response(200, '{"users": [{"localId": "u1"}], "nextPageToken": "t2"}'),
            Response(200, '{"users": [{"localId": "u2"}]}'),
        ]
    )
    pages = list(client.auth.iter_pages(ListUsersOptions(page_size=1)))
    assert [[u.uid for u in page.users] for page in pages] == [["u1"], ["u2"]]
    assert http.requests[1][2]["params"] == {"maxResults": "1", "nextPageToken": "t2"}


def test_client_iter_pages_raises_when_closed():
    client, _ = _client([])
    client.close()
    with pytest.raises(FirebaseClientClosedError):
        client.auth.iter_pages()


class _TrackingAuthService:
    def __init__(self) -> None:
        self.closed = False

    def iter_users(self, options=None):
        try:
            yield "u1"
            yield "u2"
        finally:
            self.closed = True


class _OpenOwner:
    def _ensure_open(self) -> None:
        return None


def test_client_iter_users_closes_delegate_on_early_stop():
    delegate = _TrackingAuthService()
    guarded = _GuardedAuthService(_OpenOwner(), delegate)  # type: ignore[arg-type]
    iterator = guarded.iter_users()
    assert next(iterator) == "u1"
    iterator.close()
    assert delegate.closed is True


def test_client_rejects_invalid_config():
    with pytest.raises(FirebaseError) as excinfo:
        FirebaseClient(
            config=FirebaseClientConfig(
                project_id="p",
                messaging=MessagingConfig(max_batch_size=0),
            )
        )
    assert excinfo.value.code is ErrorCode.INVALID_ARGUMENT


def test_client_requires_project_id(monkeypatch):
    monkeypatch.delenv("GOOGLE_CLOUD_PROJECT", raising=False)
    monkeypatch.delenv("GCLOUD_PROJECT", raising=False)
    with pytest.raises(FirebaseError, match="Project ID is required"):
        FirebaseClient(config=FirebaseClientConfig())
