from __future__ import annotations

import asyncio

import httpx
import pytest

from firebase_admin_client.core.async_transport import AsyncTransport
from firebase_admin_client.core.errors import ErrorCode, FirebaseTransportError
from firebase_admin_client.messaging.async_service import AsyncMessagingService
from firebase_admin_client.messaging.errors import FirebaseMessagingError, MessagingErrorCode
from firebase_admin_client.messaging.models import Message, MulticastMessage
from tests.shared.payloads import batch_responder, error_body, success_body
from tests.shared.transport import AsyncSequencedClient, Response, build_config


def _service(client) -> AsyncMessagingService:
    config = build_config()
    return AsyncMessagingService(
        AsyncTransport(config, client=client),
        project_id="test-project",
        config=config.messaging,
    )


class _BlockingAsyncClient:
    def __init__(self):
        self.started = asyncio.Event()
        self.cancelled = False

    async def request(self, method: str, url: str, **kwargs):
        self.started.set()
        try:
            await asyncio.sleep(3600)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        return Response(200, success_body())

    async def aclose(self):
        return None


@pytest.mark.asyncio
async def test_async_send_returns_message_id():
    client = AsyncSequencedClient([Response(200, success_body("m-1"))])
    assert await _service(client).send(Message(token="t")) == "m-1"


@pytest.mark.asyncio
async def test_async_send_429_is_resource_exhausted():
    client = AsyncSequencedClient([Response(429, error_body(None, "too many"))])
    with pytest.raises(FirebaseMessagingError) as excinfo:
        await _service(client).send(Message(token="t"))
    assert excinfo.value.code is ErrorCode.RESOURCE_EXHAUSTED
    assert str(excinfo.value) == "too many"


@pytest.mark.asyncio
async def test_async_send_all_empty():
    client = AsyncSequencedClient([])
    result = await _service(client).send_all([])
    assert result.responses == ()
    assert client.calls == 0


@pytest.mark.asyncio
async def test_async_send_all_partial_failure():
    client = AsyncSequencedClient(
        [
            batch_responder(
                [
                    (200, success_body("m1")),
                    (404, error_body("NOT_FOUND", "gone", fcm_error_code="UNREGISTERED")),
                    (200, success_body("m3")),
                ]
            )
        ]
    )
    result = await _service(client).send_all(
        [Message(token="a"), Message(token="b"), Message(token="c")]
    )

    assert [r.success for r in result.responses] == [True, False, True]
    assert result.responses[0].message_id == "m1"
    assert result.responses[2].message_id == "m3"
    failure = result.responses[1].exception
    assert failure.code is ErrorCode.NOT_FOUND
    assert failure.messaging_error_code is MessagingErrorCode.UNREGISTERED
    assert client.calls == 1


@pytest.mark.asyncio
async def test_async_send_all_transport_failure_is_atomic():
    client = AsyncSequencedClient([httpx.ConnectError("down")])
    with pytest.raises(FirebaseTransportError):
        await _service(client).send_all([Message(token="a"), Message(token="b")])


@pytest.mark.asyncio
async def test_async_send_multicast():
    client = AsyncSequencedClient([batch_responder([(200, success_body("x")), (200, success_body("y"))])])
    result = await _service(client).send_multicast(MulticastMessage(tokens=["a", "b"]))
    assert [r.message_id for r in result.responses] == ["x", "y"]


@pytest.mark.asyncio
async def test_async_send_all_cancellation_propagates_without_result():
    client = _BlockingAsyncClient()
    task = asyncio.create_task(_service(client).send_all([Message(token="a")]))
    await client.started.wait()
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    assert client.cancelled is True


@pytest.mark.asyncio
async def test_async_concurrent_sends_share_transport():
    client = AsyncSequencedClient(
        [Response(200, success_body("a")), Response(200, success_body("b"))]
    )
    service = _service(client)
    results = await asyncio.gather(
        service.send(Message(token="1")),
        service.send(Message(token="2")),
    )
    assert sorted(results) == ["a", "b"]
