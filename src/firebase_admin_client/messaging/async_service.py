"""Async Cloud Messaging send operations."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..config import MessagingConfig
from ..core.http_errors import raise_for_error
from ..core.async_transport import AsyncTransport
from .batch import assemble_batch_response, prepare_batch, validate_messages
from .errors import build_messaging_error
from .models import BatchResponse, Message, MulticastMessage
from .requests import (
    build_batch_url,
    build_send_url,
    encode_send_request,
    parse_send_response,
)

logger = logging.getLogger("firebase_admin_client")


class AsyncMessagingService:
    """Sends messages through the FCM v1 API with asyncio."""

    def __init__(
        self,
        transport: AsyncTransport,
        *,
        project_id: str,
        config: MessagingConfig | None = None,
    ) -> None:
        self._transport = transport
        self._project_id = project_id
        self._config = config or MessagingConfig()
        self._send_url = build_send_url(self._config.base_url, project_id)
        self._batch_url = build_batch_url(self._config.base_url)

    async def send(self, message: Message, *, dry_run: bool = False) -> str:
        if not isinstance(message, Message):
            raise TypeError("Message must be an instance of Message class.")
        response = await self._transport.request(
            "POST",
            self._send_url,
            json=encode_send_request(message, dry_run=dry_run),
        )
        if not response.is_success:
            logger.error("send failed http_status=%s", response.status_code)
        raise_for_error(response, build=build_messaging_error)
        message_id = parse_send_response(response)
        logger.info("send completed dry_run=%s message_id=%s", dry_run, message_id)
        return message_id

    async def send_all(
        self,
        messages: Sequence[Message],
        *,
        dry_run: bool = False,
    ) -> BatchResponse:
        """Send all messages in a single batch call.

        Per-message failures are reported in the returned ``BatchResponse``;
        only failures of the batch call itself are raised.
        """

        validated = validate_messages(messages, max_batch_size=self._config.max_batch_size)
        if not validated:
            return BatchResponse(responses=())

        prepared = prepare_batch(validated, project_id=self._project_id, dry_run=dry_run)
        logger.debug("send_all start size=%s", prepared.size)
        response = await self._transport.request(
            "POST",
            self._batch_url,
            content=prepared.body,
            headers={"Content-Type": prepared.content_type},
        )
        if not response.is_success:
            logger.error("send_all failed http_status=%s", response.status_code)
        raise_for_error(response, build=build_messaging_error)

        result = assemble_batch_response(prepared, response)
        logger.info(
            "send_all completed success=%s failure=%s",
            result.success_count,
            result.failure_count,
        )
        return result

    async def send_multicast(
        self,
        multicast: MulticastMessage,
        *,
        dry_run: bool = False,
    ) -> BatchResponse:
        if not isinstance(multicast, MulticastMessage):
            raise TypeError("Message must be an instance of MulticastMessage class.")
        return await self.send_all(multicast.to_messages(), dry_run=dry_run)


__all__ = [
    "AsyncMessagingService",
]
