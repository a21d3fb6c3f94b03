"""Send Channel Message Use Case"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable
from uuid import uuid4

import structlog

from src.application.ports.gateways import IMessagingGateway
from src.domain.chime.value_objects import MessagePersistence, MessageType

logger = structlog.get_logger()


class MessageSendError(Exception):
    """メッセージ送信エラー"""

    pass


@dataclass
class SendChannelMessageInput:
    """メッセージ送信入力DTO"""

    channel_arn: str
    member_arn: str
    content: str
    member_name: str | None = None


@dataclass
class SendChannelMessageOutput:
    """メッセージ送信出力DTO（送信レシート）"""

    response: dict[str, Any]
    created_timestamp: datetime
    sender_arn: str
    sender_name: str


class SendChannelMessageUseCase:
    """
    チャンネルメッセージ送信 ユースケース

    メンバーの ARN を ChimeBearer として、非永続の STANDARD メッセージを送信する。
    送信完了を待ってからレシートを返す。
    """

    def __init__(
        self,
        messaging_gateway: IMessagingGateway,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
        id_factory: Callable[[], str] = lambda: str(uuid4()),
    ):
        self._messaging = messaging_gateway
        self._clock = clock
        self._new_id = id_factory

    async def execute(self, input_data: SendChannelMessageInput) -> SendChannelMessageOutput:
        """ユースケースを実行"""
        log = logger.bind(
            channel_arn=input_data.channel_arn,
            member_arn=input_data.member_arn,
        )
        log.info("send_channel_message_started", content_length=len(input_data.content))

        created_timestamp = self._clock()

        try:
            response = await self._messaging.send_channel_message(
                channel_arn=input_data.channel_arn,
                content=input_data.content,
                chime_bearer=input_data.member_arn,
                client_request_token=self._new_id(),
                persistence=MessagePersistence.NON_PERSISTENT,
                message_type=MessageType.STANDARD,
            )
        except Exception as e:
            log.error("send_channel_message_failed", error=str(e))
            raise MessageSendError(f"Failed to send message: {e}") from e

        log.info("send_channel_message_completed", message_id=response.get("MessageId"))

        return SendChannelMessageOutput(
            response=response,
            created_timestamp=created_timestamp,
            sender_arn=input_data.member_arn,
            sender_name=input_data.member_name or input_data.member_arn,
        )
