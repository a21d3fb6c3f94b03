"""Chime SDK Messaging Gateway Implementation"""
from __future__ import annotations

from typing import Any

import boto3
from botocore.exceptions import ClientError
import structlog

from src.application.ports.gateways import ChannelConflictError, IMessagingGateway
from src.domain.chime.value_objects import (
    ChannelMembershipType,
    ChannelMetadata,
    MessagePersistence,
    MessageType,
)
from src.infrastructure.gateways.chime.response import error_code, strip_response_metadata

logger = structlog.get_logger()


class ChimeMessagingGateway(IMessagingGateway):
    """
    Chime SDK Messaging Gateway

    Amazon Chime SDK Messaging API を使用したチャンネル・メッセージ管理。

    機能:
    - メッセージングセッションのエンドポイント取得
    - チャンネル一覧（NextToken による全ページ取得）
    - チャンネル作成・メンバー追加
    - メッセージ送信
    """

    # ListChannels の 1 ページあたりの最大件数
    LIST_PAGE_SIZE = 50

    def __init__(
        self,
        region: str,
        client: Any = None,
    ):
        self.region = region
        self._client = client or boto3.client("chime-sdk-messaging", region_name=region)

    async def get_messaging_session_endpoint(self) -> dict[str, Any]:
        """メッセージングセッションのエンドポイントを取得"""
        logger.info("get_messaging_session_endpoint_started")

        try:
            response = self._client.get_messaging_session_endpoint()
            endpoint = strip_response_metadata(response)

            logger.info(
                "get_messaging_session_endpoint_completed",
                url=endpoint.get("Endpoint", {}).get("Url"),
            )
            return endpoint

        except ClientError as e:
            logger.error("get_messaging_session_endpoint_failed", error=str(e))
            raise

    async def list_channels(
        self,
        app_instance_arn: str,
        chime_bearer: str,
    ) -> list[dict[str, Any]]:
        """
        チャンネル一覧を取得

        Args:
            app_instance_arn: App Instance ARN
            chime_bearer: 呼び出し元ユーザーの ARN

        Returns:
            list[dict]: ChannelSummary のリスト（全ページ）
        """
        log = logger.bind(app_instance_arn=app_instance_arn)
        log.info("list_channels_started")

        channels: list[dict[str, Any]] = []
        params: dict[str, Any] = {
            "AppInstanceArn": app_instance_arn,
            "ChimeBearer": chime_bearer,
            "MaxResults": self.LIST_PAGE_SIZE,
        }

        try:
            while True:
                response = self._client.list_channels(**params)
                channels.extend(response.get("Channels", []))

                next_token = response.get("NextToken")
                if not next_token:
                    break
                params["NextToken"] = next_token

            log.info("list_channels_completed", count=len(channels))
            return channels

        except ClientError as e:
            log.error("list_channels_failed", error=str(e))
            raise

    async def create_channel(
        self,
        app_instance_arn: str,
        name: str,
        metadata: ChannelMetadata,
        client_request_token: str,
        chime_bearer: str,
    ) -> str:
        """
        チャンネルを作成

        Args:
            app_instance_arn: App Instance ARN
            name: チャンネル名（ルームID）
            metadata: チャンネルメタデータ
            client_request_token: 冪等トークン
            chime_bearer: 呼び出し元ユーザーの ARN

        Returns:
            str: ChannelArn

        Raises:
            ChannelConflictError: 同名チャンネル作成が競合した場合
        """
        log = logger.bind(app_instance_arn=app_instance_arn, channel_name=name)
        log.info("create_channel_started")

        try:
            response = self._client.create_channel(
                AppInstanceArn=app_instance_arn,
                Name=name,
                Metadata=metadata.to_json(),
                ClientRequestToken=client_request_token,
                ChimeBearer=chime_bearer,
            )
            channel_arn = response["ChannelArn"]

            log.info("create_channel_completed", channel_arn=channel_arn)
            return channel_arn

        except ClientError as e:
            if error_code(e) == "ConflictException":
                log.warning("create_channel_conflict", error=str(e))
                raise ChannelConflictError(str(e)) from e
            log.error("create_channel_failed", error=str(e))
            raise

    async def create_channel_membership(
        self,
        channel_arn: str,
        member_arn: str,
        chime_bearer: str,
        membership_type: ChannelMembershipType = ChannelMembershipType.DEFAULT,
    ) -> dict[str, Any]:
        """チャンネルにメンバーを追加"""
        log = logger.bind(channel_arn=channel_arn, member_arn=member_arn)
        log.info("create_channel_membership_started", type=membership_type.value)

        try:
            response = self._client.create_channel_membership(
                ChannelArn=channel_arn,
                MemberArn=member_arn,
                Type=membership_type.value,
                ChimeBearer=chime_bearer,
            )

            log.info("create_channel_membership_completed")
            return strip_response_metadata(response)

        except ClientError as e:
            log.error("create_channel_membership_failed", error=str(e))
            raise

    async def send_channel_message(
        self,
        channel_arn: str,
        content: str,
        chime_bearer: str,
        client_request_token: str,
        persistence: MessagePersistence = MessagePersistence.NON_PERSISTENT,
        message_type: MessageType = MessageType.STANDARD,
    ) -> dict[str, Any]:
        """チャンネルにメッセージを送信"""
        log = logger.bind(channel_arn=channel_arn, chime_bearer=chime_bearer)
        log.info(
            "send_channel_message_started",
            persistence=persistence.value,
            type=message_type.value,
        )

        try:
            response = self._client.send_channel_message(
                ChannelArn=channel_arn,
                Content=content,
                Type=message_type.value,
                Persistence=persistence.value,
                ClientRequestToken=client_request_token,
                ChimeBearer=chime_bearer,
            )
            result = strip_response_metadata(response)

            log.info("send_channel_message_completed", message_id=result.get("MessageId"))
            return result

        except ClientError as e:
            log.error("send_channel_message_failed", error=str(e))
            raise
