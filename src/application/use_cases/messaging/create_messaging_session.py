"""Create Messaging Session Use Case"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Callable
from uuid import NAMESPACE_URL, uuid4, uuid5

import structlog

from src.application.ports.gateways import (
    ChannelConflictError,
    CredentialIssueError,
    ICredentialIssuer,
    IIdentityGateway,
    IMessagingGateway,
)
from src.domain.chime.value_objects import (
    ChannelMembershipType,
    ChannelMetadata,
    ScopedCredential,
)

logger = structlog.get_logger()


class MessagingSessionError(Exception):
    """メッセージングセッション作成エラー"""

    pass


@dataclass
class CreateMessagingSessionInput:
    """メッセージングセッション入力DTO"""

    meeting_id: str


@dataclass
class CreateMessagingSessionOutput:
    """メッセージングセッション出力DTO"""

    app_instance_user_arn: str
    channel_arn: str
    channel_created: bool
    membership: dict[str, Any]
    endpoint: dict[str, Any]
    credential: ScopedCredential


def channel_request_token(app_instance_arn: str, name: str, day: date) -> str:
    """
    チャンネル名と日付（UTC）から決定的な ClientRequestToken を生成

    同じ日の並行リクエストは同じトークンを使う。削除後に同名チャンネルを
    翌日以降に作り直した場合は、削除済みの ARN が冪等応答として返らない。
    """
    return str(
        uuid5(NAMESPACE_URL, f"{app_instance_arn}/channels/{name}/{day.isoformat()}")
    )


class CreateMessagingSessionUseCase:
    """
    メッセージングセッション作成 ユースケース

    1. App Instance User を作成（ID・名前・冪等トークンは同一の UUID）
    2. メッセージングセッションのエンドポイントを取得
    3. ミーティングIDと同名のチャンネルを検索、なければ作成
    4. ユーザーをチャンネルのメンバーに追加
    5. ユーザーとチャンネルに限定した短期認証情報を発行
    """

    def __init__(
        self,
        identity_gateway: IIdentityGateway,
        messaging_gateway: IMessagingGateway,
        credential_issuer: ICredentialIssuer,
        app_instance_arn: str,
        credential_ttl_seconds: int = 900,
        id_factory: Callable[[], str] = lambda: str(uuid4()),
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self._identity = identity_gateway
        self._messaging = messaging_gateway
        self._credentials = credential_issuer
        self._app_instance_arn = app_instance_arn
        self._credential_ttl = credential_ttl_seconds
        self._new_id = id_factory
        self._now = clock

    async def execute(
        self, input_data: CreateMessagingSessionInput
    ) -> CreateMessagingSessionOutput:
        """ユースケースを実行"""
        log = logger.bind(meeting_id=input_data.meeting_id)
        log.info("create_messaging_session_started")

        try:
            # 1. ユーザーを作成
            user_id = self._new_id()
            user_arn = await self._identity.create_app_instance_user(
                app_instance_arn=self._app_instance_arn,
                user_id=user_id,
                name=user_id,
                client_request_token=user_id,
            )
            log = log.bind(app_instance_user_arn=user_arn)

            # 2. エンドポイントを取得
            endpoint = await self._messaging.get_messaging_session_endpoint()

            # 3. チャンネルを解決
            channel_arn, created = await self._resolve_channel(
                input_data.meeting_id, user_arn
            )
            log = log.bind(channel_arn=channel_arn)

            # 4. メンバーシップを作成
            membership = await self._messaging.create_channel_membership(
                channel_arn=channel_arn,
                member_arn=user_arn,
                chime_bearer=user_arn,
                membership_type=ChannelMembershipType.DEFAULT,
            )

            # 5. 認証情報を発行
            credential = await self._credentials.mint_scoped_credential(
                subject=user_id,
                ttl_seconds=self._credential_ttl,
                resource_arns=[user_arn, channel_arn],
            )

            log.info(
                "create_messaging_session_completed",
                channel_created=created,
                credential_expiration=credential.expiration.isoformat(),
            )

            return CreateMessagingSessionOutput(
                app_instance_user_arn=user_arn,
                channel_arn=channel_arn,
                channel_created=created,
                membership=membership,
                endpoint=endpoint,
                credential=credential,
            )

        except CredentialIssueError:
            raise
        except Exception as e:
            log.error("create_messaging_session_failed", error=str(e))
            raise MessagingSessionError(
                f"Failed to create messaging session: {e}"
            ) from e

    async def _resolve_channel(self, name: str, chime_bearer: str) -> tuple[str, bool]:
        """同名チャンネルを検索し、なければ作成する（ARN, 作成したか）"""
        existing = await self._find_channel(name, chime_bearer)
        if existing:
            return existing, False

        try:
            channel_arn = await self._messaging.create_channel(
                app_instance_arn=self._app_instance_arn,
                name=name,
                metadata=ChannelMetadata(),
                client_request_token=channel_request_token(
                    self._app_instance_arn, name, self._now().date()
                ),
                chime_bearer=chime_bearer,
            )
            return channel_arn, True

        except ChannelConflictError:
            # 並行リクエストが先に作成した場合は再検索する
            logger.warning("channel_create_conflict", channel_name=name)
            existing = await self._find_channel(name, chime_bearer)
            if existing:
                return existing, False
            raise

    async def _find_channel(self, name: str, chime_bearer: str) -> str | None:
        channels = await self._messaging.list_channels(
            app_instance_arn=self._app_instance_arn,
            chime_bearer=chime_bearer,
        )
        for channel in channels:
            if channel.get("Name") == name:
                return channel["ChannelArn"]
        return None
