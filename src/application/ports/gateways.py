"""Gateway Interfaces (Ports)"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from src.domain.chime.value_objects import (
    AttendeeCapabilities,
    ChannelMembershipType,
    ChannelMetadata,
    MessagePersistence,
    MessageType,
    ScopedCredential,
)


class ChannelConflictError(Exception):
    """同名チャンネル作成の競合（ConflictException）"""

    pass


class CredentialIssueError(Exception):
    """認証情報の発行エラー"""

    pass


class IMeetingGateway(ABC):
    """
    Meeting Gateway Interface

    Chime SDK Meetings との通信を抽象化する。
    戻り値はプロバイダのレスポンス（ResponseMetadata を除く）。
    """

    @abstractmethod
    async def create_meeting(
        self,
        external_meeting_id: str,
        client_request_token: str,
        media_region: str,
    ) -> dict[str, Any]:
        """ミーティングを作成"""
        pass

    @abstractmethod
    async def get_meeting(self, meeting_id: str) -> dict[str, Any]:
        """ミーティングを取得"""
        pass

    @abstractmethod
    async def create_attendee(
        self,
        meeting_id: str,
        external_user_id: str,
        capabilities: AttendeeCapabilities,
    ) -> dict[str, Any]:
        """参加者を作成"""
        pass


class IIdentityGateway(ABC):
    """
    Identity Gateway Interface

    Chime SDK Identity（App Instance User）との通信を抽象化する。
    """

    @abstractmethod
    async def create_app_instance_user(
        self,
        app_instance_arn: str,
        user_id: str,
        name: str,
        client_request_token: str,
    ) -> str:
        """App Instance User を作成し ARN を返す"""
        pass


class IMessagingGateway(ABC):
    """
    Messaging Gateway Interface

    Chime SDK Messaging（チャンネル・メッセージ）との通信を抽象化する。
    """

    @abstractmethod
    async def get_messaging_session_endpoint(self) -> dict[str, Any]:
        """メッセージングセッションのエンドポイントを取得"""
        pass

    @abstractmethod
    async def list_channels(
        self,
        app_instance_arn: str,
        chime_bearer: str,
    ) -> list[dict[str, Any]]:
        """チャンネル一覧を取得（全ページ）"""
        pass

    @abstractmethod
    async def create_channel(
        self,
        app_instance_arn: str,
        name: str,
        metadata: ChannelMetadata,
        client_request_token: str,
        chime_bearer: str,
    ) -> str:
        """チャンネルを作成し ARN を返す"""
        pass

    @abstractmethod
    async def create_channel_membership(
        self,
        channel_arn: str,
        member_arn: str,
        chime_bearer: str,
        membership_type: ChannelMembershipType = ChannelMembershipType.DEFAULT,
    ) -> dict[str, Any]:
        """チャンネルにメンバーを追加"""
        pass

    @abstractmethod
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
        pass


class ICredentialIssuer(ABC):
    """
    Credential Issuer Interface

    クライアント向けに短期・スコープ限定の認証情報を発行する。
    """

    @abstractmethod
    async def mint_scoped_credential(
        self,
        subject: str,
        ttl_seconds: int,
        resource_arns: list[str],
    ) -> ScopedCredential:
        """subject 用のスコープ限定認証情報を発行"""
        pass
