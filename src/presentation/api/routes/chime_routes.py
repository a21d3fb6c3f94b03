"""Chime Integration API Routes"""
from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict, Field

from src.application.ports.gateways import (
    ICredentialIssuer,
    IIdentityGateway,
    IMeetingGateway,
    IMessagingGateway,
)
from src.application.use_cases.meeting import (
    CreateMeetingSessionInput,
    CreateMeetingSessionOutput,
    CreateMeetingSessionUseCase,
)
from src.application.use_cases.messaging import (
    CreateMessagingSessionInput,
    CreateMessagingSessionOutput,
    CreateMessagingSessionUseCase,
    SendChannelMessageInput,
    SendChannelMessageOutput,
    SendChannelMessageUseCase,
)
from src.infrastructure.config import Settings, get_settings
from src.infrastructure.gateways import (
    ChimeIdentityGateway,
    ChimeMeetingsGateway,
    ChimeMessagingGateway,
    StsCredentialGateway,
)

router = APIRouter()


# === Dependency Injection ===


def get_meeting_gateway(
    settings: Annotated[Settings, Depends(get_settings)]
) -> IMeetingGateway:
    """Meeting Gateway の依存性注入"""
    return ChimeMeetingsGateway(region=settings.require_region())


def get_identity_gateway(
    settings: Annotated[Settings, Depends(get_settings)]
) -> IIdentityGateway:
    """Identity Gateway の依存性注入"""
    return ChimeIdentityGateway(region=settings.require_region())


def get_messaging_gateway(
    settings: Annotated[Settings, Depends(get_settings)]
) -> IMessagingGateway:
    """Messaging Gateway の依存性注入"""
    return ChimeMessagingGateway(region=settings.require_region())


def get_credential_issuer(
    settings: Annotated[Settings, Depends(get_settings)]
) -> ICredentialIssuer:
    """Credential Issuer の依存性注入"""
    return StsCredentialGateway(
        region=settings.require_region(),
        role_arn=settings.messaging_role_arn,
    )


# === Request/Response Models ===


class MeetingSessionResponse(BaseModel):
    """ミーティングセッションレスポンス"""

    model_config = ConfigDict(populate_by_name=True)

    attendee_response: dict[str, Any] = Field(alias="attendeeResponse")
    meeting_response: dict[str, Any] = Field(alias="meetingResponse")


class MessagingSessionResponse(BaseModel):
    """メッセージングセッションレスポンス"""

    model_config = ConfigDict(populate_by_name=True)

    msg_channel_arn: str = Field(alias="msgChannelArn")
    msg_channel_membership_response: dict[str, Any] = Field(
        alias="msgChannelMembershipResponse"
    )
    endpoint_response: dict[str, Any] = Field(alias="endpointResponse")
    region: str
    access_key_id: str = Field(alias="accessKeyId")
    secret_access_key: str = Field(alias="secretAccessKey")
    session_token: str = Field(alias="sessionToken")
    expiration: datetime


class ChannelMember(BaseModel):
    """チャンネルメンバー"""

    model_config = ConfigDict(populate_by_name=True)

    arn: str = Field(alias="Arn", min_length=1)
    name: str | None = Field(default=None, alias="Name")


class ChannelMembership(BaseModel):
    """チャンネルメンバーシップ（メッセージングセッションの応答そのまま）"""

    model_config = ConfigDict(populate_by_name=True)

    channel_arn: str = Field(alias="ChannelArn", min_length=1)
    member: ChannelMember = Field(alias="Member")


class SendMessageRequest(BaseModel):
    """メッセージ送信リクエスト"""

    model_config = ConfigDict(populate_by_name=True)

    channel_membership: ChannelMembership = Field(alias="channelMembership")
    content: str = Field(min_length=1, description="メッセージ本文")


class MessageSender(BaseModel):
    """送信者"""

    model_config = ConfigDict(populate_by_name=True)

    arn: str = Field(alias="Arn")
    name: str = Field(alias="Name")


class SendMessageResponse(BaseModel):
    """メッセージ送信レスポンス"""

    model_config = ConfigDict(populate_by_name=True)

    response: dict[str, Any]
    created_timestamp: datetime = Field(alias="CreatedTimestamp")
    sender: MessageSender = Field(alias="Sender")


# === Routes ===


@router.get("/meeting-session", response_model=MeetingSessionResponse)
async def create_meeting_session(
    room: Annotated[str, Query(min_length=1, description="ルームID")],
    meeting_gateway: Annotated[IMeetingGateway, Depends(get_meeting_gateway)],
    settings: Annotated[Settings, Depends(get_settings)],
    meeting_id: Annotated[
        str | None, Query(alias="meetingId", description="再利用する Chime ミーティングID")
    ] = None,
) -> MeetingSessionResponse:
    """ミーティングと参加者を作成"""
    use_case = CreateMeetingSessionUseCase(
        meeting_gateway=meeting_gateway,
        media_region=settings.require_media_region(),
    )

    input_data = CreateMeetingSessionInput(room=room, meeting_id=meeting_id)
    output: CreateMeetingSessionOutput = await use_case.execute(input_data)

    return MeetingSessionResponse(
        attendee_response={"Attendee": output.attendee},
        meeting_response={"Meeting": output.meeting},
    )


@router.get("/messaging-session/{meeting_id}", response_model=MessagingSessionResponse)
async def create_messaging_session(
    meeting_id: str,
    identity_gateway: Annotated[IIdentityGateway, Depends(get_identity_gateway)],
    messaging_gateway: Annotated[IMessagingGateway, Depends(get_messaging_gateway)],
    credential_issuer: Annotated[ICredentialIssuer, Depends(get_credential_issuer)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> MessagingSessionResponse:
    """ユーザー・チャンネル・メンバーシップを用意し、接続情報を返す"""
    use_case = CreateMessagingSessionUseCase(
        identity_gateway=identity_gateway,
        messaging_gateway=messaging_gateway,
        credential_issuer=credential_issuer,
        app_instance_arn=settings.require_app_instance_arn(),
        credential_ttl_seconds=settings.credential_ttl_seconds,
    )

    input_data = CreateMessagingSessionInput(meeting_id=meeting_id)
    output: CreateMessagingSessionOutput = await use_case.execute(input_data)

    return MessagingSessionResponse.model_validate(
        {
            "msgChannelArn": output.channel_arn,
            "msgChannelMembershipResponse": output.membership,
            "endpointResponse": output.endpoint,
            **output.credential.to_dict(),
        }
    )


@router.post("/message", response_model=SendMessageResponse)
async def send_message(
    request: SendMessageRequest,
    messaging_gateway: Annotated[IMessagingGateway, Depends(get_messaging_gateway)],
) -> SendMessageResponse:
    """チャンネルにメッセージを送信"""
    use_case = SendChannelMessageUseCase(messaging_gateway=messaging_gateway)

    membership = request.channel_membership
    input_data = SendChannelMessageInput(
        channel_arn=membership.channel_arn,
        member_arn=membership.member.arn,
        member_name=membership.member.name,
        content=request.content,
    )
    output: SendChannelMessageOutput = await use_case.execute(input_data)

    return SendMessageResponse(
        response=output.response,
        created_timestamp=output.created_timestamp,
        sender=MessageSender(arn=output.sender_arn, name=output.sender_name),
    )
