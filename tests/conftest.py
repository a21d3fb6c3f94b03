"""Shared test doubles for the Chime integration tests.

All provider calls go through in-memory fakes that implement the gateway
ports, so no AWS account or network access is needed.
"""
from __future__ import annotations

from datetime import datetime, timezone
from itertools import count
from typing import Any

import pytest
from botocore.exceptions import ClientError

from src.application.ports.gateways import (
    ChannelConflictError,
    ICredentialIssuer,
    IIdentityGateway,
    IMeetingGateway,
    IMessagingGateway,
)
from src.domain.chime.value_objects import (
    AttendeeCapabilities,
    ChannelMembershipType,
    ChannelMetadata,
    MessagePersistence,
    MessageType,
    ScopedCredential,
)

APP_INSTANCE_ARN = "arn:aws:chime:us-east-1:123456789012:app-instance/test-instance"
REGION = "us-east-1"
EXPIRATION = datetime(2030, 1, 1, tzinfo=timezone.utc)


class FakeMeetingGateway(IMeetingGateway):
    """In-memory Chime Meetings."""

    def __init__(self) -> None:
        self.meetings: dict[str, dict[str, Any]] = {}
        self.attendees: list[dict[str, Any]] = []
        self.create_calls: list[dict[str, Any]] = []
        self._ids = count(1)

    async def create_meeting(
        self, external_meeting_id: str, client_request_token: str, media_region: str
    ) -> dict[str, Any]:
        self.create_calls.append(
            {
                "external_meeting_id": external_meeting_id,
                "client_request_token": client_request_token,
                "media_region": media_region,
            }
        )
        meeting_id = f"meeting-{next(self._ids)}"
        meeting = {
            "MeetingId": meeting_id,
            "ExternalMeetingId": external_meeting_id,
            "MediaRegion": media_region,
            "MediaPlacement": {"AudioHostUrl": f"{meeting_id}.audio.example.com"},
        }
        self.meetings[meeting_id] = meeting
        return meeting

    async def get_meeting(self, meeting_id: str) -> dict[str, Any]:
        if meeting_id not in self.meetings:
            raise LookupError(f"NotFoundException: meeting {meeting_id}")
        return self.meetings[meeting_id]

    async def create_attendee(
        self,
        meeting_id: str,
        external_user_id: str,
        capabilities: AttendeeCapabilities,
    ) -> dict[str, Any]:
        attendee = {
            "AttendeeId": f"attendee-{len(self.attendees) + 1}",
            "ExternalUserId": external_user_id,
            "JoinToken": "join-token",
            "Capabilities": capabilities.to_dict(),
            "MeetingId": meeting_id,
        }
        self.attendees.append(attendee)
        return attendee


class FakeIdentityGateway(IIdentityGateway):
    """In-memory Chime Identity."""

    def __init__(self) -> None:
        self.users: list[dict[str, str]] = []

    async def create_app_instance_user(
        self,
        app_instance_arn: str,
        user_id: str,
        name: str,
        client_request_token: str,
    ) -> str:
        arn = f"{app_instance_arn}/user/{user_id}"
        self.users.append(
            {
                "arn": arn,
                "user_id": user_id,
                "name": name,
                "client_request_token": client_request_token,
            }
        )
        return arn


class FakeMessagingGateway(IMessagingGateway):
    """In-memory Chime Messaging.

    ``conflict_on_create`` simulates a concurrent request creating the same
    channel between our lookup and our create. With ``conflict_leaves_channel``
    off, the conflicting channel never shows up in a later listing.
    """

    def __init__(
        self, conflict_on_create: bool = False, conflict_leaves_channel: bool = True
    ) -> None:
        self.channels: list[dict[str, Any]] = []
        self.memberships: list[dict[str, Any]] = []
        self.messages: list[dict[str, Any]] = []
        self.create_channel_calls = 0
        self.channel_request_tokens: list[str] = []
        self.conflict_on_create = conflict_on_create
        self.conflict_leaves_channel = conflict_leaves_channel

    async def get_messaging_session_endpoint(self) -> dict[str, Any]:
        return {"Endpoint": {"Url": "wss://messaging.example.com"}}

    async def list_channels(
        self, app_instance_arn: str, chime_bearer: str
    ) -> list[dict[str, Any]]:
        return [dict(c) for c in self.channels]

    def _add_channel(self, app_instance_arn: str, name: str, metadata: str) -> str:
        channel_arn = f"{app_instance_arn}/channel/ch-{len(self.channels) + 1}"
        self.channels.append(
            {"Name": name, "ChannelArn": channel_arn, "Metadata": metadata}
        )
        return channel_arn

    async def create_channel(
        self,
        app_instance_arn: str,
        name: str,
        metadata: ChannelMetadata,
        client_request_token: str,
        chime_bearer: str,
    ) -> str:
        self.create_channel_calls += 1
        self.channel_request_tokens.append(client_request_token)
        if self.conflict_on_create:
            if self.conflict_leaves_channel:
                self._add_channel(app_instance_arn, name, metadata.to_json())
            cause = ClientError(
                {"Error": {"Code": "ConflictException", "Message": "channel exists"}},
                "CreateChannel",
            )
            raise ChannelConflictError(str(cause)) from cause
        return self._add_channel(app_instance_arn, name, metadata.to_json())

    async def create_channel_membership(
        self,
        channel_arn: str,
        member_arn: str,
        chime_bearer: str,
        membership_type: ChannelMembershipType = ChannelMembershipType.DEFAULT,
    ) -> dict[str, Any]:
        membership = {
            "ChannelArn": channel_arn,
            "Member": {"Arn": member_arn, "Name": member_arn.rsplit("/", 1)[-1]},
        }
        self.memberships.append(
            {**membership, "Type": membership_type.value, "ChimeBearer": chime_bearer}
        )
        return membership

    async def send_channel_message(
        self,
        channel_arn: str,
        content: str,
        chime_bearer: str,
        client_request_token: str,
        persistence: MessagePersistence = MessagePersistence.NON_PERSISTENT,
        message_type: MessageType = MessageType.STANDARD,
    ) -> dict[str, Any]:
        message_id = f"msg-{len(self.messages) + 1}"
        self.messages.append(
            {
                "ChannelArn": channel_arn,
                "Content": content,
                "ChimeBearer": chime_bearer,
                "Persistence": persistence.value,
                "Type": message_type.value,
                "MessageId": message_id,
            }
        )
        return {"ChannelArn": channel_arn, "MessageId": message_id}


class FakeCredentialIssuer(ICredentialIssuer):
    """Returns a fixed short-lived credential and records each request."""

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []

    async def mint_scoped_credential(
        self, subject: str, ttl_seconds: int, resource_arns: list[str]
    ) -> ScopedCredential:
        self.calls.append(
            {"subject": subject, "ttl_seconds": ttl_seconds, "resource_arns": resource_arns}
        )
        return ScopedCredential(
            access_key_id="ASIATESTKEY",
            secret_access_key="temporary-secret",
            session_token="session-token",
            expiration=EXPIRATION,
            region=REGION,
        )


@pytest.fixture
def meeting_gateway() -> FakeMeetingGateway:
    return FakeMeetingGateway()


@pytest.fixture
def identity_gateway() -> FakeIdentityGateway:
    return FakeIdentityGateway()


@pytest.fixture
def messaging_gateway() -> FakeMessagingGateway:
    return FakeMessagingGateway()


@pytest.fixture
def credential_issuer() -> FakeCredentialIssuer:
    return FakeCredentialIssuer()


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def app_instance_arn() -> str:
    return APP_INSTANCE_ARN
