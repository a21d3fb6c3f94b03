"""Chime SDK Meetings Gateway Implementation"""
from __future__ import annotations

from typing import Any

import boto3
from botocore.exceptions import ClientError
import structlog

from src.application.ports.gateways import IMeetingGateway
from src.domain.chime.value_objects import AttendeeCapabilities

logger = structlog.get_logger()


class ChimeMeetingsGateway(IMeetingGateway):
    """
    Chime SDK Meetings Gateway

    Amazon Chime SDK Meetings API を使用したミーティング・参加者管理。
    """

    def __init__(
        self,
        region: str,
        client: Any = None,
    ):
        self.region = region
        self._client = client or boto3.client("chime-sdk-meetings", region_name=region)

    async def create_meeting(
        self,
        external_meeting_id: str,
        client_request_token: str,
        media_region: str,
    ) -> dict[str, Any]:
        """
        ミーティングを作成

        Args:
            external_meeting_id: 外部ミーティングID（ルームID）
            client_request_token: 冪等トークン
            media_region: メディアリージョン

        Returns:
            dict: Meeting
        """
        log = logger.bind(external_meeting_id=external_meeting_id)
        log.info("create_meeting_started", media_region=media_region)

        try:
            response = self._client.create_meeting(
                ClientRequestToken=client_request_token,
                MediaRegion=media_region,
                ExternalMeetingId=external_meeting_id,
            )
            meeting = response["Meeting"]

            log.info("create_meeting_completed", meeting_id=meeting.get("MeetingId"))
            return meeting

        except ClientError as e:
            log.error("create_meeting_failed", error=str(e))
            raise

    async def get_meeting(self, meeting_id: str) -> dict[str, Any]:
        """
        ミーティングを取得

        Args:
            meeting_id: Chime のミーティングID

        Returns:
            dict: Meeting
        """
        log = logger.bind(meeting_id=meeting_id)
        log.info("get_meeting_started")

        try:
            response = self._client.get_meeting(MeetingId=meeting_id)

            log.info("get_meeting_completed")
            return response["Meeting"]

        except ClientError as e:
            log.error("get_meeting_failed", error=str(e))
            raise

    async def create_attendee(
        self,
        meeting_id: str,
        external_user_id: str,
        capabilities: AttendeeCapabilities,
    ) -> dict[str, Any]:
        """
        参加者を作成

        Args:
            meeting_id: Chime のミーティングID
            external_user_id: 外部ユーザーID
            capabilities: メディア能力

        Returns:
            dict: Attendee
        """
        log = logger.bind(meeting_id=meeting_id, external_user_id=external_user_id)
        log.info("create_attendee_started")

        try:
            response = self._client.create_attendee(
                MeetingId=meeting_id,
                ExternalUserId=external_user_id,
                Capabilities=capabilities.to_dict(),
            )
            attendee = response["Attendee"]

            log.info("create_attendee_completed", attendee_id=attendee.get("AttendeeId"))
            return attendee

        except ClientError as e:
            log.error("create_attendee_failed", error=str(e))
            raise
