"""Create Meeting Session Use Case"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable
from uuid import uuid4

import structlog

from src.application.ports.gateways import IMeetingGateway
from src.domain.chime.value_objects import AttendeeCapabilities

logger = structlog.get_logger()


class MeetingSessionError(Exception):
    """ミーティングセッション作成エラー"""

    pass


@dataclass
class CreateMeetingSessionInput:
    """ミーティングセッション入力DTO"""

    room: str
    meeting_id: str | None = None


@dataclass
class CreateMeetingSessionOutput:
    """ミーティングセッション出力DTO"""

    meeting: dict[str, Any]
    attendee: dict[str, Any]
    created: bool


class CreateMeetingSessionUseCase:
    """
    ミーティングセッション作成 ユースケース

    1. ミーティングを作成（meeting_id 指定時は既存を取得して再利用）
    2. 全メディア送受信可能な参加者を作成

    room のみ指定された場合は毎回新しいミーティングを作成する。
    """

    def __init__(
        self,
        meeting_gateway: IMeetingGateway,
        media_region: str,
        id_factory: Callable[[], str] = lambda: str(uuid4()),
    ):
        self._meetings = meeting_gateway
        self._media_region = media_region
        self._new_id = id_factory

    async def execute(
        self, input_data: CreateMeetingSessionInput
    ) -> CreateMeetingSessionOutput:
        """ユースケースを実行"""
        log = logger.bind(room=input_data.room, meeting_id=input_data.meeting_id)
        log.info("create_meeting_session_started")

        try:
            # 1. ミーティングを用意
            if input_data.meeting_id:
                meeting = await self._meetings.get_meeting(input_data.meeting_id)
                created = False
            else:
                meeting = await self._meetings.create_meeting(
                    external_meeting_id=input_data.room,
                    client_request_token=self._new_id(),
                    media_region=self._media_region,
                )
                created = True

            # 2. 参加者を作成
            attendee = await self._meetings.create_attendee(
                meeting_id=meeting["MeetingId"],
                external_user_id=self._new_id(),
                capabilities=AttendeeCapabilities.full_access(),
            )

            log.info(
                "create_meeting_session_completed",
                chime_meeting_id=meeting["MeetingId"],
                attendee_id=attendee.get("AttendeeId"),
                created=created,
            )

            return CreateMeetingSessionOutput(
                meeting=meeting,
                attendee=attendee,
                created=created,
            )

        except Exception as e:
            log.error("create_meeting_session_failed", error=str(e))
            raise MeetingSessionError(f"Failed to create meeting session: {e}") from e
