"""Attendee Capabilities Value Object"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class MediaCapability(str, Enum):
    """メディア送受信能力"""

    SEND_RECEIVE = "SendReceive"
    SEND = "Send"
    RECEIVE = "Receive"
    NONE = "None"


@dataclass(frozen=True)
class AttendeeCapabilities:
    """
    参加者のメディア能力（値オブジェクト）

    Chime SDK の CreateAttendee に渡す Capabilities を表現する。
    デフォルトは音声・映像・コンテンツ共有すべて送受信可能。
    """

    audio: MediaCapability = MediaCapability.SEND_RECEIVE
    video: MediaCapability = MediaCapability.SEND_RECEIVE
    content: MediaCapability = MediaCapability.SEND_RECEIVE

    def __post_init__(self) -> None:
        """バリデーション"""
        for name in ("audio", "video", "content"):
            value = getattr(self, name)
            if not isinstance(value, MediaCapability):
                # 文字列で渡された場合も許容する
                object.__setattr__(self, name, MediaCapability(value))

    @classmethod
    def full_access(cls) -> AttendeeCapabilities:
        """すべてのメディアを送受信可能な能力"""
        return cls()

    def to_dict(self) -> dict[str, str]:
        return {
            "Audio": self.audio.value,
            "Video": self.video.value,
            "Content": self.content.value,
        }
