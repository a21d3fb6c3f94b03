"""Channel Metadata Value Object"""
from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum


class ChannelType(str, Enum):
    """チャンネル種別（Metadata に埋め込む）"""

    PUBLIC_STANDARD = "PUBLIC_STANDARD"


class ChannelMembershipType(str, Enum):
    """メンバーシップ種別"""

    DEFAULT = "DEFAULT"
    HIDDEN = "HIDDEN"


class MessagePersistence(str, Enum):
    """メッセージの永続化設定"""

    PERSISTENT = "PERSISTENT"
    NON_PERSISTENT = "NON_PERSISTENT"


class MessageType(str, Enum):
    """メッセージ種別"""

    STANDARD = "STANDARD"
    CONTROL = "CONTROL"


@dataclass(frozen=True)
class ChannelMetadata:
    """
    チャンネルメタデータ（値オブジェクト）

    CreateChannel の Metadata フィールドに JSON 文字列として保存される。
    ChannelType キーは常に一度だけ出力する。
    """

    channel_type: ChannelType = ChannelType.PUBLIC_STANDARD

    def to_json(self) -> str:
        return json.dumps({"ChannelType": self.channel_type.value})

    @classmethod
    def from_json(cls, raw: str | None) -> ChannelMetadata | None:
        """
        Metadata 文字列を解析

        不正な JSON や未知の種別の場合は None を返す。
        """
        if not raw:
            return None

        try:
            data = json.loads(raw)
        except (TypeError, ValueError):
            return None

        if not isinstance(data, dict):
            return None

        try:
            return cls(channel_type=ChannelType(data.get("ChannelType")))
        except ValueError:
            return None
