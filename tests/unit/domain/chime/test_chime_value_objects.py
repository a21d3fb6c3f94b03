"""Chime Value Object Unit Tests"""
import json
from datetime import datetime, timedelta, timezone

import pytest

from src.domain.chime.value_objects import (
    AttendeeCapabilities,
    ChannelMetadata,
    ChannelType,
    MediaCapability,
    ScopedCredential,
)


class TestAttendeeCapabilities:
    """AttendeeCapabilities 値オブジェクトのテスト"""

    def test_default_is_send_receive_for_all_media(self):
        """正常: デフォルトは音声・映像・コンテンツすべて SendReceive"""
        capabilities = AttendeeCapabilities()

        assert capabilities.to_dict() == {
            "Audio": "SendReceive",
            "Video": "SendReceive",
            "Content": "SendReceive",
        }

    def test_full_access_factory(self):
        """正常: full_access はデフォルトと等価"""
        assert AttendeeCapabilities.full_access() == AttendeeCapabilities()

    def test_accepts_string_values(self):
        """正常: 文字列でも指定できる"""
        capabilities = AttendeeCapabilities(audio="Receive", video="None")

        assert capabilities.audio == MediaCapability.RECEIVE
        assert capabilities.video == MediaCapability.NONE
        assert capabilities.to_dict()["Content"] == "SendReceive"

    def test_invalid_capability(self):
        """異常: 未知の能力"""
        with pytest.raises(ValueError):
            AttendeeCapabilities(audio="Broadcast")


class TestChannelMetadata:
    """ChannelMetadata 値オブジェクトのテスト"""

    def test_public_standard_encoded_exactly_once(self):
        """正常: ChannelType は一度だけ出力され JSON として解析できる"""
        raw = ChannelMetadata().to_json()

        assert raw.count("ChannelType") == 1
        assert raw.count("PUBLIC_STANDARD") == 1
        assert json.loads(raw) == {"ChannelType": "PUBLIC_STANDARD"}

    def test_parse_round_trip(self):
        """正常: 出力したメタデータを解析できる"""
        parsed = ChannelMetadata.from_json(ChannelMetadata().to_json())

        assert parsed is not None
        assert parsed.channel_type == ChannelType.PUBLIC_STANDARD

    @pytest.mark.parametrize(
        "raw",
        [None, "", "not json", "[]", '{"ChannelType": "PRIVATE_SECRET"}', "{}"],
    )
    def test_parse_invalid_returns_none(self, raw):
        """異常: 不正なメタデータは None"""
        assert ChannelMetadata.from_json(raw) is None


class TestScopedCredential:
    """ScopedCredential 値オブジェクトのテスト"""

    @pytest.fixture
    def credential(self, fixed_now) -> ScopedCredential:
        return ScopedCredential(
            access_key_id="ASIAEXAMPLE",
            secret_access_key="secret",
            session_token="token",
            expiration=fixed_now + timedelta(minutes=15),
            region="us-east-1",
        )

    def test_to_dict_uses_client_field_names(self, credential: ScopedCredential):
        """正常: クライアント向けのキー名で出力"""
        data = credential.to_dict()

        assert data["accessKeyId"] == "ASIAEXAMPLE"
        assert data["secretAccessKey"] == "secret"
        assert data["sessionToken"] == "token"
        assert data["region"] == "us-east-1"
        assert datetime.fromisoformat(data["expiration"]) == credential.expiration

    def test_repr_hides_secrets(self, credential: ScopedCredential):
        """正常: repr にシークレットを含めない"""
        text = repr(credential)

        assert "secret" not in text
        assert "token" not in text
        assert "ASIAEXAMPLE" in text

    def test_session_token_required(self):
        """異常: セッショントークンのない認証情報は作れない"""
        with pytest.raises(ValueError) as exc_info:
            ScopedCredential(
                access_key_id="AKIALONGLIVED",
                secret_access_key="secret",
                session_token="",
                expiration=datetime.now(timezone.utc),
                region="us-east-1",
            )

        assert "session token" in str(exc_info.value)
