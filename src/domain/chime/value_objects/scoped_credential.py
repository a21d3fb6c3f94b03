"""Scoped Credential Value Object"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class ScopedCredential:
    """
    短期・スコープ限定の認証情報（値オブジェクト）

    クライアントがメッセージングセッションへ接続するために発行する。
    長期のアカウントキーは決してこの形で返さない。
    """

    access_key_id: str
    secret_access_key: str
    session_token: str
    expiration: datetime
    region: str

    def __post_init__(self) -> None:
        """バリデーション"""
        if not self.access_key_id or not self.secret_access_key:
            raise ValueError("Credential keys must not be empty")
        if not self.session_token:
            raise ValueError("Scoped credential requires a session token")

    def __repr__(self) -> str:
        # シークレットはログに出さない
        return (
            f"ScopedCredential(access_key_id={self.access_key_id!r}, "
            f"expiration={self.expiration.isoformat()}, region={self.region!r})"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "region": self.region,
            "accessKeyId": self.access_key_id,
            "secretAccessKey": self.secret_access_key,
            "sessionToken": self.session_token,
            "expiration": self.expiration.isoformat(),
        }
