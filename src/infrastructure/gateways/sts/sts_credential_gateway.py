"""STS Credential Gateway Implementation"""
from __future__ import annotations

import json
import re
from typing import Any

import boto3
from botocore.exceptions import ClientError
import structlog

from src.application.ports.gateways import CredentialIssueError, ICredentialIssuer
from src.domain.chime.value_objects import ScopedCredential

logger = structlog.get_logger()

_SESSION_NAME_INVALID = re.compile(r"[^\w+=,.@-]")


class StsCredentialGateway(ICredentialIssuer):
    """
    STS Credential Gateway

    メッセージングクライアント向けの短期認証情報を発行する。

    - role_arn 指定時: AssumeRole
    - 未指定時: GetFederationToken（IAM ユーザーの認証情報で実行）

    どちらもセッションポリシーで対象ユーザー・チャンネルに権限を限定する。
    """

    # STS の制限
    MIN_DURATION_SECONDS = 900
    MAX_ASSUME_ROLE_DURATION_SECONDS = 3600
    MAX_FEDERATION_DURATION_SECONDS = 43200
    MAX_ROLE_SESSION_NAME = 64
    MAX_FEDERATION_NAME = 32

    # チャンネル・ユーザー ARN に対して許可する操作
    SCOPED_ACTIONS = [
        "chime:Connect",
        "chime:DescribeChannel",
        "chime:GetChannelMessage",
        "chime:ListChannelMessages",
        "chime:SendChannelMessage",
    ]

    def __init__(
        self,
        region: str,
        role_arn: str = "",
        client: Any = None,
    ):
        self.region = region
        self.role_arn = role_arn
        self._client = client or boto3.client("sts", region_name=region)

    async def mint_scoped_credential(
        self,
        subject: str,
        ttl_seconds: int,
        resource_arns: list[str],
    ) -> ScopedCredential:
        """
        スコープ限定の認証情報を発行

        Args:
            subject: セッション名に使う主体（App Instance User ID）
            ttl_seconds: 有効期間（秒）。STS の上下限に丸める
            resource_arns: 権限を与える ARN（ユーザー・チャンネル）

        Returns:
            ScopedCredential: 発行した認証情報
        """
        policy = json.dumps(self.build_session_policy(resource_arns))
        log = logger.bind(subject=subject, mode="assume_role" if self.role_arn else "federation")
        log.info("mint_scoped_credential_started")

        try:
            if self.role_arn:
                duration = self._clamp(ttl_seconds, self.MAX_ASSUME_ROLE_DURATION_SECONDS)
                response = self._client.assume_role(
                    RoleArn=self.role_arn,
                    RoleSessionName=session_name(subject, self.MAX_ROLE_SESSION_NAME),
                    DurationSeconds=duration,
                    Policy=policy,
                )
            else:
                duration = self._clamp(ttl_seconds, self.MAX_FEDERATION_DURATION_SECONDS)
                response = self._client.get_federation_token(
                    Name=session_name(subject, self.MAX_FEDERATION_NAME),
                    DurationSeconds=duration,
                    Policy=policy,
                )

            credentials = response["Credentials"]
            credential = ScopedCredential(
                access_key_id=credentials["AccessKeyId"],
                secret_access_key=credentials["SecretAccessKey"],
                session_token=credentials["SessionToken"],
                expiration=credentials["Expiration"],
                region=self.region,
            )

            log.info(
                "mint_scoped_credential_completed",
                duration_seconds=duration,
                expiration=credential.expiration.isoformat(),
            )
            return credential

        except (ClientError, KeyError, ValueError) as e:
            log.error("mint_scoped_credential_failed", error=str(e))
            raise CredentialIssueError(f"Failed to issue scoped credential: {e}") from e

    def build_session_policy(self, resource_arns: list[str]) -> dict[str, Any]:
        """セッションポリシーを構築"""
        # チャンネル配下のメッセージ ARN も対象にする
        resources = []
        for arn in resource_arns:
            resources.append(arn)
            if ":channel/" in arn:
                resources.append(f"{arn}/*")

        return {
            "Version": "2012-10-17",
            "Statement": [
                {
                    "Effect": "Allow",
                    "Action": ["chime:GetMessagingSessionEndpoint"],
                    "Resource": "*",
                },
                {
                    "Effect": "Allow",
                    "Action": self.SCOPED_ACTIONS,
                    "Resource": resources,
                },
            ],
        }

    def _clamp(self, ttl_seconds: int, maximum: int) -> int:
        return max(self.MIN_DURATION_SECONDS, min(ttl_seconds, maximum))


def session_name(subject: str, limit: int) -> str:
    """STS のセッション名制約（[\\w+=,.@-], 2〜limit 文字）に合わせる"""
    name = _SESSION_NAME_INVALID.sub("-", subject)
    if len(name) > limit:
        name = name.replace("-", "")
    name = name[:limit]
    if len(name) < 2:
        name = name.ljust(2, "0")
    return name
