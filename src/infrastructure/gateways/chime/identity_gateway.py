"""Chime SDK Identity Gateway Implementation"""
from __future__ import annotations

from typing import Any

import boto3
from botocore.exceptions import ClientError
import structlog

from src.application.ports.gateways import IIdentityGateway

logger = structlog.get_logger()


class ChimeIdentityGateway(IIdentityGateway):
    """
    Chime SDK Identity Gateway

    App Instance User の作成を担当する。
    """

    def __init__(
        self,
        region: str,
        client: Any = None,
    ):
        self.region = region
        self._client = client or boto3.client("chime-sdk-identity", region_name=region)

    async def create_app_instance_user(
        self,
        app_instance_arn: str,
        user_id: str,
        name: str,
        client_request_token: str,
    ) -> str:
        """App Instance User を作成し ARN を返す"""
        log = logger.bind(app_instance_arn=app_instance_arn, user_id=user_id)
        log.info("create_app_instance_user_started")

        try:
            response = self._client.create_app_instance_user(
                AppInstanceArn=app_instance_arn,
                AppInstanceUserId=user_id,
                Name=name,
                ClientRequestToken=client_request_token,
            )
            user_arn = response["AppInstanceUserArn"]

            log.info("create_app_instance_user_completed", app_instance_user_arn=user_arn)
            return user_arn

        except ClientError as e:
            log.error("create_app_instance_user_failed", error=str(e))
            raise
