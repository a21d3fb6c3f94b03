"""Chime SDK response helpers"""
from __future__ import annotations

from typing import Any


def strip_response_metadata(response: dict[str, Any]) -> dict[str, Any]:
    """boto3 レスポンスから ResponseMetadata を除去"""
    return {k: v for k, v in response.items() if k != "ResponseMetadata"}


def error_code(error: Exception) -> str | None:
    """botocore ClientError のエラーコードを取得"""
    response = getattr(error, "response", None)
    if not isinstance(response, dict):
        return None
    return response.get("Error", {}).get("Code")
