"""Error Handler Middleware"""
from __future__ import annotations

from typing import Any

import structlog
from fastapi import Request
from fastapi.responses import JSONResponse

from src.application.ports.gateways import CredentialIssueError
from src.application.use_cases.meeting import MeetingSessionError
from src.application.use_cases.messaging import MessageSendError, MessagingSessionError
from src.infrastructure.config import ConfigurationError
from src.infrastructure.gateways.chime.response import error_code

logger = structlog.get_logger()


def _provider_error_code(exc: Exception) -> str | None:
    """原因チェーンからプロバイダ（botocore）のエラーコードを探す"""
    cause: BaseException | None = exc
    while cause is not None:
        code = error_code(cause)  # type: ignore[arg-type]
        if code:
            return code
        cause = cause.__cause__
    return None


def _error_response(
    status_code: int, error: str, message: str, code: str, exc: Exception
) -> JSONResponse:
    content: dict[str, Any] = {
        "error": error,
        "message": message,
        "code": code,
    }
    provider_code = _provider_error_code(exc)
    if provider_code:
        content["provider_error_code"] = provider_code
    return JSONResponse(status_code=status_code, content=content)


async def configuration_error_handler(
    request: Request, exc: ConfigurationError
) -> JSONResponse:
    """設定不備エラーハンドラ"""
    logger.error("configuration_error", error=str(exc))
    return _error_response(
        500, "ConfigurationError", str(exc), "CONFIGURATION_ERROR", exc
    )


async def meeting_session_error_handler(
    request: Request, exc: MeetingSessionError
) -> JSONResponse:
    """ミーティングセッションエラーハンドラ"""
    logger.error("meeting_session_error", error=str(exc))
    return _error_response(
        500, "MeetingSessionError", str(exc), "MEETING_SESSION_FAILED", exc
    )


async def messaging_session_error_handler(
    request: Request, exc: MessagingSessionError
) -> JSONResponse:
    """メッセージングセッションエラーハンドラ"""
    logger.error("messaging_session_error", error=str(exc))
    return _error_response(
        500, "MessagingSessionError", str(exc), "MESSAGING_SESSION_FAILED", exc
    )


async def message_send_error_handler(
    request: Request, exc: MessageSendError
) -> JSONResponse:
    """メッセージ送信エラーハンドラ"""
    logger.error("message_send_error", error=str(exc))
    return _error_response(500, "MessageSendError", str(exc), "MESSAGE_SEND_FAILED", exc)


async def credential_issue_error_handler(
    request: Request, exc: CredentialIssueError
) -> JSONResponse:
    """認証情報発行エラーハンドラ"""
    logger.error("credential_issue_error", error=str(exc))
    return _error_response(
        500, "CredentialIssueError", str(exc), "CREDENTIAL_ISSUE_FAILED", exc
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """汎用エラーハンドラ"""
    logger.error("unhandled_error", error=str(exc), exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error": "InternalServerError",
            "message": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        },
    )


# エラーハンドラのマッピング
error_handlers = {
    ConfigurationError: configuration_error_handler,
    MeetingSessionError: meeting_session_error_handler,
    MessagingSessionError: messaging_session_error_handler,
    MessageSendError: message_send_error_handler,
    CredentialIssueError: credential_issue_error_handler,
    Exception: generic_error_handler,
}
