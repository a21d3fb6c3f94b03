"""Messaging Use Cases"""
from .create_messaging_session import (
    CreateMessagingSessionInput,
    CreateMessagingSessionOutput,
    CreateMessagingSessionUseCase,
    MessagingSessionError,
)
from .send_channel_message import (
    MessageSendError,
    SendChannelMessageInput,
    SendChannelMessageOutput,
    SendChannelMessageUseCase,
)

__all__ = [
    "CreateMessagingSessionInput",
    "CreateMessagingSessionOutput",
    "CreateMessagingSessionUseCase",
    "MessagingSessionError",
    "MessageSendError",
    "SendChannelMessageInput",
    "SendChannelMessageOutput",
    "SendChannelMessageUseCase",
]
