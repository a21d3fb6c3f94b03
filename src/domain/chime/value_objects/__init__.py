"""Chime Value Objects"""
from .attendee_capabilities import AttendeeCapabilities, MediaCapability
from .channel_metadata import (
    ChannelMembershipType,
    ChannelMetadata,
    ChannelType,
    MessagePersistence,
    MessageType,
)
from .scoped_credential import ScopedCredential

__all__ = [
    "AttendeeCapabilities",
    "MediaCapability",
    "ChannelMembershipType",
    "ChannelMetadata",
    "ChannelType",
    "MessagePersistence",
    "MessageType",
    "ScopedCredential",
]
