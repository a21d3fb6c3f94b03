"""Application Ports (Interfaces)"""
from .gateways import (
    ChannelConflictError,
    CredentialIssueError,
    ICredentialIssuer,
    IIdentityGateway,
    IMeetingGateway,
    IMessagingGateway,
)

__all__ = [
    "ChannelConflictError",
    "CredentialIssueError",
    "ICredentialIssuer",
    "IIdentityGateway",
    "IMeetingGateway",
    "IMessagingGateway",
]
