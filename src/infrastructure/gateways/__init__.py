"""Infrastructure Gateways"""
from .chime import ChimeIdentityGateway, ChimeMeetingsGateway, ChimeMessagingGateway
from .sts import StsCredentialGateway

__all__ = [
    "ChimeIdentityGateway",
    "ChimeMeetingsGateway",
    "ChimeMessagingGateway",
    "StsCredentialGateway",
]
