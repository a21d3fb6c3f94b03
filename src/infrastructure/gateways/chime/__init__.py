"""Chime SDK Gateway implementations"""
from src.infrastructure.gateways.chime.identity_gateway import ChimeIdentityGateway
from src.infrastructure.gateways.chime.meetings_gateway import ChimeMeetingsGateway
from src.infrastructure.gateways.chime.messaging_gateway import ChimeMessagingGateway

__all__ = [
    "ChimeIdentityGateway",
    "ChimeMeetingsGateway",
    "ChimeMessagingGateway",
]
