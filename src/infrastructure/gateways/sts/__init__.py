"""STS Gateway implementations"""
from src.infrastructure.gateways.sts.sts_credential_gateway import StsCredentialGateway

__all__ = ["StsCredentialGateway"]
