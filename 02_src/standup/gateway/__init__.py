"""Messaging gateway module."""

from .gateway import GatewayError, IMessagingGateway, OutboxGateway

__all__ = ["GatewayError", "IMessagingGateway", "OutboxGateway"]
