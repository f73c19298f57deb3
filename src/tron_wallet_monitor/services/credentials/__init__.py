"""Credential services."""

from tron_wallet_monitor.services.credentials.key_allocator import ApiKeyAllocator

__all__ = ["ApiKeyAllocator"]
