"""Collaborators the KDP client depends on.

Implementations live outside this package (token service, order
repository); the client only relies on these narrow contracts.
"""

from enum import StrEnum
from typing import Protocol

from src.models.order import TestObjectOrder


class JsonWebTokenKey(StrEnum):
    """Audience a JSON web token is issued for."""

    KDP = "KDP"


class TokenProvider(Protocol):
    async def get_jwt_token(self, key: JsonWebTokenKey) -> str:
        """Return an opaque token for ``key``."""
        ...


class TestObjectOrderLookup(Protocol):
    async def get_order_with_variants(self, test_object_order_id: str) -> TestObjectOrder:
        """Order including both variant version collections."""
        ...

    async def get_order_without_details(self, test_object_order_id: str) -> TestObjectOrder:
        """Order header fields only."""
        ...
