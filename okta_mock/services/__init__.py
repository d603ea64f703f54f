"""
Okta Mock Server Services

In-memory resource storage and OAuth2 token issuance.
"""

from .resource_store import MockDataStore, ResourceCollection
from .token_issuer import TokenIssuer

__all__ = ["MockDataStore", "ResourceCollection", "TokenIssuer"]
