"""
Okta Mock Server

In-memory test double for a subset of the Okta Management API and the default
OAuth2/OIDC authorization server.
"""

__version__ = "1.0.0"
