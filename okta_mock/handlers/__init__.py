"""
Authentication handlers for the Okta Mock Server.
"""

from .auth import extract_token, verify_api_token

__all__ = ["extract_token", "verify_api_token"]
