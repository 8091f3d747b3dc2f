"""
Identity boundary.

Exports: IdentityClient, StubIdentityClient, create_identity_client
"""

from .identity_client import (
    AuthListener,
    IdentityClient,
    StubIdentityClient,
    create_identity_client,
)

__all__ = [
    "AuthListener",
    "IdentityClient",
    "StubIdentityClient",
    "create_identity_client",
]
