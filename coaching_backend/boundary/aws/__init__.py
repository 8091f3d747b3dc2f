"""
AWS boundary modules.

Exports: S3MediaClient, STORAGE_ERRORS
"""

from .s3_client import STORAGE_ERRORS, S3MediaClient

__all__ = ["S3MediaClient", "STORAGE_ERRORS"]
