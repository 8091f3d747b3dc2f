"""
Boundary layer for external system integrations.

Handles all interactions with external systems (database, identity
service, notification functions, object storage).
"""
