"""
Domain layer for Guardpost.

Enumerations, exceptions, value objects and access policy tables.
Nothing here depends on persistence or HTTP concerns.
"""
