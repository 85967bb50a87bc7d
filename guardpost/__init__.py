"""Guardpost: multi-tenant facility security operations backend."""

__version__ = "1.0.0"
