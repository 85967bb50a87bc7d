"""
Middleware layer for Guardpost.

Request processing concerns shared by every route: correlation IDs,
security headers, request size and time limits, rate limiting.
"""
