"""Routing — URI templates, the endpoint registry, and URL resolution.

Endpoints are registered during setup and frozen into an immutable
lookup table before the first URL is built.
"""
