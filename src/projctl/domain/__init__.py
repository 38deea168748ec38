"""Domain layer — field schema, request pairing, matching, and resolution.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
