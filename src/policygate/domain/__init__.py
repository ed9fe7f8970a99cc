"""Domain layer — user identities, flags, and restriction keys.

This layer depends only on stdlib and pydantic.
It must never import from gateway, backends, plugins, commands, or config.
"""
