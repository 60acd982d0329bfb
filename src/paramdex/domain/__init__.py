"""Domain layer: field types, parsers, and the registry.

This layer depends only on stdlib, pydantic, and lark.
It must never import from services, commands, output, or config.
"""
