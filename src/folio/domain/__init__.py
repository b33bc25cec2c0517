"""Domain layer — content models, validation primitives, and pure helpers.

This layer depends only on stdlib, pydantic and ruamel.yaml.
It must never import from parsers, services, infrastructure, or config.
"""
