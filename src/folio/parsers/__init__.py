"""Parser layer — the shared parse pipeline and its per-type specs.

Parsers may import from domain and infrastructure.
They must never import from services or config.
"""
