"""Service layer — loading, aggregation and caching of parsed content.

Services may import from domain, infrastructure and parsers.
"""
