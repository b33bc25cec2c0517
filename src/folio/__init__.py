"""folio — Markdown content pipeline for a personal site.

Turns a tree of Markdown files with YAML frontmatter into typed,
validated and enriched content records, cached for the lifetime of
the process.
"""

__version__ = "0.1.0"
