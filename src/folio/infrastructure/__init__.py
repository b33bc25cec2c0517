"""Infrastructure layer — Markdown rendering and content discovery."""
