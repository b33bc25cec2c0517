"""Slug derivation for single-file and multi-record content.

Two slug strategies:
- File-based (projects, writing): the file name without ``.md``.
- Block-hash (records, top-10 lists): ``{category}-{8 hex chars}`` from a
  32-bit rolling hash over the block text plus its position in the file.

INVARIANT: Slugs are unique within one content type. Byte-identical
blocks at different positions of a file still get distinct slugs because
the block index is part of the hash input.
"""

from __future__ import annotations

_UINT32 = 0xFFFFFFFF


def extract_slug(path: str) -> str:
    """Return the file name of *path* without directories and ``.md``.

    Examples:
        >>> extract_slug("content/projects/my-project.md")
        'my-project'
        >>> extract_slug("notes.md")
        'notes'
    """
    name = path.replace("\\", "/").rsplit("/", 1)[-1]
    if name.endswith(".md"):
        name = name[: -len(".md")]
    return name


def rolling_hash(text: str) -> int:
    """Compute ``h = h * 31 + ord(ch)`` wrapped to a signed 32-bit integer."""
    h = 0
    for ch in text:
        h = (h * 31 + ord(ch)) & _UINT32
    if h >= 0x80000000:
        h -= 0x100000000
    return h


def block_hash(text: str) -> str:
    """Render the absolute rolling hash of *text* as 8 lowercase hex digits."""
    return f"{abs(rolling_hash(text)):08x}"


def block_slug(category: str, block: str, index: int) -> str:
    """Generate the slug for the *index*-th block of a multi-record file."""
    return f"{category}-{block_hash(block + str(index))}"
