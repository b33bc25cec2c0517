"""Shared pytest fixtures and test helpers for folio tests."""

from __future__ import annotations

import re
from pathlib import Path

import pytest

from folio.domain.types import ContentKind
from folio.infrastructure.filesystem import MemorySource

BLOCK_SLUG = re.compile(r"^[a-z0-9][a-z0-9-]*-[0-9a-f]{8}$")

# ---------------------------------------------------------------------------
# Sample documents
# ---------------------------------------------------------------------------

PROJECT_MD = """---
title: Folio
description: A content pipeline
date: 2024-03-01
tags: [python, markdown]
status: 进行中
---
## Overview

Turns Markdown into records.
"""

ESSAY_MD = """---
title: On Walking
description: Notes from long walks
date: 2024-05-20
tags: [life]
---
## First steps

Walking clears the head.

## Further

你好世界
"""

POEM_MD = """---
title: Rain
date: 2023-09-01
---
line one
line two

line three
"""

RECORDS_MD = """---
title: Paprika
category: movie
date: 2024-01-01
director: Satoshi Kon
rating: 9
---
title: Perfect Blue
category: movie
date: 2023-05-05
director: Satoshi Kon
---
title: Spirited Away
category: movie
date: 2024-06-01
director: Hayao Miyazaki
rating: 10
"""

GAMES_MD = """---
title: Outer Wilds
category: game
date: 2022-11-11
developer: Mobius Digital
rating: 10
"""

TOP10_MOVIES_MD = """---
num: 2
name: Paprika
---
num: 1
name: Spirited Away
---
num: 3
name: Not In The Collection
"""

TOP10_GAMES_MD = """---
num: 1
name: Outer Wilds
---
num: 2
name: "   "
"""


def write_file(root: Path, relative: str, text: str) -> Path:
    """Write *text* under *root*, creating parent directories."""
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def content_root(tmp_path: Path) -> Path:
    """Temporary content directory with one document of every kind.

    Layout mirrors the default discovery patterns:
    ``projects/``, ``writing/<category>/``, ``records/`` and ``top10/``.
    """
    root = tmp_path / "content"
    write_file(root, "projects/folio.md", PROJECT_MD)
    write_file(root, "writing/essays/on-walking.md", ESSAY_MD)
    write_file(root, "writing/poetry/rain.md", POEM_MD)
    write_file(root, "records/movies.md", RECORDS_MD)
    write_file(root, "records/games.md", GAMES_MD)
    write_file(root, "top10/movies.md", TOP10_MOVIES_MD)
    write_file(root, "top10/games.md", TOP10_GAMES_MD)
    return root


@pytest.fixture
def memory_source() -> MemorySource:
    """In-memory source holding the same documents as ``content_root``."""
    return MemorySource(
        {
            ContentKind.PROJECT: {"projects/folio.md": PROJECT_MD},
            ContentKind.WRITING: {
                "writing/essays/on-walking.md": ESSAY_MD,
                "writing/poetry/rain.md": POEM_MD,
            },
            ContentKind.RECORD: {
                "records/games.md": GAMES_MD,
                "records/movies.md": RECORDS_MD,
            },
            ContentKind.TOP10_MOVIE: {"top10/movies.md": TOP10_MOVIES_MD},
            ContentKind.TOP10_GAME: {"top10/games.md": TOP10_GAMES_MD},
        }
    )
