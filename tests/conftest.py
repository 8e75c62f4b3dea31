"""Pytest configuration and fixtures for vlt tests."""

from pathlib import Path

import pytest

from vlt.runtime import build_runtime

SAMPLE_NOTES = {
    "Project Alpha.md": """---
aliases:
  - PA
tags:
  - project
---

# Project Alpha

Links to [[Meeting Notes#Agenda|agenda]] and [[Missing Note]].
#work
""",
    "Meeting Notes.md": """# Meeting Notes

See [[project alpha]] and ![[Diagram]].

```
[[Ghost]]
```
""",
    "Diagram.md": "A diagram.\n",
    "projects/Plan.md": """---
aliases: PM
tags: project/planning
---

[Alpha](../Project Alpha.md) and [[Project Alpha]], again [[Project Alpha|here]].
Also [[projects/Roadmap]].
""",
    "Lonely.md": "Nobody links here %% [[Lonely]] %%\n",
    ".obsidian/workspace.md": "[[Project Alpha]] [[Hidden Target]]\n",
    ".trash/Deleted.md": "[[Project Alpha]] [[Trashed Target]]\n",
}


def write_notes(root: Path, notes: dict[str, str]) -> None:
    """Create ``notes`` (vault-relative path -> content) under ``root``."""
    for rel, content in notes.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


@pytest.fixture
def temp_vault(tmp_path):
    """Create a temporary vault directory with sample notes.

    Returns:
        Path to the temporary vault root.
    """
    vault = tmp_path / "vault"
    vault.mkdir()
    write_notes(vault, SAMPLE_NOTES)
    return vault


@pytest.fixture
def runtime(temp_vault):
    """Fully wired components for the sample vault."""
    return build_runtime(vault_path=temp_vault)
