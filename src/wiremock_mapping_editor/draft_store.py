"""File hand-off for editor text used by the command line.

The CLI has no text area: drafts and mapping documents are written to a file,
edited with any editor, and read back for `save`. `store_text` uses an atomic
write (temporary file then rename) so an interrupted write never leaves a
half-written document behind for the next `save` to pick up.
"""
from __future__ import annotations

import os
from typing import Optional


def load_text(path: str) -> Optional[str]:
    """Read an editor document, returning None when the file does not exist.

    Args:
        path: The path to the document.

    Returns:
        The file contents, or None if there is no such file.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except FileNotFoundError:
        return None


def store_text(path: str, text: str) -> None:
    """Atomically write an editor document.

    Args:
        path: Destination path; parent directories are created as needed.
        text: Document text. A trailing newline is added if missing.
    """
    tmp_path = f"{path}.tmp"
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(tmp_path, "w", encoding="utf-8") as f:
        f.write(text if text.endswith("\n") else f"{text}\n")
    os.replace(tmp_path, path)


__all__ = ["load_text", "store_text"]
