"""Pure helpers for journal entries and draft mappings.

Everything in this package is deterministic and free of network I/O; the
stateful pieces (admin API client, log view, mapping workflow) live one level
up and call into these helpers.

Modules:
    time_utils: timestamp lookup chain and display formatting
    id_utils: stable selection keys for journal entries
    synthesizer: draft stub mapping from a captured request
    query_filter: case-insensitive free-text entry filter

Design Invariants:
    - No network calls
    - Inputs are never mutated
    - Every function is total over arbitrary journal shapes
"""
from __future__ import annotations

from . import id_utils as id_utils  # noqa: F401
from . import time_utils as time_utils  # noqa: F401

__all__ = ["time_utils", "id_utils"]
