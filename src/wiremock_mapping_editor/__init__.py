"""Client-side editor for WireMock stub mappings built from the request journal.

Run as `python -m wiremock_mapping_editor` (or the `wiremock-mapping-editor`
script); `logs`, `draft` and `save` cover the journal-to-mapping path.
"""

__all__ = []
