"""Pydantic models for journal entries, stub mappings and drafts."""
