"""Model catalog filtering."""

from __future__ import annotations

from collections.abc import Iterable

from llm_procedures.types import ModelDescription

CHAT_FAMILY_MARKER = "gpt"


def filter_and_sort(models: Iterable[ModelDescription]) -> list[ModelDescription]:
    """Keep chat models and order them newest family first.

    Order: first five characters of the id descending, then fewer
    ``-``-separated segments first, then id ascending.
    """
    llms = [m for m in models if CHAT_FAMILY_MARKER in m.id]
    # stable sorts, least significant key first
    llms.sort(key=lambda m: (len(m.id.split("-")), m.id))
    llms.sort(key=lambda m: m.id[:5], reverse=True)
    return llms
