"""Match predicates for ``search``: case-insensitive label and synonym lookup."""

from __future__ import annotations


def _contains(text: object, folded_query: str) -> bool:
    return isinstance(text, str) and folded_query in text.casefold()


def match_label(item: object, query: str) -> bool:
    """Return whether ``query`` is a substring of the item's name.

    A blank query matches nothing.
    """
    if not query:
        return False
    return _contains(getattr(item, "name", None), query.casefold())


def match_label_or_synonyms(item: object, query: str) -> bool:
    """Return whether ``query`` occurs in the item's name or any alternate label."""
    if not query:
        return False
    folded = query.casefold()
    if _contains(getattr(item, "name", None), folded):
        return True
    for label in getattr(item, "alt_labels", None) or ():
        if _contains(label, folded):
            return True
    return False
