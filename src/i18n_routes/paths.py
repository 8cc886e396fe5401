"""
Locale-aware translation of canonical page paths.
"""

from __future__ import annotations

from i18n_routes.models import INDEX_KEY, PathLeaf, PathNode, PathTree

_EMPTY_TREE: PathTree = {}


def translate_segment(segment: str, tree: PathTree) -> str:
    """
    Translate a single path segment.

    A leaf yields its value, a node yields its index translation, anything
    else yields the segment unchanged.
    """
    entry = tree.get(segment)
    if isinstance(entry, PathLeaf):
        return entry.value
    if isinstance(entry, PathNode) and entry.index is not None:
        return entry.index
    return segment


def child_tree(segment: str, tree: PathTree) -> PathTree:
    """
    Return the dictionary scope for the children of a segment.

    A node's index translation stays reachable in its scope as the `index`
    segment.
    """
    entry = tree.get(segment)
    if isinstance(entry, PathNode):
        if entry.index is not None:
            return {INDEX_KEY: PathLeaf(entry.index), **entry.children}
        return entry.children
    return _EMPTY_TREE


def translate_path(path: str, tree: PathTree) -> str:
    """
    Translate a slash-separated canonical path segment by segment.

    Each segment is looked up in the scope of its parent segment, so nested
    pages can carry their own translations. Missing entries fall back to the
    untranslated segment.

    Args:
        path: Canonical path such as "dashboard/settings".
        tree: Path dictionary of the target locale.

    Returns:
        The localized path, e.g. "tableau-de-bord/parametres".
    """
    first, sep, rest = path.partition("/")
    if not sep:
        return translate_segment(first, tree)

    translated_first = translate_segment(first, tree)
    translated_rest = translate_path(rest, child_tree(first, tree))
    return f"{translated_first}/{translated_rest}"
