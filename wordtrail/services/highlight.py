import re
from typing import Iterable, List

# whitespace runs are kept as their own pieces
_SPLIT = re.compile(r"(\s+)")
_EDGE_PUNCT = re.compile(r"^\W+|\W+$")


def _key(token: str) -> str:
    return _EDGE_PUNCT.sub("", token).lower()


def highlight_text(text: str, added: Iterable[str], removed: Iterable[str]) -> List[dict]:
    """
    Marks up a version's text for preview.
    Returns a list of {type, content} objects the frontend uses
    to highlight words in green/red. Whitespace is preserved verbatim.

    A token is compared with its leading/trailing punctuation stripped and
    lower-cased; the added/removed words are only lower-cased. So "Hello," is
    highlighted when "Hello" was added, but not when "Hello," was. An added
    match wins over a removed one.
    """
    if not text:
        return []

    added_keys = {w.lower() for w in added}
    removed_keys = {w.lower() for w in removed}

    result = []
    for piece in _SPLIT.split(text):
        if not piece:
            continue
        if piece.isspace():
            kind = "unchanged"
        else:
            key = _key(piece)
            if key in added_keys:
                kind = "added"
            elif key in removed_keys:
                kind = "removed"
            else:
                kind = "unchanged"
        result.append({"type": kind, "content": piece})

    return result


def excerpt(text: str, limit: int = 140) -> str:
    """First ``limit`` characters of ``text``, with an ellipsis when cut."""
    if len(text) <= limit:
        return text
    return text[:limit] + "…"
