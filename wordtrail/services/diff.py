from typing import List, NamedTuple


class WordDiff(NamedTuple):
    added: List[str]
    removed: List[str]


def tokenize(text: str) -> List[str]:
    """Split on runs of whitespace. No case or punctuation folding."""
    return text.split() if text else []


def compute_diff(old_text: str, new_text: str) -> WordDiff:
    """
    Computes a word-set diff between two texts.

    added:   tokens of new_text that occur nowhere in old_text, in new_text order
             (duplicates kept)
    removed: tokens of old_text that occur nowhere in new_text, in old_text order

    Membership only, not positions: reordering words yields an empty diff.
    """
    old_words = tokenize(old_text)
    new_words = tokenize(new_text)

    old_set = set(old_words)
    new_set = set(new_words)

    added = [w for w in new_words if w not in old_set]
    removed = [w for w in old_words if w not in new_set]

    return WordDiff(added=added, removed=removed)
