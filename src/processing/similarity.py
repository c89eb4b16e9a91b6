from typing import AbstractSet, FrozenSet


def extract_tokens(text: str) -> FrozenSet[str]:
    """
    Distinct whitespace-delimited tokens of `text`, punctuation included.
    No case-folding or stemming.
    """
    return frozenset(text.split())


def jaccard_similarity(a: AbstractSet[str], b: AbstractSet[str]) -> float:
    """
    |a & b| / |a | b|, defined as 0.0 when both sets are empty.
    """
    intersection = len(a & b)
    union = len(a) + len(b) - intersection
    if union == 0:
        return 0.0
    return intersection / union
