from typing import MutableSequence


def next_permutation(seq: MutableSequence) -> bool:
    """Rearranges ``seq`` into the next lexicographic permutation.

    Returns False and leaves ``seq`` sorted ascending if it already was the
    last permutation.
    """
    i = len(seq) - 2
    while i >= 0 and not seq[i] < seq[i + 1]:
        i -= 1
    if i < 0:
        seq.reverse()
        return False
    # seq[i + 1:] is non-increasing, find its rightmost element above seq[i]
    j = len(seq) - 1
    while not seq[i] < seq[j]:
        j -= 1
    seq[i], seq[j] = seq[j], seq[i]
    seq[i + 1 :] = seq[i + 1 :][::-1]
    return True
