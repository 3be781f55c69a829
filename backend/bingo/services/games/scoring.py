from typing import Sequence


def has_bingo(marked: Sequence[Sequence[bool]]) -> bool:
    """True if any row, column or either diagonal of ``marked`` is complete."""
    size = len(marked)
    if any(all(row) for row in marked):
        return True
    if any(all(marked[r][c] for r in range(size)) for c in range(size)):
        return True
    if all(marked[i][i] for i in range(size)):
        return True
    return all(marked[i][size - 1 - i] for i in range(size))
