import random

from bingo.models import Card, FREE, GRID_SIZE

# Fixed, disjoint number range for each bingo column (B, I, N, G, O)
COLUMN_RANGES = [
    (1, 15),
    (16, 30),
    (31, 45),
    (46, 60),
    (61, 75),
]


def generate_card(rng=random) -> Card:
    """Build a random 5x5 card with a pre-marked FREE centre.

    Each column holds five distinct numbers from its own range, kept in the
    order they were sampled.
    """
    columns = []
    for low, high in COLUMN_RANGES:
        picked = []
        while len(picked) < GRID_SIZE:
            n = rng.randint(low, high)
            if n not in picked:
                picked.append(n)
        columns.append(picked)

    marked = [[False] * GRID_SIZE for _ in range(GRID_SIZE)]
    centre = GRID_SIZE // 2
    columns[centre][centre] = FREE
    marked[centre][centre] = True
    return Card(numbers=columns, marked=marked)
