from typing import Iterator, Tuple

OFFSETS = [(-1, 0), (1, 0), (0, -1), (0, 1)]
DIAGONAL_OFFSETS = [(-1, -1), (-1, 1), (1, -1), (1, 1)]


def grid_neighbours(
    x: int, y: int, n: int, m: int, diagonal: bool = False
) -> Iterator[Tuple[int, int]]:
    """Yields the neighbours of (x, y) that lie inside an n x m grid."""
    offsets = OFFSETS + DIAGONAL_OFFSETS if diagonal else OFFSETS
    for dx, dy in offsets:
        nx = x + dx
        ny = y + dy
        if 0 <= nx < n and 0 <= ny < m:
            yield nx, ny
