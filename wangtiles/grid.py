import logging

import numpy as np

from wangtiles.errors import ConstraintExhausted, InvalidArgument
from wangtiles.tiles import (
    ALL_CODES,
    EAST,
    SOUTH,
    WEST,
    TileCode,
    compatible_codes,
    edges_match,
)

log = logging.getLogger(__name__)


def uniform_chooser(seed=None, weights=None):
    """
    Build a choice oracle backed by a numpy Generator.

    `weights` optionally maps tile codes to relative weights; codes missing
    from it weigh 1.0. Candidates whose weights are all zero are picked
    uniformly.
    """
    rng = np.random.default_rng(seed)

    def choose(candidates):
        if weights is None:
            return candidates[rng.integers(len(candidates))]
        p = np.array([float(weights.get(int(c), 1.0)) for c in candidates])
        if (p < 0).any():
            raise InvalidArgument("tile weights must not be negative")
        total = p.sum()
        if total <= 0:
            return candidates[rng.integers(len(candidates))]
        return candidates[rng.choice(len(candidates), p=p / total)]

    return choose


def _intersect(candidates, allowed):
    allowed = set(allowed)
    return [c for c in candidates if c in allowed]


def _candidates(row, col, previous_row, current_row, tileset, tiles_w, wrap):
    candidates = list(tileset)
    if col > 0:
        candidates = _intersect(candidates, compatible_codes(current_row[col - 1], EAST))
    if row > 0:
        candidates = _intersect(candidates, compatible_codes(previous_row[col], SOUTH))
    # The first tile of the row stands in for the east neighbour of the last.
    if wrap and tiles_w > 1 and col == tiles_w - 1:
        candidates = _intersect(candidates, compatible_codes(current_row[0], WEST))
    return candidates


def _pick(choose, candidates):
    tile = choose(candidates)
    if tile not in candidates:
        raise InvalidArgument(f"chooser returned {tile!r}, not one of {candidates}")
    return TileCode(int(tile))


def generate_row(row, previous_row, choose, tileset, tiles_w, wrap=True, fallback=False):
    if tiles_w < 1:
        raise InvalidArgument(f"row must be at least 1 tile wide, got {tiles_w}")
    if row > 0 and len(previous_row) != tiles_w:
        raise InvalidArgument(
            f"previous row has {len(previous_row)} tiles, expected {tiles_w}"
        )
    current_row = ()
    for col in range(tiles_w):
        candidates = _candidates(
            row, col, previous_row, current_row, tileset, tiles_w, wrap
        )
        if not candidates:
            if not fallback:
                raise ConstraintExhausted(row, col)
            log.warning("no compatible tile at (%d, %d), reseeding", row, col)
            candidates = list(tileset)
        current_row = current_row + (_pick(choose, candidates),)
    return current_row


def generate(tiles_w, tiles_h, choose, tileset=ALL_CODES, wrap=True, fallback=False):
    """
    Grow a tiles_h x tiles_w grid of tile codes, row by row, left to right.

    Every tile is chosen by `choose` from the codes of `tileset` that match
    its west neighbour, its north neighbour and, with `wrap`, the first tile
    of its row when it is the last one. There is no backtracking: a cell with
    no candidate raises ConstraintExhausted unless `fallback` is set, in which
    case the cell is reseeded from the whole tileset.
    """
    if tiles_w < 1 or tiles_h < 1:
        raise InvalidArgument(f"grid must be at least 1x1, got {tiles_w}x{tiles_h}")
    tileset = tuple(sorted(set(TileCode(c) for c in tileset)))
    if not tileset:
        raise InvalidArgument("tileset is empty")

    grid = np.zeros((tiles_h, tiles_w), dtype=np.uint8)
    previous_row = ()
    for row in range(tiles_h):
        current_row = generate_row(
            row, previous_row, choose, tileset, tiles_w, wrap=wrap, fallback=fallback
        )
        grid[row] = current_row
        previous_row = current_row
    log.info("generated %dx%d grid", tiles_w, tiles_h)
    return grid


def mismatches(grid, wrap=False):
    """List ((row, col), edge, (row, col)) for every mismatching neighbour pair."""
    tiles_h, tiles_w = grid.shape
    res = []
    for row in range(tiles_h):
        for col in range(tiles_w):
            code = int(grid[row, col])
            if col + 1 < tiles_w and not edges_match(code, EAST, int(grid[row, col + 1])):
                res.append(((row, col), EAST, (row, col + 1)))
            if row + 1 < tiles_h and not edges_match(code, SOUTH, int(grid[row + 1, col])):
                res.append(((row, col), SOUTH, (row + 1, col)))
        if wrap and tiles_w > 1:
            last, first = int(grid[row, -1]), int(grid[row, 0])
            if not edges_match(last, EAST, first):
                res.append(((row, tiles_w - 1), EAST, (row, 0)))
    return res
