import logging

import numpy as np

from wangtiles.errors import InvalidArgument
from wangtiles.tiles import EAST, EDGES, NORTH, SOUTH, WEST, TileCode

log = logging.getLogger(__name__)

FOREGROUND = (0x00, 0x0A, 0x00)
BACKGROUND = (0xFF, 0xFF, 0xFF)


# u runs along x, v along y (downwards). Each region is the closed triangle
# between the tile centre and one edge; numpy arrays and floats both work.
def _north(u, v):
    return (u >= v) & (u <= 1.0 - v)


def _east(u, v):
    return (v <= u) & (u >= 1.0 - v)


def _south(u, v):
    return (v >= u) & (v >= 1.0 - u)


def _west(u, v):
    return (v >= u) & (v <= 1.0 - u)


REGIONS = {NORTH: _north, EAST: _east, SOUTH: _south, WEST: _west}


def in_foreground(code, u, v):
    code = TileCode(code)
    res = np.zeros(np.broadcast(u, v).shape, dtype=bool)
    for edge in EDGES:
        if code.has(edge):
            res |= REGIONS[edge](u, v)
    return res


def color_at(code, u, v, foreground=FOREGROUND, background=BACKGROUND):
    return foreground if bool(in_foreground(code, u, v)) else background


def tile_mask(code, cell_w, cell_h):
    """Foreground mask of one raster block, shaped (cell_h, cell_w)."""
    if cell_w < 1 or cell_h < 1:
        raise InvalidArgument(f"raster block must be at least 1x1, got {cell_w}x{cell_h}")
    u = np.arange(cell_w, dtype=np.float64) / cell_w
    v = np.arange(cell_h, dtype=np.float64) / cell_h
    return in_foreground(code, u[np.newaxis, :], v[:, np.newaxis])


def pack_rgb(colour):
    r, g, b = check_colour(colour)
    return (r << 16) | (g << 8) | b


def unpack_rgb(pixels):
    """Split packed 0xRRGGBB values into a (..., 3) uint8 array."""
    pixels = np.asarray(pixels, dtype=np.uint32)
    return np.stack(
        [(pixels >> 16) & 0xFF, (pixels >> 8) & 0xFF, pixels & 0xFF], axis=-1
    ).astype(np.uint8)


def check_colour(colour):
    colour = tuple(int(c) for c in colour)
    if len(colour) != 3 or not all(0 <= c <= 255 for c in colour):
        raise InvalidArgument(f"not an RGB colour: {colour!r}")
    return colour


# https://stackoverflow.com/a/29643643
def hex2rgb(h):
    h = h.lstrip("#")
    if len(h) != 6:
        raise InvalidArgument(f"not a hex colour: {h!r}")
    try:
        return tuple(int(h[i : i + 2], 16) for i in (0, 2, 4))
    except ValueError as e:
        raise InvalidArgument(f"not a hex colour: {h!r}") from e


def block_size(grid_shape, width, height):
    tiles_h, tiles_w = grid_shape
    if width % tiles_w != 0 or height % tiles_h != 0:
        raise InvalidArgument(
            f"{width}x{height} pixels do not divide into {tiles_w}x{tiles_h} tiles"
        )
    return width // tiles_w, height // tiles_h


def paint(
    grid,
    width,
    height,
    foreground=FOREGROUND,
    background=BACKGROUND,
    pixels=None,
    callback=None,
):
    """
    Rasterize a grid of tile codes into a (height, width) uint32 buffer.

    Raster blocks are painted row-major; `callback(pixels)` runs after each
    row of tiles.
    """
    grid = np.asarray(grid)
    cell_w, cell_h = block_size(grid.shape, width, height)
    fg, bg = pack_rgb(foreground), pack_rgb(background)
    if pixels is None:
        pixels = np.zeros((height, width), dtype=np.uint32)
    elif pixels.shape != (height, width):
        raise InvalidArgument(f"pixel buffer is {pixels.shape}, expected {(height, width)}")

    masks = {}
    for row in range(grid.shape[0]):
        for col in range(grid.shape[1]):
            code = int(grid[row, col])
            if code not in masks:
                masks[code] = np.where(tile_mask(code, cell_w, cell_h), fg, bg)
            pixels[
                row * cell_h : (row + 1) * cell_h,
                col * cell_w : (col + 1) * cell_w,
            ] = masks[code]
        if callback is not None:
            callback(pixels)
    log.info("painted %dx%d pixels in %dx%d blocks", width, height, cell_w, cell_h)
    return pixels
