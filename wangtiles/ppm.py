"""Binary PPM (P6) reading and writing for packed 0xRRGGBB pixel buffers."""

import logging
import re

import numpy as np

from wangtiles.errors import InvalidArgument, OutputError
from wangtiles.raster import unpack_rgb

log = logging.getLogger(__name__)

HEADER_TOKEN = re.compile(rb"\s*(?:#[^\n]*\n\s*)*(\S+)")


def encode_ppm(pixels, width, height):
    pixels = np.asarray(pixels, dtype=np.uint32)
    if pixels.size != width * height:
        raise InvalidArgument(
            f"buffer holds {pixels.size} pixels, expected {width}x{height}"
        )
    header = f"P6\n{width} {height} 255\n".encode("ascii")
    return header + unpack_rgb(pixels.reshape(height, width)).tobytes()


def write_ppm(path, pixels):
    pixels = np.asarray(pixels)
    if pixels.ndim != 2:
        raise InvalidArgument(f"pixel buffer must be (height, width), got {pixels.shape}")
    height, width = pixels.shape
    data = encode_ppm(pixels, width, height)
    try:
        with open(path, "wb") as f:
            f.write(data)
    except OSError as e:
        raise OutputError(f"can't write {path}: {e}") from e
    log.info("wrote %s (%d bytes)", path, len(data))


def decode_ppm(data):
    """Parse a P6 image with maxval 255 into a (height, width) packed buffer."""
    fields = []
    pos = 0
    for _ in range(4):
        match = HEADER_TOKEN.match(data, pos)
        if match is None:
            raise InvalidArgument("truncated PPM header")
        fields.append(match.group(1))
        pos = match.end()

    magic, width, height, maxval = fields
    if magic != b"P6":
        raise InvalidArgument(f"not a binary PPM: {magic!r}")
    try:
        width, height, maxval = int(width), int(height), int(maxval)
    except ValueError as e:
        raise InvalidArgument("bad PPM header") from e
    if maxval != 255:
        raise InvalidArgument(f"unsupported maxval {maxval}")

    # A single whitespace byte separates the header from the raster.
    body = data[pos + 1 : pos + 1 + width * height * 3]
    if len(body) != width * height * 3:
        raise InvalidArgument("truncated PPM raster")

    rgb = np.frombuffer(body, dtype=np.uint8).reshape(height, width, 3).astype(np.uint32)
    return (rgb[..., 0] << 16) | (rgb[..., 1] << 8) | rgb[..., 2]


def read_ppm(path):
    with open(path, "rb") as f:
        return decode_ppm(f.read())
