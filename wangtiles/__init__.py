from wangtiles.errors import *
from wangtiles.tiles import *
from wangtiles.grid import generate, generate_row, mismatches, uniform_chooser
from wangtiles.raster import (
    BACKGROUND,
    FOREGROUND,
    color_at,
    hex2rgb,
    pack_rgb,
    paint,
    tile_mask,
    unpack_rgb,
)
from wangtiles.ppm import decode_ppm, encode_ppm, read_ppm, write_ppm
import argparse
import os
import logging
import sys

log = logging.getLogger(__name__)

WIDTH = 512
HEIGHT = 512
TILES_W = 16
TILES_H = 16
OUTPUT_PATH = "output.ppm"


class FfmpegWriter:
    def __init__(self, filename, dims, skip=1, framerate=60):
        import ffmpeg

        if skip < 1:
            raise InvalidArgument(f"frame skip must be at least 1, got {skip}")
        height, width = dims

        self.process = (
            ffmpeg.input(
                "pipe:",
                format="rawvideo",
                pix_fmt="rgb24",
                s="{}x{}".format(width, height),
                framerate=framerate,
            )
            .output(filename, crf=0, vcodec="libx264", preset="ultrafast")
            .global_args("-hide_banner")
            .overwrite_output()
            .run_async(pipe_stdin=True)
        )

        self.skip = skip
        self.index = 0

    def write(self, pixels):
        if self.index % self.skip == 0:
            self.process.stdin.write(unpack_rgb(pixels).tobytes())
        self.index += 1

    def close(self):
        self.process.stdin.close()
        self.process.wait()


def save_image(filename, pixels):
    from PIL import Image

    try:
        Image.fromarray(unpack_rgb(pixels)).save(filename)
    except OSError as e:
        raise OutputError(f"can't write {filename}: {e}") from e


def render(
    width=WIDTH,
    height=HEIGHT,
    tiles_w=TILES_W,
    tiles_h=TILES_H,
    choose=None,
    tileset=ALL_CODES,
    wrap=True,
    fallback=False,
    foreground=FOREGROUND,
    background=BACKGROUND,
    callback=None,
):
    """Generate a tile grid and paint it; returns (grid, pixels)."""
    if choose is None:
        choose = uniform_chooser()
    grid = generate(tiles_w, tiles_h, choose, tileset=tileset, wrap=wrap, fallback=fallback)
    pixels = paint(
        grid,
        width,
        height,
        foreground=foreground,
        background=background,
        callback=callback,
    )
    return grid, pixels


def pair(values, name):
    if len(values) == 1:
        values = values * 2
    if len(values) != 2:
        raise InvalidArgument(f"{name} takes one or two values")
    return values


def run_example(name=None, argv=None, choose=None):
    parser = argparse.ArgumentParser(prog=name)
    parser.add_argument("-d", "--dims", nargs="+", type=int, default=[WIDTH, HEIGHT])
    parser.add_argument("-t", "--tiles", nargs="+", type=int, default=[TILES_W, TILES_H])
    parser.add_argument("-o", "--output", default=OUTPUT_PATH)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--tileset", default=None)
    parser.add_argument("--no-wrap", dest="wrap", action="store_false")
    parser.add_argument("--fallback", action=argparse.BooleanOptionalAction, default=False)
    parser.add_argument("--foreground", default=None)
    parser.add_argument("--background", default=None)
    parser.add_argument("-i", "--image", action=argparse.BooleanOptionalAction)
    parser.add_argument("-v", "--video", action=argparse.BooleanOptionalAction)
    parser.add_argument("-s", "--skip", type=int, default=1)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    print(args)

    try:
        width, height = pair(args.dims, "--dims")
        tiles_w, tiles_h = pair(args.tiles, "--tiles")
        tileset = ALL_CODES if args.tileset is None else parse_tileset(args.tileset)
        foreground = FOREGROUND if args.foreground is None else hex2rgb(args.foreground)
        background = BACKGROUND if args.background is None else hex2rgb(args.background)
        if args.skip < 1:
            raise InvalidArgument(f"--skip must be at least 1, got {args.skip}")
        if choose is None:
            choose = uniform_chooser(args.seed)

        writer = None
        if args.video:
            writer = FfmpegWriter(f"{name or 'wangtiles'}.avi", (height, width), skip=args.skip)

        try:
            grid, pixels = render(
                width,
                height,
                tiles_w,
                tiles_h,
                choose=choose,
                tileset=tileset,
                wrap=args.wrap,
                fallback=args.fallback,
                foreground=foreground,
                background=background,
                callback=writer.write if writer is not None else None,
            )
        finally:
            if writer is not None:
                writer.close()

        bad = mismatches(grid, wrap=args.wrap)
        if bad:
            log.warning("%d mismatched edges after fallback", len(bad))

        print(f"writing {args.output}")
        write_ppm(args.output, pixels)

        if args.image:
            filename = os.path.splitext(args.output)[0] + ".png"
            print(f"writing {filename}")
            save_image(filename, pixels)
    except OutputError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except (InvalidArgument, ConstraintExhausted) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    return 0
