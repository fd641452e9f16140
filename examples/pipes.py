from wangtiles import *

# Straight pipes and crossings only. With wrapping, the last cell of a row
# can be left with no compatible tile, so reseed instead of giving up.
tileset = parse_tileset("0,5,10,15")

grid, pixels = render(
    512,
    512,
    32,
    32,
    choose=uniform_chooser(seed=7, weights={0: 4.0, 15: 0.5}),
    tileset=tileset,
    fallback=True,
    foreground=hex2rgb("1d2b53"),
    background=hex2rgb("fff1e8"),
)
print(f"{len(mismatches(grid, wrap=True))} mismatched edges")
write_ppm("pipes.ppm", pixels)
