from wangtiles.errors import InvalidArgument
from wangtiles.raster import *
import numpy as np
import unittest


def samples(n=24):
    for y in range(n):
        for x in range(n):
            yield x / n, y / n


class ColorAtTest(unittest.TestCase):
    def test_total(self):
        for code in range(16):
            for u, v in samples():
                self.assertIn(color_at(code, u, v), (FOREGROUND, BACKGROUND))

    def test_empty_and_full(self):
        for u, v in samples():
            self.assertEqual(color_at(0, u, v), BACKGROUND)
            self.assertEqual(color_at(15, u, v), FOREGROUND)

    def test_single_edges(self):
        # Points just inside each edge, away from the diagonals.
        self.assertEqual(color_at(1, 0.5, 0.05), FOREGROUND)
        self.assertEqual(color_at(1, 0.5, 0.95), BACKGROUND)
        self.assertEqual(color_at(2, 0.95, 0.5), FOREGROUND)
        self.assertEqual(color_at(2, 0.05, 0.5), BACKGROUND)
        self.assertEqual(color_at(4, 0.5, 0.95), FOREGROUND)
        self.assertEqual(color_at(4, 0.5, 0.05), BACKGROUND)
        self.assertEqual(color_at(8, 0.05, 0.5), FOREGROUND)
        self.assertEqual(color_at(8, 0.95, 0.5), BACKGROUND)

    def test_single_edges_cover_a_quarter(self):
        n = 64
        for code in (1, 2, 4, 8):
            mask = tile_mask(code, n, n)
            self.assertAlmostEqual(mask.mean(), 0.25, delta=0.05)

    def test_union(self):
        for code in range(16):
            for u, v in samples(12):
                expected = any(
                    color_at(bit, u, v) == FOREGROUND for bit in (1, 2, 4, 8) if code & bit
                )
                self.assertEqual(color_at(code, u, v) == FOREGROUND, expected)

    def test_corner_pairs(self):
        # North and east together fill the upper right half.
        self.assertEqual(color_at(3, 0.9, 0.1), FOREGROUND)
        self.assertEqual(color_at(3, 0.1, 0.9), BACKGROUND)
        self.assertEqual(color_at(12, 0.1, 0.9), FOREGROUND)

    def test_invalid_code(self):
        with self.assertRaises(InvalidArgument):
            color_at(16, 0.5, 0.5)
        with self.assertRaises(InvalidArgument):
            color_at(-1, 0.5, 0.5)

    def test_custom_colours(self):
        self.assertEqual(color_at(15, 0.2, 0.2, foreground=(1, 2, 3)), (1, 2, 3))


class TileMaskTest(unittest.TestCase):
    def test_matches_color_at(self):
        cell_w, cell_h = 16, 8
        for code in range(16):
            mask = tile_mask(code, cell_w, cell_h)
            self.assertEqual(mask.shape, (cell_h, cell_w))
            for y in range(cell_h):
                for x in range(cell_w):
                    fg = color_at(code, x / cell_w, y / cell_h) == FOREGROUND
                    self.assertEqual(bool(mask[y, x]), fg)

    def test_bad_block(self):
        with self.assertRaises(InvalidArgument):
            tile_mask(1, 0, 4)


class ColourTest(unittest.TestCase):
    def test_pack(self):
        self.assertEqual(pack_rgb((0x12, 0x34, 0x56)), 0x123456)
        self.assertEqual(pack_rgb(FOREGROUND), 0x000A00)

    def test_unpack(self):
        rgb = unpack_rgb(np.array([[0x123456, 0xFFFFFF]], dtype=np.uint32))
        self.assertEqual(rgb.shape, (1, 2, 3))
        self.assertEqual(rgb.dtype, np.uint8)
        self.assertEqual(rgb.tolist(), [[[0x12, 0x34, 0x56], [255, 255, 255]]])

    def test_bad_colour(self):
        with self.assertRaises(InvalidArgument):
            pack_rgb((256, 0, 0))
        with self.assertRaises(InvalidArgument):
            pack_rgb((1, 2))

    def test_hex2rgb(self):
        self.assertEqual(hex2rgb("#000a00"), FOREGROUND)
        self.assertEqual(hex2rgb("ffffff"), BACKGROUND)
        for bad in ["fff", "gggggg"]:
            with self.assertRaises(InvalidArgument):
                hex2rgb(bad)


class PaintTest(unittest.TestCase):
    def test_every_pixel_painted(self):
        grid = np.arange(16, dtype=np.uint8).reshape(4, 4)
        pixels = paint(grid, 32, 16)
        self.assertEqual(pixels.shape, (16, 32))
        self.assertEqual(pixels.dtype, np.uint32)
        values = set(np.unique(pixels).tolist())
        self.assertEqual(values, {pack_rgb(FOREGROUND), pack_rgb(BACKGROUND)})

    def test_blocks(self):
        grid = np.array([[0, 15], [1, 4]], dtype=np.uint8)
        pixels = paint(grid, 8, 8)
        fg, bg = pack_rgb(FOREGROUND), pack_rgb(BACKGROUND)
        self.assertTrue((pixels[:4, :4] == bg).all())
        self.assertTrue((pixels[:4, 4:] == fg).all())
        expected = np.where(tile_mask(4, 4, 4), fg, bg)
        np.testing.assert_array_equal(pixels[4:, 4:], expected)

    def test_callback_per_tile_row(self):
        rows = []
        grid = np.zeros((3, 2), dtype=np.uint8)
        paint(grid, 4, 6, callback=lambda pixels: rows.append(pixels.copy()))
        self.assertEqual(len(rows), 3)
        # The last two tile rows are still unpainted after the first callback.
        self.assertTrue((rows[0][2:] == 0).all())

    def test_indivisible(self):
        with self.assertRaises(InvalidArgument):
            paint(np.zeros((3, 3), dtype=np.uint8), 10, 9)

    def test_invalid_code_in_grid(self):
        with self.assertRaises(InvalidArgument):
            paint(np.full((1, 1), 16, dtype=np.uint8), 4, 4)
