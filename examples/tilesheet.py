from wangtiles import *
import numpy as np

# All 16 tiles in code order, 4 per row.
cell = 64
grid = np.arange(16, dtype=np.uint8).reshape(4, 4)

pixels = paint(grid, 4 * cell, 4 * cell)
write_ppm("tilesheet.ppm", pixels)
save_image("tilesheet.png", pixels)
