import sys

from wangtiles import run_example

sys.exit(run_example("wangtiles"))
