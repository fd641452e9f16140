from wangtiles import run_example
import sys

sys.exit(run_example("wang"))
