"""Entry point for running the roulette plotter from a checkout."""

import sys

from rouletteplot.cli import main


if __name__ == "__main__":
    sys.exit(main())
