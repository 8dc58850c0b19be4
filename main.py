# main.py
import argparse
import logging
import sys

import pygame

import config
from cellsim.simulation import Simulation


def parse_args(argv):
    p = argparse.ArgumentParser(description="Grid cells foraging with evolving neural controllers")
    p.add_argument("--columns", type=int, default=config.COLUMNS, help="grid columns")
    p.add_argument("--rows", type=int, default=config.ROWS, help="grid rows")
    p.add_argument("--seed", type=int, default=None, help="random seed")
    p.add_argument("--headless", action="store_true", help="run without a window")
    p.add_argument("--ticks", type=int, default=1000, help="ticks to run in headless mode")
    p.add_argument("--log-level", default="INFO", help="logging level")
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    sim = Simulation(args.columns, args.rows, seed=args.seed)
    if args.headless:
        sim.run_headless(args.ticks)
        return

    pygame.init()
    flags = pygame.HWSURFACE | pygame.DOUBLEBUF
    screen = pygame.display.set_mode((config.SCREEN_WIDTH, config.SCREEN_HEIGHT), flags, vsync=0)
    pygame.display.set_caption("Cell Forager")

    sim.run(screen)

    pygame.quit()


if __name__ == '__main__':
    main()
