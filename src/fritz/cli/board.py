"""CLI command for generating boards."""

from __future__ import annotations

import json
import logging
import random
import sys

import click

from fritz.board.generator import GeneratorConfig, generate_board
from fritz.errors import GenerationExhaustedError
from fritz.play.display import BoardRenderer

logger = logging.getLogger(__name__)


@click.command()
@click.option("--seed", type=int, default=None, help="Random seed for reproducibility")
@click.option("-n", "--count", type=int, default=1, show_default=True, help="Number of boards")
@click.option("--json", "as_json", is_flag=True, help="Print boards as JSON lines")
@click.option("--max-restarts", type=int, default=500, show_default=True, help="Give up after this many restarts")
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(seed: int | None, count: int, as_json: bool, max_restarts: int, verbose: bool):
    """Generate and print valid boards."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)

    if count < 1:
        raise click.BadParameter("must be at least 1", param_hint="--count")
    if seed is None:
        seed = random.randint(0, 2**32 - 1)

    rng = random.Random(seed)
    config = GeneratorConfig(max_restarts=max_restarts)
    renderer = BoardRenderer()

    for i in range(count):
        try:
            board = generate_board(rng=rng, config=config)
        except GenerationExhaustedError as e:
            logger.error(f"Board {i + 1}: {e}")
            sys.exit(1)

        if as_json:
            click.echo(json.dumps({"board_id": board.board_id, "seed": seed, "index": i, "cells": board.to_dict()}))
        else:
            click.echo(f"Board {board.board_id} (seed {seed}, #{i + 1})")
            click.echo(renderer.render_board(board))
            click.echo("")


if __name__ == "__main__":
    main()
