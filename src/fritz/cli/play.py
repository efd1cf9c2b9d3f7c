"""CLI command for playing in the terminal."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from fritz.play.saves import DEFAULT_SAVE_PATH
from fritz.play.session import PlaySession, SessionConfig

logger = logging.getLogger(__name__)


@click.command()
@click.option("--seed", type=int, default=None, help="Random seed for reproducibility")
@click.option(
    "--save",
    "save_path",
    type=click.Path(dir_okay=False),
    default=str(DEFAULT_SAVE_PATH),
    show_default=True,
    help="Where progress and stats are saved",
)
@click.option("--no-save", is_flag=True, help="Do not read or write a save file")
@click.option("--new", "new_game", is_flag=True, help="Start a new game even if one is saved")
@click.option("--debug", is_flag=True, help="Show the hidden animals on the grid")
@click.option("--show-rules/--no-rules", default=True, help="Display rules at start")
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(
    seed: int | None,
    save_path: str,
    no_save: bool,
    new_game: bool,
    debug: bool,
    show_rules: bool,
    verbose: bool,
):
    """Find the hidden animals on a 9x9 grid."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.WARNING)

    config = SessionConfig(
        seed=seed,
        debug=debug,
        show_rules=show_rules,
        new_game=new_game,
        save_path=None if no_save else Path(save_path).expanduser(),
    )

    session = PlaySession(config)
    try:
        result = session.run(output_fn=click.echo)
    except KeyboardInterrupt:
        click.echo("\n\nGame interrupted.")
        session.save_progress(click.echo)
        result = None

    if result is None:
        click.echo("\nSee you next time!")
    else:
        click.echo("\nThanks for playing!")


if __name__ == "__main__":
    main()
