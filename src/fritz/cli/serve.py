"""CLI command for running the HTTP API."""

from __future__ import annotations

import logging

import click
import uvicorn

from fritz.web.app import create_app


@click.command()
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", type=int, default=8000, show_default=True)
@click.option("--db", "db_path", type=click.Path(dir_okay=False), default=None, help="SQLite file (default: $FRITZ_DB_PATH or data/fritz.db)")
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(host: str, port: int, db_path: str | None, verbose: bool):
    """Serve the Fritz API."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO)
    app = create_app(db_path=db_path)
    uvicorn.run(app, host=host, port=port, log_level="debug" if verbose else "info")


if __name__ == "__main__":
    main()
