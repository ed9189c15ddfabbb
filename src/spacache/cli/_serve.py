"""``spacache serve`` — load a build directory and run the server."""

import argparse
import logging
import sys
from dataclasses import replace

import anyio

from spacache.app import App
from spacache.config import SpaConfig
from spacache.errors import SpaCacheError


def build_config(args: argparse.Namespace) -> SpaConfig:
    """Apply CLI flags over the default SpaConfig."""
    overrides = {
        "dist": args.dist,
        "glob": args.glob,
        "index": args.index,
        "placeholder": args.placeholder,
        "host": args.host,
        "port": args.port,
        "log_level": args.log_level,
    }
    config = replace(SpaConfig(), **{k: v for k, v in overrides.items() if v is not None})
    if args.include_hidden:
        config = replace(config, include_hidden=True)
    return config


def serve(args: argparse.Namespace) -> None:
    """Load the build directory up front, then start the server.

    Loading before the server starts turns a missing directory or index
    into a clean CLI error instead of a failed lifespan.
    """
    config = build_config(args)
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = App(config)
    try:
        anyio.run(app.startup)
    except SpaCacheError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    app.run()
