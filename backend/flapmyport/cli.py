#!/usr/bin/env python3

import argparse
import os
import sys

from . import __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="FlapMyPort API - interface flap review and flap charts"
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"flapmyport-api {__version__}",
    )
    parser.add_argument(
        "-f",
        "--config",
        default=None,
        help="Location of the TOML config file (default: settings.conf)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    # Settings are read on first import, so the environment must be ready first.
    if args.config:
        os.environ["CONFIG_FILE"] = args.config
    if args.verbose:
        os.environ["VERBOSE"] = "true"

    from .config import config_file_path, settings

    if not os.path.isfile(config_file_path()):
        print(
            f"{config_file_path()} not found. Suppose we're using environment variables",
            file=sys.stderr,
        )

    import uvicorn

    print(f"flapmyport-api version: {settings.APP_VERSION}")
    print(f"Listening on {settings.LISTEN_ADDRESS}:{settings.LISTEN_PORT}")
    uvicorn.run(
        "flapmyport.main:app",
        host=settings.LISTEN_ADDRESS,
        port=settings.LISTEN_PORT,
        log_config=None,
    )


if __name__ == "__main__":
    main()
