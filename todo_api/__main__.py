"""Run the todo API server.

Usage: python -m todo_api [--host HOST] [--port PORT] [--file FILE]
"""

import argparse
import sys
from typing import List, Optional

import uvicorn

from todo_api.config import Settings
from todo_api.main import configure_logging, create_app


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="todo-api",
        description="HTTP API for a file-backed todo list",
    )
    parser.add_argument("--host", help="Interface to listen on")
    parser.add_argument("--port", type=int, help="Port to listen on")
    parser.add_argument("--file", dest="todo_file", help="Todo list JSON file")
    parser.add_argument("--log-file", help="Also append logs to this file")
    parser.add_argument(
        "--lock-timeout",
        type=float,
        help="Seconds to wait for the todo file lock before answering 503",
    )
    return parser


def build_settings(argv: Optional[List[str]] = None) -> Settings:
    """Environment settings overridden by any flags given on the command line."""
    args = create_parser().parse_args(argv)
    overrides = {key: value for key, value in vars(args).items() if value is not None}
    return Settings.from_env().model_copy(update=overrides)


def main(argv: Optional[List[str]] = None) -> int:
    settings = build_settings(argv)
    # Importing todo_api.main already configured logging from the environment.
    configure_logging(settings, force=True)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
