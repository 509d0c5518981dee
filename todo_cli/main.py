"""todo-cli - a command-line todo manager backed by a JSON file."""

import logging
import sys

from todo_cli.core.logging import configure_logfire
from todo_cli.interface.cli import build_parser, execute


logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    """Console entry point for the `todo` command."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logfire(verbose=args.verbose)
    logger.debug("Running command %s", args.command)
    sys.exit(execute(args, parser=parser))


if __name__ == "__main__":
    main()
