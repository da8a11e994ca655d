"""
Command-line interface for the Bookmark Manager.

Parses arguments, resolves configuration, sets up logging and hands a single
command to the dispatcher. This is the only place where errors become exit
codes.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import NoReturn

from bookmark_manager import __version__
from bookmark_manager.config.configuration import Configuration
from bookmark_manager.config.pydantic_config import ConfigurationManager
from bookmark_manager.core.dispatcher import Command, CommandDispatcher
from bookmark_manager.utils.error_handler import BookmarkManagerError, UsageError
from bookmark_manager.utils.logging_setup import setup_logging
from bookmark_manager.utils.validation import (
    validate_config_file,
    validate_name,
    validate_offset,
    validate_output_target,
)


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


class CLIInterface:
    """Command line interface for the bookmark manager."""

    def __init__(self):
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create argument parser with add/remove/query subcommands."""
        parser = _ArgumentParser(
            prog="bookmark-manager",
            description="Keep a small list of named offsets in a YAML file",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  bookmark-manager add --name intro --offset 12.5
  bookmark-manager --file chapters.yaml query --name intro
  bookmark-manager --output-file result.txt remove --name intro
  bookmark-manager --create-config bookmark_manager.toml

Configuration:
  Defaults can be set in bookmark_manager.toml (or .json) in the current
  directory, or in a file given with --config:

  [store]
  file = "bookmarks"

  [output]
  file = "-"

  [logging]
  level = "WARNING"

  Environment variables BOOKMARK_MANAGER_FILE, BOOKMARK_MANAGER_OUTPUT and
  BOOKMARK_MANAGER_LOG_LEVEL override the file; options override both.
            """,
        )

        parser.add_argument(
            "--version", "-V", action="version", version=f"%(prog)s {__version__}"
        )
        parser.add_argument(
            "--file",
            "-f",
            metavar="FILE",
            help="The file to read/write to (default: bookmarks)",
        )
        parser.add_argument(
            "--output-file",
            metavar="FILE",
            help="The file to write the output to, '-' for stdout (default: -)",
        )
        parser.add_argument(
            "--config",
            "-c",
            metavar="FILE",
            help="Configuration file (TOML or JSON)",
        )
        parser.add_argument(
            "--create-config",
            metavar="FILE",
            help="Write a configuration file with the default settings "
            "(.toml or .json) and exit",
        )
        parser.add_argument(
            "--verbose",
            "-v",
            action="count",
            default=0,
            help="Log progress to stderr (-v for info, -vv for debug)",
        )

        subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

        add_parser = subparsers.add_parser(
            "add", help="Add a new bookmark, or update an existing one"
        )
        add_parser.add_argument(
            "--name",
            "-n",
            metavar="NAME",
            required=True,
            help="The name of the bookmark to add/update",
        )
        add_parser.add_argument(
            "--offset",
            "-o",
            metavar="OFFSET",
            required=True,
            help="The time offset to save",
        )

        remove_parser = subparsers.add_parser(
            "remove", help="Remove an existing bookmark"
        )
        remove_parser.add_argument(
            "--name",
            "-n",
            metavar="NAME",
            required=True,
            help="The name of the bookmark to remove",
        )

        query_parser = subparsers.add_parser(
            "query", help="Get the value of an existing bookmark"
        )
        query_parser.add_argument(
            "--name",
            "-n",
            metavar="NAME",
            required=True,
            help="The name of the bookmark to search for",
        )

        return parser

    def parse_args(self, args=None) -> argparse.Namespace:
        """Parse command line arguments."""
        return self.parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> dict:
        """
        Validate arguments and return processed values.

        Raises:
            UsageError: If any validation fails
        """
        if args.command is None:
            raise UsageError("No command given (expected one of: add, remove, query)")

        name = validate_name(args.name)
        offset = validate_offset(args.offset) if args.command == "add" else None

        return {
            "command": args.command,
            "name": name,
            "offset": offset,
            "config_path": validate_config_file(args.config),
            "store_file": args.file,
            "output_file": args.output_file,
            "verbose": args.verbose,
        }

    def process_arguments(self, validated_args: dict) -> Configuration:
        """
        Load configuration, apply command-line overrides and set up logging.

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        config = Configuration(validated_args["config_path"])

        overrides = {
            "store_file": validated_args["store_file"],
            "output_file": validated_args["output_file"],
        }
        if validated_args["verbose"] >= 2:
            overrides["log_level"] = "DEBUG"
        elif validated_args["verbose"] == 1:
            overrides["log_level"] = "INFO"
        config.update_from_args(overrides)

        setup_logging(config.log_level, config.log_file)
        return config

    def _handle_create_config(self, target: str) -> int:
        """
        Write a configuration file holding the default settings.

        Raises:
            UsageError: If the target exists, is not a .toml or .json file,
                or its directory is missing
        """
        output_path = Path(target)
        if output_path.suffix.lower() not in (".toml", ".json"):
            raise UsageError(f"Configuration file must be TOML or JSON: {target}")
        if output_path.exists():
            raise UsageError(f"Configuration file already exists: {target}")
        if not output_path.parent.exists():
            raise UsageError(f"Output directory does not exist: {output_path.parent}")

        config_format = "json" if output_path.suffix.lower() == ".json" else "toml"
        ConfigurationManager.create_sample_config(output_path, config_format)
        print(f"Created configuration file: {output_path}")
        return 0

    def run(self, args=None) -> int:
        """Execute CLI interface."""
        logger = logging.getLogger(__name__)
        try:
            parsed_args = self.parse_args(args)

            if parsed_args.create_config:
                return self._handle_create_config(parsed_args.create_config)

            validated_args = self.validate_args(parsed_args)
            config = self.process_arguments(validated_args)

            store_path = config.store_file
            output_target = validate_output_target(config.output_file)

            if config.source:
                logger.info(f"Configuration file: {config.source}")
            logger.info(f"Store file: {store_path}")
            logger.debug(f"Output target: {output_target}")

            dispatcher = CommandDispatcher(store_path, output_target)
            dispatcher.dispatch(
                Command(
                    operation=validated_args["command"],
                    name=validated_args["name"],
                    offset=validated_args["offset"],
                )
            )
            return 0

        except UsageError as e:
            print(self.parser.format_usage().rstrip(), file=sys.stderr)
            print(f"Usage Error: {e}", file=sys.stderr)
            return e.exit_code
        except BookmarkManagerError as e:
            print(f"Error: {e}", file=sys.stderr)
            logger.debug("Command failed", exc_info=True)
            return e.exit_code
        except Exception as e:
            print(f"Error: {e}", file=sys.stderr)
            logger.exception("Unexpected error in CLI")
            return 1


def main(args=None):
    """Main entry point for the CLI."""
    cli = CLIInterface()
    return cli.run(args)


if __name__ == "__main__":
    sys.exit(main())
