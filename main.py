"""
=========================================================
Command line entry point for the SQL synthesis engine.
=========================================================

Reads a JSON request document, renders it and prints the SQL text. With
--execute the statement is also run through the execution provider and the
result rows are printed.

Architecture:
    1. Request loading (sqlsynth.loader)
    2. Rendering (sqlsynth.renderer.StatementRenderer)
    3. Optional execution (utils.database_utils.SqlExecutionProvider)
    4. Application logging (core.logger)

Key Design Principles:
    - main.py is a thin CLI wrapper
    - Render failures are reported by reason code, never as partial SQL
    - Database errors are reported and not retried

Usage:
    # Print the SQL for a request
    python main.py requests/create_users.json

    # Render and run it against the configured database
    python main.py requests/create_users.json --execute

    # Debug logging
    python main.py requests/create_users.json --log-level DEBUG

Example:
    >>> from main import SynthesisRunner
    >>>
    >>> runner = SynthesisRunner()
    >>> result = runner.render_file('requests/create_users.json')
    >>> print(result.sql)
"""

import argparse
import sys
from typing import Any, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from core.logger import get_logger, setup_logging
from sqlsynth.errors import RenderResult, RequestLoadError
from sqlsynth.loader import load_request
from sqlsynth.renderer import StatementRenderer
from utils.database_utils import ExecutionProviderError, SqlExecutionProvider

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


class SynthesisRunner:
    """
    Loads, renders and optionally executes request documents.

    Attributes:
        renderer: StatementRenderer used for every request
        provider: SqlExecutionProvider, created on first execution

    Example:
        >>> runner = SynthesisRunner()
        >>> exit_code = runner.run('requests/drop_staging.json', execute=True)
    """

    def __init__(self, provider: Optional[SqlExecutionProvider] = None):
        self.renderer = StatementRenderer()
        self.provider = provider

    def render_file(self, path: str) -> RenderResult:
        """
        Load a request document and render it.

        Raises:
            RequestLoadError: If the document cannot be loaded
        """
        request = load_request(path)
        return self.renderer.render(request)

    def execute(self, result: RenderResult) -> List[Any]:
        """Run a successful render through the execution provider."""
        if self.provider is None:
            self.provider = SqlExecutionProvider()
        return self.provider.execute(result)

    def run(self, path: str, execute: bool = False) -> int:
        """
        Render (and optionally execute) one request file.

        Args:
            path: Path to the JSON request document
            execute: Also run the statement against the database

        Returns:
            Process exit code (0 on success, 1 on any failure)
        """
        try:
            result = self.render_file(path)
        except RequestLoadError as e:
            logger.error(f"❌ Invalid request: {e.message}")
            print(f"{e.reason.value}: {e.message}", file=sys.stderr)
            return EXIT_FAILURE

        if not result.ok:
            print(str(result.failure), file=sys.stderr)
            return EXIT_FAILURE

        print(result.sql)

        if execute:
            try:
                rows = self.execute(result)
            except (SQLAlchemyError, ExecutionProviderError) as e:
                logger.error(f"❌ Execution failed: {e}")
                return EXIT_FAILURE
            for row in rows:
                print(tuple(row))
            logger.info(f"✅ Executed, {len(rows)} row(s)")

        return EXIT_OK

    def close(self) -> None:
        if self.provider is not None:
            self.provider.dispose()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Render SQL statements from JSON request documents',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print the SQL for a request
  python main.py requests/create_users.json

  # Render and execute against the configured database
  python main.py requests/create_users.json --execute

Configuration:
  - SQLSYNTH_DB_* variables (or .env) select the database for --execute
  - SQLSYNTH_LOG_* variables set the default logging behaviour
        """
    )
    parser.add_argument(
        'request',
        help='Path to a JSON request document'
    )
    parser.add_argument(
        '--execute',
        action='store_true',
        help='Execute the rendered statement and print returned rows'
    )
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        type=str.upper,
        default=None,
        help='Override the configured log level'
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for command-line execution."""
    args = build_parser().parse_args(argv)

    if args.log_level:
        setup_logging(log_level=args.log_level)

    runner = SynthesisRunner()
    try:
        return runner.run(args.request, execute=args.execute)
    except KeyboardInterrupt:
        logger.warning("⚠️  Operation interrupted by user")
        return 130
    finally:
        runner.close()


if __name__ == '__main__':
    sys.exit(main())
