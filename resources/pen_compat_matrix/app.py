"""
Application entry point for Pen Compatibility Matrix.

Loads the tablet/pen compatibility dataset and shows it in the desktop viewer,
prints it to the console, or prints a consistency report of the dataset.
"""

import sys
import argparse
import traceback
from typing import List, Optional

from .config.settings import AppConfig, LogLevel, init_config
from .errors import PenCompatError
from .models.dataset import Dataset
from .models.display import FormatOptions, ViewMode
from .services.matrix_service import render_matrix, to_plain_text
from .services.report_service import build_report, format_report
from .services.source_service import get_source_service, init_source_service
from .utils.logger import CompatLogger, setup_logging
from .utils.validators import get_validator


class PenCompatApp:
    """Main application class for Pen Compatibility Matrix."""

    def __init__(self):
        self.config: Optional[AppConfig] = None
        self.logger: Optional[CompatLogger] = None

    def initialize(self, config_file: Optional[str] = None, debug: bool = False,
                   colored: Optional[bool] = None, log_to_file: bool = True) -> None:
        """Initialize configuration, logging and the source service."""
        self.config = init_config(config_file)

        if debug:
            self.config.debug_mode = True
            self.config.log_level = LogLevel.DEBUG
        if colored is not None:
            self.config.ui.colored_output = colored

        self.logger = setup_logging(
            colored=self.config.ui.colored_output,
            log_file=self.config.get_log_file_path() if log_to_file else None,
            level=self.config.log_level
        )
        self.logger.debug(f"Starting {self.config.app_name} v{self.config.version}")

        init_source_service(
            timeout=self.config.sources.fetch_timeout,
            user_agent=self.config.sources.user_agent,
            report_conflicts=self.config.sources.report_conflicts
        )

    def resolve_sources(self, sources: Optional[List[str]]) -> List[str]:
        """Command line sources win over configured ones."""
        return list(sources) if sources else list(self.config.sources.sources)

    def load_dataset(self, sources: List[str]) -> Optional[Dataset]:
        """Validate and load sources; errors are logged and yield None."""
        validation = get_validator().validate_sources(sources)
        if not validation:
            self.logger.error(validation.message)
            return None

        try:
            dataset = get_source_service().load_all(sources)
        except PenCompatError as e:
            self.logger.error(f"Failed to load dataset: {e}")
            return None

        self.logger.highlight(f"Loaded {dataset} ({len(dataset.diagnostics)} diagnostics)")
        for kind, count in sorted(dataset.diagnostics.summary().items()):
            self.logger.info(f"  {kind}: {count}")
        return dataset

    def run_cli_matrix(self, dataset: Dataset, view_mode: ViewMode, query: str,
                       options: FormatOptions, as_tsv: bool = False) -> int:
        """Print the matrix to stdout."""
        view = render_matrix(dataset, view_mode, query, options)

        if as_tsv:
            print(to_plain_text(view))
        elif view.is_empty:
            print("No rows match the current filter.")
        else:
            separator = "\n" if options.one_per_line else ", "
            for formatted in view.formatted:
                print(f"{formatted.tablets.join(separator)}  <->  {formatted.pens.join(separator)}")

        self.logger.info(view.stats.summary())
        return 0

    def run_report(self, dataset: Dataset) -> int:
        """Print the dataset consistency report."""
        report = build_report(dataset)
        print(format_report(report, colored=self.config.ui.colored_output))
        return 1 if report.has_problems else 0

    def run_gui_mode(self, sources: List[str]) -> int:
        """Run the desktop viewer."""
        try:
            from .gui.main_window import MainWindow
        except ImportError as e:
            self.logger.error(f"GUI dependencies not available: {e}")
            self.logger.info("Please install GUI dependencies: pip install customtkinter")
            return 1

        self.logger.info("Starting GUI mode")
        MainWindow(config=self.config, source_service=get_source_service(),
                   sources=sources).run()
        return 0


def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure the command line argument parser."""
    parser = argparse.ArgumentParser(
        description="Pen Compatibility Matrix - browse which pens work with which tablets",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                     # Open the viewer with configured sources
  %(prog)s wacom-pen-compat.xml --cli          # Print the grouped matrix
  %(prog)s data.xml --cli --view by-pen -s "pro*"
  %(prog)s https://example.org/compat.xml --report
        """)

    parser.add_argument(
        'sources', nargs='*', metavar='SOURCE',
        help='Dataset file paths or http(s)/file URLs (merged in order)'
    )

    mode_group = parser.add_argument_group('Interface Mode')
    mode = mode_group.add_mutually_exclusive_group()
    mode.add_argument('--gui', action='store_true', help='Open the desktop viewer (default)')
    mode.add_argument('--cli', action='store_true', help='Print the matrix to the console')
    mode.add_argument('--report', action='store_true',
                      help='Print the dataset consistency report')

    view_group = parser.add_argument_group('Matrix Options')
    view_group.add_argument(
        '--view', choices=[m.value for m in ViewMode],
        help='View mode (default from configuration: grouped)'
    )
    view_group.add_argument('-s', '--search', default='',
                            help='Search query; quote phrases, * and ? are wildcards')
    names = view_group.add_mutually_exclusive_group()
    names.add_argument('--names', dest='show_names', action='store_true', default=None,
                       help='Show device names')
    names.add_argument('--no-names', dest='show_names', action='store_false', default=None,
                       help='Show raw ids only')
    view_group.add_argument('--one-per-line', action='store_true', default=None,
                            help='One device per line')
    view_group.add_argument('--by-family', action='store_true', default=None,
                            help='Organize devices by family')
    view_group.add_argument('--tsv', action='store_true',
                            help='Print tab-separated text (as copied from the viewer)')

    config_group = parser.add_argument_group('Configuration')
    config_group.add_argument('--config', metavar='CONFIG_FILE',
                              help='Path to configuration file')
    config_group.add_argument('--debug', action='store_true', help='Enable debug logging')
    config_group.add_argument('--no-color', action='store_true', help='Disable colored output')
    config_group.add_argument('--no-log-file', action='store_true',
                              help='Do not write the log file')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    app = PenCompatApp()
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    try:
        app.initialize(
            args.config,
            debug=args.debug,
            colored=False if args.no_color else None,
            log_to_file=not args.no_log_file
        )

        sources = app.resolve_sources(args.sources)

        if not (args.cli or args.report):
            return app.run_gui_mode(sources)

        dataset = app.load_dataset(sources)
        if dataset is None:
            return 1

        if args.report:
            return app.run_report(dataset)

        display = app.config.display
        options = FormatOptions(
            show_names=display.show_names if args.show_names is None else args.show_names,
            one_per_line=display.one_per_line if args.one_per_line is None else args.one_per_line,
            organize_by_family=(display.organize_by_family if args.by_family is None
                                else args.by_family),
        )
        view_mode = ViewMode.from_name(args.view) if args.view else display.get_view_mode()
        return app.run_cli_matrix(dataset, view_mode, args.search, options, as_tsv=args.tsv)

    except KeyboardInterrupt:
        if app.logger:
            app.logger.info("Interrupted by user")
        return 130

    except Exception as e:
        if app.logger:
            app.logger.error(f"Unexpected error: {e}")
            app.logger.debug(traceback.format_exc())
        else:
            print(f"Unexpected error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
