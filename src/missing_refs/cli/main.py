"""Main CLI entry point for the missing references finder."""

import argparse

from ..reporting.report_formatter import OUTPUT_FORMATS
from ..utils.logging_config import setup_logging
from .commands.scan import run_scan_command
from .commands.serve import serve_command
from .config import Config


def _add_common_arguments(parser: argparse.ArgumentParser):
    parser.add_argument("--config", help="Path to .env configuration file", default=None)
    parser.add_argument("-v", "--verbose", action="store_true", help="Show progress information")
    parser.add_argument("--debug", action="store_true", help="Log every finding as it is made")


def _add_report_arguments(parser: argparse.ArgumentParser):
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Report format (default: OUTPUT_FORMAT or text)",
    )
    parser.add_argument(
        "--fail-on-findings",
        action="store_true",
        help="Exit with status 2 when any missing reference is found",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="missing-refs",
        description="Find missing components and dangling object references in scenes and assets",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Scene command
    scene_parser = subparsers.add_parser("scene", help="Search in the current scene")
    scene_parser.add_argument("--scene", help="Scene document to open first (default: DEFAULT_SCENE)")
    _add_common_arguments(scene_parser)
    _add_report_arguments(scene_parser)

    # All scenes command
    all_parser = subparsers.add_parser("all-scenes", help="Search in all enabled scenes")
    _add_common_arguments(all_parser)
    _add_report_arguments(all_parser)

    # Assets command
    assets_parser = subparsers.add_parser("assets", help="Search in assets")
    assets_parser.add_argument("--prefix", help="Asset path prefix (default: ASSET_PATH_PREFIX or Assets/)")
    _add_common_arguments(assets_parser)
    _add_report_arguments(assets_parser)

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Start MCP server over the project")
    _add_common_arguments(serve_parser)

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    setup_logging(verbose=args.verbose, debug=args.debug)

    config = Config(args.config)

    if args.command == "serve":
        serve_command(config, verbose=args.verbose)
    elif args.command == "scene":
        run_scan_command(
            config,
            target="scene",
            scene=args.scene,
            output_format=args.output_format,
            fail_on_findings=args.fail_on_findings,
        )
    elif args.command == "all-scenes":
        run_scan_command(
            config,
            target="all-scenes",
            output_format=args.output_format,
            fail_on_findings=args.fail_on_findings,
        )
    elif args.command == "assets":
        run_scan_command(
            config,
            target="assets",
            prefix=args.prefix,
            output_format=args.output_format,
            fail_on_findings=args.fail_on_findings,
        )
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
