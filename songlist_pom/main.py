"""Song library smoke check - Main Entry Point."""
import argparse
import sys
from pathlib import Path
from typing import Optional

import structlog

from .config_loader import build_suite_settings, load_settings
from .logging_config import configure_logging
from .models import PageName
from .report_writer import save_report
from .runner import SmokeRunner


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed arguments namespace.
    """
    parser = argparse.ArgumentParser(
        description="Song library smoke check - page object visibility report",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Check every page against the configured site
  python -m songlist_pom.main

  # Run with visible browser for debugging
  python -m songlist_pom.main --visible

  # Only the song table, against another deployment
  python -m songlist_pom.main --pages library --url http://localhost:4200/
        """,
    )
    parser.add_argument(
        "--url",
        "-u",
        help="Site URL to check (default: base_url from settings or BASE_URL)",
    )
    parser.add_argument(
        "--settings",
        "-s",
        type=Path,
        default=Path("config/settings.yaml"),
        help="Path to settings.yaml configuration file",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        help="Output directory for the Excel report (default: output_dir from settings)",
    )
    parser.add_argument(
        "--pages",
        nargs="+",
        choices=[str(p) for p in PageName],
        default=[str(p) for p in PageName],
        help="Page objects to check (default: all)",
    )
    parser.add_argument(
        "--screenshots",
        action="store_true",
        help="Save a screenshot of each checked page",
    )
    parser.add_argument(
        "--visible",
        action="store_true",
        help="Run browser with visible window (for debugging)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    """Run the smoke check.

    Returns:
        Exit code: 0 if every check passed, 1 if something is missing,
        2+ for errors.
    """
    args = parse_args(argv)

    try:
        config = load_settings(args.settings if args.settings.exists() else None)
        settings = build_suite_settings(
            config,
            base_url=args.url,
            output_dir=args.output,
            headless=False if args.visible else None,
        )
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except ValueError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        return 3

    configure_logging(args.verbose, settings.log_dir)
    logger = structlog.get_logger()

    try:
        print(f"\n{'=' * 60}")
        print("SONG LIBRARY SMOKE CHECK")
        print(f"{'=' * 60}")
        print(f"URL: {settings.base_url}")
        print(f"Pages: {', '.join(args.pages)}")
        print(f"{'=' * 60}\n")

        runner = SmokeRunner(
            settings,
            pages=[PageName(p) for p in args.pages],
            take_screenshots=args.screenshots,
            progress_callback=print,
        )
        result = runner.run()
        output_path = save_report(result, settings.output_dir)

        logger.info("report_saved", output_file=str(output_path), passed=result.passed)

        elapsed = result.elapsed_seconds
        print(f"\n{'=' * 60}")
        print("SMOKE CHECK COMPLETE")
        print(f"{'=' * 60}")
        print(f"Duration: {int(elapsed // 60)}m {int(elapsed % 60)}s")
        print(f"Songs read: {len(result.songs)}")
        if result.validation and result.validation.issues:
            print(f"Validation issues: {len(result.validation.issues)}")
        if result.console_errors:
            print(f"Console errors: {len(result.console_errors)}")
        for shot in result.screenshots:
            print(f"Screenshot: {shot.path}")
        print(f"Result: {'PASS' if result.passed else 'FAIL'}")
        print(f"Report saved to: {output_path}")
        print(f"{'=' * 60}\n")

        return 0 if result.passed else 1

    except FileNotFoundError as e:
        logger.error("file_not_found", error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 2

    except ValueError as e:
        logger.error("validation_error", error=str(e))
        print(f"Validation Error: {e}", file=sys.stderr)
        return 3

    except KeyboardInterrupt:
        logger.info("interrupted_by_user")
        print("\nSmoke check interrupted by user.", file=sys.stderr)
        return 130

    except Exception as e:
        logger.exception("unexpected_error", error=str(e))
        print(f"Unexpected Error: {e}", file=sys.stderr)
        return 4


if __name__ == "__main__":
    sys.exit(main())
