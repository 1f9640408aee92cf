"""
Command line entry point for vol-dispatch.
"""

import argparse
import logging
import sys
from typing import Optional

from . import __version__
from .config import get_log_level, load_settings
from .coordinator import run_batch
from .exceptions import ConfigError, FatalInputError

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        prog="vol-dispatch",
        description="Run Volatility modules against a memory image in parallel",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Additional Information:
  - Enter/Return during execution prints the currently running modules
  - Each module's CSV output is written to <output-dir>/<image name>_<module>.csv
  - Settings can also come from VOL_DISPATCH_TOOL, VOL_DISPATCH_IMAGE,
    VOL_DISPATCH_MODULES, VOL_DISPATCH_OUTPUT_DIR and VOL_DISPATCH_PARALLELISM

Examples:
  vol-dispatch -p /path/to/vol -i /path/to/image.dd -m modules.txt -o /path/to/output/
  vol-dispatch -p vol -i image.raw -m modules.txt -o out/ -j 4
        """,
    )

    parser.add_argument("-p", "--tool", help="Path to the Volatility3 executable")
    parser.add_argument("-i", "--image", help="Path to the memory image")
    parser.add_argument(
        "-m",
        "--modules",
        help="Path to file containing list of modules (newline delimited)",
    )
    parser.add_argument("-o", "--output-dir", help="Path to the output directory")
    parser.add_argument(
        "-j",
        "--jobs",
        type=int,
        default=None,
        help="Maximum modules running at once (default: CPU count - 1, minimum 1)",
    )
    parser.add_argument(
        "--no-monitor",
        action="store_true",
        help="Don't listen on stdin for status requests",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    return parser.parse_args(argv)


def configure_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else getattr(logging, get_log_level(), logging.INFO)
    logging.basicConfig(
        level=level,
        stream=sys.stdout,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point. Returns the process exit status."""
    args = parse_args(argv)
    configure_logging(args.verbose)

    try:
        settings = load_settings(
            cli_tool=args.tool,
            cli_image=args.image,
            cli_modules=args.modules,
            cli_output_dir=args.output_dir,
            cli_parallelism=args.jobs,
        )
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        run_batch(settings, monitor=not args.no_monitor)
    except FatalInputError as e:
        logger.error(str(e))
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130

    return 0
