import argparse
import logging
import sys
from typing import List, Optional

from likedsongs.core import (
    LikedSongsError,
    configure_logging,
    log_error,
)
from likedsongs.pipeline import PipelineOptions, run_pipeline


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Organize or analyse your Spotify liked songs by year",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                # One playlist per liked year
  %(prog)s --year 2023                    # Only 2023
  %(prog)s --start-year 2019 --end-year 2021
  %(prog)s --analyze --year 2023          # Sentiment/popularity report for 2023
  %(prog)s --clear-likes                  # Unlike every saved track
        """,
    )
    parser.add_argument(
        "--clear-likes",
        action="store_true",
        help="Only clear liked songs without creating playlists",
    )
    parser.add_argument(
        "--analyze",
        action="store_true",
        help="Analyse liked songs per year and month instead of creating playlists",
    )
    parser.add_argument(
        "--year",
        type=int,
        default=None,
        help="Process only songs from a specific year",
    )
    parser.add_argument(
        "--start-year",
        type=int,
        default=None,
        help="Start processing from this year",
    )
    parser.add_argument(
        "--end-year",
        type=int,
        default=None,
        help="End processing at this year",
    )
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory for analysis reports (default: ./analysis)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_arguments(argv)
    configure_logging(logging.DEBUG if args.verbose else None)

    opts = PipelineOptions(
        year=args.year,
        start_year=args.start_year,
        end_year=args.end_year,
        clear_likes=args.clear_likes,
        analyze=args.analyze,
        output_dir=args.output_dir,
    )

    try:
        run_pipeline(opts)
    except KeyboardInterrupt:
        log_error("Operation cancelled by user.")
        return 1
    except LikedSongsError as e:
        log_error(f"Error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
