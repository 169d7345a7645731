import argparse
import logging
import sys
from typing import List, Optional, Sequence

from prayerbook.core.config import Config
from prayerbook.core.errors import PrayerbookError
from prayerbook.prayers.task import MergeStoresTask, ScrapeLanguageTask

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'

logger = logging.getLogger(__name__)


def setup_basic_logging():
    """Setup basic stdout logging before config is loaded"""
    root_logger = logging.getLogger()
    if not root_logger.handlers:  # Only add handler if none exists
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(handler)
        root_logger.setLevel(logging.INFO)
        logging.debug("Basic logging initialized")


def setup_logging(config: Config) -> None:
    """Apply the logging section: level, plus a file handler when a file is configured"""
    log_config = config.section("logging")
    root_logger = logging.getLogger()
    level = getattr(logging, str(log_config.get("level") or "INFO").upper(), logging.INFO)
    root_logger.setLevel(level)

    log_file = log_config.get("file")
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(file_handler)


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not an integer")
    if number < 1:
        raise argparse.ArgumentTypeError(f"{value!r} must be a positive integer")
    return number


def store_list(value: str) -> List[str]:
    paths = [part.strip() for part in value.split(",") if part.strip()]
    if not paths:
        raise argparse.ArgumentTypeError("expected a comma separated list of db files")
    return paths


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="prayerbook",
        description="Scrape prayers for a language into a SQLite store, or merge stores",
    )
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument('--language', type=positive_int, metavar='ID',
                      help='Language to scrape')
    mode.add_argument('--merge', type=store_list, metavar='DB[,DB...]',
                      help='Comma separated list of db files')
    parser.add_argument('--config',
                        help='Path to config file (default: built-in defaults)')
    parser.add_argument('--output-dir',
                        help='Directory for written stores (overrides output.directory)')
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    setup_basic_logging()

    args = build_parser().parse_args(argv)

    try:
        config = Config(config_path=args.config)
        if args.output_dir:
            config.data["output"]["directory"] = args.output_dir
        setup_logging(config)

        if args.language is not None:
            ScrapeLanguageTask(config).run(args.language)
        else:
            MergeStoresTask(config).run(args.merge)
    except PrayerbookError as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
