"""localeid command line."""

import argparse
import importlib.resources
import logging
import sys
import traceback
from importlib.metadata import PackageNotFoundError, version
from logging.config import dictConfig
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import toml

from .accept_language import accept_language, parse_accept_language
from .bcp47 import from_language_tag, to_language_tag
from .builder import LocaleBuilder
from .canonicalize import canonicalize
from .config import LocaleIDConfig
from .download_data import CLDR_DOWNLOAD_VERSION, download_likely_subtags
from .exceptions import AcceptLanguageError, IllformedLocaleError, LocaleIDError
from .likely_subtags import add_likely_subtags, minimize_subtags
from .parser import get_name

try:
    __version__ = version("localeid")
except PackageNotFoundError:  # running from a source checkout
    __version__ = "unknown"


logger = logging.getLogger(__name__)
with (
    importlib.resources.as_file(
        importlib.resources.files("localeid").joinpath("logging.toml")
    ) as config_path,
    open(config_path, "rb") as f,
):
    log_config = toml.loads(f.read().decode("utf-8"))
dictConfig(log_config)

EXIT_OK = 0
EXIT_NO_MATCH = 1
EXIT_REJECTED = 2

# Subcommands that map each identifier argument to one output line.
CONVERSIONS: Dict[str, Tuple[str, Callable[[str], str]]] = {
    "name": ("print the normalized legacy name", get_name),
    "canonicalize": ("print the canonical legacy name", canonicalize),
    "tag": ("print the BCP47 language tag", to_language_tag),
    "maximize": (
        "add likely script and region subtags",
        lambda s: add_likely_subtags(s).name,
    ),
    "minimize": (
        "remove subtags that maximize would add back",
        lambda s: minimize_subtags(s).name,
    ),
}


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    :return: parsed arguments
    :rtype: argparse.Namespace
    """
    parser = argparse.ArgumentParser(
        description=__doc__.strip() if __doc__ else None,
        prog="localeid",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
        help="show version",
    )
    parser.add_argument("--verbose", action="store_true", help="enable verbose output")
    subparsers = parser.add_subparsers(dest="command", required=True)

    for command, (help_text, _) in CONVERSIONS.items():
        sub = subparsers.add_parser(command, help=help_text)
        sub.add_argument("ids", nargs="+", metavar="ID", help="locale identifier")

    from_tag = subparsers.add_parser("from-tag", help="convert BCP47 tags to legacy names")
    from_tag.add_argument("tags", nargs="+", metavar="TAG", help="language tag")
    from_tag.add_argument(
        "--strict",
        action="store_true",
        help="reject ill-formed tags instead of truncating them",
    )

    accept = subparsers.add_parser("accept", help="negotiate an Accept-Language value")
    accept.add_argument("header", help="Accept-Language header value")
    accept.add_argument(
        "-a",
        "--available",
        nargs="+",
        required=True,
        metavar="ID",
        help="available locales",
    )

    download = subparsers.add_parser("download", help="download CLDR likely subtags")
    download.add_argument(
        "--cldr-version",
        default=CLDR_DOWNLOAD_VERSION,
        help='CLDR release number or "latest"',
    )
    return parser.parse_args(argv)


def print_exception(exc: Exception, debug: bool) -> None:
    """
    Print an exception message to stderr, optionally including a stack trace.

    :param exc: The exception to print.
    :type exc: Exception
    :param debug: Whether to include a stack trace.
    :type debug: bool
    """
    if debug:
        traceback.print_exc()
    else:
        print(exc, file=sys.stderr)


def convert_all(values: List[str], convert: Callable[[str], str]) -> int:
    for value in values:
        print(convert(value))
    return EXIT_OK


def from_tags(tags: List[str], strict: bool, debug: bool) -> int:
    status = EXIT_OK
    for tag in tags:
        if not strict:
            print(from_language_tag(tag).name)
            continue
        try:
            print(LocaleBuilder().set_language_tag(tag).build().name)
        except IllformedLocaleError as exception:
            print_exception(exception, debug)
            status = EXIT_REJECTED
    return status


def negotiate(header: str, available: List[str], debug: bool) -> int:
    try:
        ranges = parse_accept_language(header)
    except AcceptLanguageError as exception:
        print_exception(exception, debug)
        return EXIT_REJECTED
    result = accept_language(ranges, available)
    if result.locale is None:
        print("no match", file=sys.stderr)
        return EXIT_NO_MATCH
    suffix = " (fallback)" if result.fallback else ""
    print(f"{result.locale.name}{suffix}")
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main function to parse arguments and run the selected command.

    :return: Exit status code
    :rtype: int
    """
    args = parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.command in CONVERSIONS:
        return convert_all(args.ids, CONVERSIONS[args.command][1])
    if args.command == "from-tag":
        return from_tags(args.tags, args.strict, args.verbose)
    if args.command == "accept":
        return negotiate(args.header, args.available, args.verbose)

    try:
        release_dir = download_likely_subtags(args.cldr_version, LocaleIDConfig.from_env())
    except (LocaleIDError, TimeoutError, ValueError) as exception:
        print_exception(exception, args.verbose)
        return EXIT_REJECTED
    print(release_dir)
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
