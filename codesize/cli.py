import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from codesize.core.common.enums import CollectorKind, MetricKind, WalkStrategy
from codesize.core.config.settings import settings
from codesize.core.errors import CodesizeError
from codesize.features.code_scanner.domain.models import ScanRequest
from codesize.features.code_scanner.service.scanner import CodeSizeScanner

logger = logging.getLogger("codesize")

EXIT_OK = 0
EXIT_SCAN_FAILED = 1

def build_parser() -> argparse.ArgumentParser:
    # -h is taken by human-readable output, so help lives on --help only
    parser = argparse.ArgumentParser(
        prog="codesize",
        description="Counts lines of code (or bytes, or files) per file extension.",
        add_help=False,
    )
    parser.add_argument("--help", action="help", help="Show this help message and exit")

    metric = parser.add_mutually_exclusive_group()
    metric.add_argument("-s", "--size", action="store_true", help="Sum file size")
    metric.add_argument("-c", "--count", action="store_true", help="Count files")

    parser.add_argument("-h", dest="human_readable", action="store_true", help="Output human-readable numbers")
    parser.add_argument("--git", action="store_true", help="Only look at files in the git index")
    parser.add_argument("-l", "--largest", type=int, metavar="N", help="Output the N largest files per type")
    parser.add_argument("--ext", action="append", default=[], metavar="EXT",
                        help="Only count files with this extension (repeatable)")
    parser.add_argument("--strategy", choices=[s.value for s in WalkStrategy], default=WalkStrategy.DESCRIPTOR.value,
                        help="How directory entries are classified")
    parser.add_argument("--async", dest="concurrent", action="store_true", help="Scan files concurrently")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")
    parser.add_argument("directory", nargs="?", default=".", metavar="DIRECTORY", help="Base directory")
    return parser

def request_from_args(args: argparse.Namespace) -> ScanRequest:
    if args.size:
        metric = MetricKind.BYTES
    elif args.count:
        metric = MetricKind.FILES
    else:
        metric = MetricKind.LINES

    return ScanRequest(
        root_path=Path(args.directory),
        metric=metric,
        collector=CollectorKind.TOP_K if args.largest is not None else CollectorKind.SUM,
        largest=args.largest,
        # Accept both "py" and ".py"
        extensions=frozenset(ext[1:] if ext.startswith(".") else ext for ext in args.ext),
        human_readable=args.human_readable,
        strategy=WalkStrategy(args.strategy),
        use_git=args.git,
        concurrent=args.concurrent,
    )

def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if verbose else settings.LOG_LEVEL,
        format="%(levelname)s %(name)s: %(message)s",
    )

def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.largest is not None and args.largest < 0:
        parser.error("--largest must not be negative")

    try:
        CodeSizeScanner().run(request_from_args(args), sys.stdout)
    except CodesizeError as e:
        logger.error(str(e))
        return EXIT_SCAN_FAILED
    return EXIT_OK
