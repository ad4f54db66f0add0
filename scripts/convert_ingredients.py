import argparse
import logging
import sys
from typing import List, Optional, TextIO

from yummio.core.logging_config import setup_logging
from yummio.models import MeasurementSystem
from yummio.services.ingredient_converter import convert_ingredient_list


def read_lines(handle: TextIO) -> List[str]:
    return [line.rstrip("\r\n") for line in handle if line.strip()]


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Convert ingredient measurements between metric and imperial."
    )
    parser.add_argument("file", nargs="?", help="Text file with one ingredient per line (default: stdin)")
    parser.add_argument(
        "--system",
        choices=[s.value for s in MeasurementSystem],
        default=MeasurementSystem.METRIC.value,
        help="Target measurement system"
    )
    args = parser.parse_args(argv)

    setup_logging(logging.WARNING)

    if args.file:
        with open(args.file, "r", encoding="utf-8") as handle:
            lines = read_lines(handle)
    else:
        lines = read_lines(sys.stdin)

    for line in convert_ingredient_list(lines, args.system):
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
