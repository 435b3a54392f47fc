import argparse
import logging
import re
import sys

import numpy as np

from msax.MSAX import run
from msax.logger import get_logger
from msax.symbols import symbols_to_text

logger = logging.getLogger(__name__)

MODE_NORMAL = "normal"
MODE_SILENT = "silent"


def build_parser():
    parser = argparse.ArgumentParser(
        prog="msax",
        description="This is a simple python implementation of MSAX",
        usage="%(prog)s (FILENAME | -i FILENAME | -s) [-w INT] [-a INT] [-f INT] [-m (normal | silent)]",
        formatter_class=argparse.RawTextHelpFormatter)

    parser.add_argument("filename", metavar="FILENAME", nargs="?", type=str,
                        help="The name of the input file from which to load the data.")

    parser.add_argument("-i", "--input", metavar="FILENAME", type=str,
                        help="The name of the input file from which to load the data.")

    parser.add_argument("-s", "--stream", action="store_true",
                        help="Read data from the standard input stream instead.")

    parser.add_argument("-w", "--windowsize", metavar="INT", type=int, default=100,
                        help="Choose the sliding window size [default: 100].")

    parser.add_argument("-a", "--alphabetsize", metavar="INT", type=int, default=8,
                        help="Select the size of the alphabet used for the lowdimensional approximation [default: 8].")

    parser.add_argument("-f", "--framesize", metavar="INT", type=int, default=10,
                        help="""Select the frame size of the dimensionality reduction, i.e. the amount 
of time series data points per symbol [default: 10].""")

    parser.add_argument("-m", "--mode", type=str, default=MODE_NORMAL, choices=[MODE_NORMAL, MODE_SILENT],
                        help="Select the mode of the output [default: normal].")

    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log the progress of the conversion on the standard error stream.")

    return parser


def parse_args(parser, argv=None):
    args = parser.parse_args(argv)

    if args.filename is not None and args.input is not None:
        parser.error("argument -i/--input: the input file is given twice")
    if args.filename is not None:
        args.input = args.filename

    if args.input is not None and args.stream:
        parser.error("option 'input' is ambiguous: use either an input file or -s/--stream")
    if args.input is None and not args.stream:
        parser.error("the option 'input' is required but missing")

    for name in ["windowsize", "alphabetsize", "framesize"]:
        value = getattr(args, name)
        if value < 1:
            parser.error(f"argument --{name}: invalid value {value}, must be at least 1")

    return args


_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def read_series(stream):
    """Whitespace separated floats, up to the first character that cannot continue a number.

    Like ``istream >> double``: ``1.5abc`` yields ``1.5`` and stops, ``nan``/``inf`` stop the reading.
    """
    values = []
    for line in stream:
        for token in line.split():
            match = _NUMBER.match(token)
            if match is not None:
                values.append(float(match.group()))
            if match is None or match.end() != len(token):
                logger.warning("stopped reading at the non-numeric token '%s'", token)
                return np.array(values, dtype=float)

    return np.array(values, dtype=float)


def main(argv=None):
    parser = build_parser()
    args = parse_args(parser, argv)
    get_logger("msax", level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.stream:
        series = read_series(sys.stdin)
    else:
        try:
            with open(args.input, "r") as fd:
                series = read_series(fd)
        except OSError:
            parser.error(f"argument input: invalid value '{args.input}'")
    logger.info("read %d values", len(series))

    try:
        output = run(series, args.alphabetsize, args.framesize, args.windowsize, verbose=args.verbose)
    except ValueError as e:
        parser.error(str(e))

    if args.mode != MODE_SILENT:
        sys.stdout.write(symbols_to_text(output))
        sys.stdout.flush()

    return 0


if __name__ == "__main__":
    sys.exit(main())
