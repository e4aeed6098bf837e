#!/usr/bin/env python3
"""
tcforth - Threaded-code Forth interpreter

Usage:
1. Interactive REPL:          python main.py repl   (or no arguments)
2. Run a Forth source file:   python main.py program.fth
3. Run inline source:         python main.py -e ": sq dup * ; 7 sq ."

Errors stop the run and exit with status 1.
"""

import argparse
import logging
import os
import sys

from tcforth import ForthError, InteractiveForth
from tcforth.core import DEFAULT_MAX_DEPTH


logger = logging.getLogger('tcforth')


def default_max_depth():
    """Frame limit from TCFORTH_MAX_DEPTH, falling back to the built-in default"""
    value = os.environ.get('TCFORTH_MAX_DEPTH')
    if not value:
        return DEFAULT_MAX_DEPTH
    try:
        depth = int(value)
    except ValueError:
        logger.warning("ignoring TCFORTH_MAX_DEPTH=%r: not an integer", value)
        return DEFAULT_MAX_DEPTH
    if depth < 1:
        logger.warning("ignoring TCFORTH_MAX_DEPTH=%r: must be positive", value)
        return DEFAULT_MAX_DEPTH
    return depth


def positive_int(text):
    """argparse type for limits that must be at least 1"""
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}")
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1: {value}")
    return value


def build_parser():
    parser = argparse.ArgumentParser(prog='tcforth', description="Threaded-code Forth interpreter")
    parser.add_argument('program', nargs='?', help="Forth source file, or 'repl'")
    parser.add_argument('-e', '--eval', dest='source', help="Run SOURCE instead of a file")
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help="-v for INFO logging, -vv for DEBUG")
    parser.add_argument('--max-depth', type=positive_int, default=None,
                        help="Maximum word call nesting (default: $TCFORTH_MAX_DEPTH or %d)" % DEFAULT_MAX_DEPTH)
    return parser


def configure_logging(verbosity):
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    if verbosity >= 2:
        logging.getLogger().setLevel(logging.DEBUG)
    elif verbosity == 1:
        logging.getLogger().setLevel(logging.INFO)


def report(error):
    print(f"Error: {type(error).__name__}: {error}", file=sys.stderr)
    if error.backtrace:
        print("  in " + " -> ".join(error.backtrace), file=sys.stderr)


def main(argv=None):
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    max_depth = args.max_depth if args.max_depth is not None else default_max_depth()
    f = InteractiveForth(max_depth=max_depth)

    if args.source is not None:
        source, origin = args.source, '<eval>'
    elif args.program is None or args.program == 'repl':
        f.repl()
        return 0
    else:
        origin = args.program
        try:
            with open(origin, 'r', encoding='utf-8') as file:
                source = file.read()
        except (OSError, UnicodeDecodeError) as e:
            print(f"Error: cannot read {origin}: {e}", file=sys.stderr)
            return 1
        logger.info("loaded %s (%d bytes)", origin, len(source))

    try:
        f.execute(source)
    except ForthError as e:
        report(e)
        return 1
    finally:
        sys.stdout.flush()
    logger.info("finished %s, %d values left on the stack", origin, f.stack.depth())
    return 0


if __name__ == "__main__":
    sys.exit(main())
