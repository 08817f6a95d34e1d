import argparse
import json
import logging
import sys

from pyparsing import ParseException

from pawnfmt.formatter import Formatter
from pawnfmt.parser import Parser
from pawnfmt.syntax import DecodeError
from pawnfmt.writer import Settings

logger = logging.getLogger(__name__)


def log_level(s):
    """Converts a string to a valid logging level"""
    numeric_level = getattr(logging, s.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError('Invalid log level: {}'.format(s))
    return numeric_level


def read_source(ifile: str) -> bytes:
    logger.debug('Reading %s', ifile)
    with open(ifile, 'rb') as f:
        return f.read()


def parse(ifile: str):
    ofile = ifile + '.json'
    tree = Parser().parse_program(read_source(ifile))
    with open(ofile, 'w') as f:
        json.dump(tree.to_dict(), f, indent=1)
    logger.info('Wrote %s', ofile)


def report(diagnostics) -> None:
    if diagnostics:
        print("Found diagnostics:", file=sys.stderr)
        for diagnostic in diagnostics:
            print("-", diagnostic, file=sys.stderr)


def format_file(ifile: str, settings: Settings, ofile=None) -> str:
    source = read_source(ifile)
    formatter = Formatter(settings)
    output = formatter.format_source(source)
    report(formatter.diagnostics)
    if ofile is None:
        sys.stdout.write(output)
    else:
        with open(ofile, 'w', encoding='utf-8') as f:
            f.write(output)
        logger.info('Wrote %s', ofile)
    return output


def check_file(ifile: str, settings: Settings) -> bool:
    source = read_source(ifile)
    formatter = Formatter(settings)
    output = formatter.format_source(source)
    report(formatter.diagnostics)
    if output.encode('utf-8') != source:
        print(f"{ifile} is not formatted", file=sys.stderr)
        return False
    return True


def main(argv=None) -> int:
    arg_parser = argparse.ArgumentParser(description="Declaration formatter for Pawn sources")
    arg_parser.add_argument(
        '--log', help='Log level (info,debug,warning)', metavar='log-level',
        type=log_level, default='warning')
    arg_parser.add_argument('--verbose', '-v', action='count', default=0)
    subparsers = arg_parser.add_subparsers(dest="command", required=True)

    parse_parser = subparsers.add_parser("parse", help="Parse source into a JSON tree dump")
    parse_parser.add_argument("input", help="Input source file")

    style_options = argparse.ArgumentParser(add_help=False)
    style_options.add_argument("--indent-size", type=int, default=4)
    style_options.add_argument("--use-tabs", action="store_true")
    style_options.add_argument("--max-blank-lines", type=int, default=1)

    format_parser = subparsers.add_parser(
        "format", parents=[style_options], help="Format a source file"
    )
    format_parser.add_argument("input", help="Input source file")
    output_group = format_parser.add_mutually_exclusive_group()
    output_group.add_argument("-o", "--output", help="Output file, stdout when omitted")
    output_group.add_argument("--in-place", action="store_true", help="Overwrite the input file")

    check_parser = subparsers.add_parser(
        "check", parents=[style_options], help="Fail when a source file is not formatted"
    )
    check_parser.add_argument("input", help="Input source file")

    args = arg_parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose > 0 else args.log,
        format='%(levelname)s %(name)s: %(message)s',
    )

    try:
        if args.command == "parse":
            parse(args.input)
            return 0
        settings = Settings(
            indent_size=args.indent_size,
            use_tabs=args.use_tabs,
            max_blank_lines=args.max_blank_lines,
        )
        if args.command == "format":
            ofile = args.input if args.in_place else args.output
            format_file(args.input, settings, ofile)
            return 0
        elif args.command == "check":
            return 0 if check_file(args.input, settings) else 1
    except ParseException as exc:
        logger.error('%s: %s', args.input, exc)
    except DecodeError as exc:
        logger.error('%s: %s', args.input, exc)
    except OSError as exc:
        logger.error('Cannot access file: %s', exc)
    return 1


if __name__ == '__main__':
    sys.exit(main())
