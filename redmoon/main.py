"""redmoon -- poke at Redmoon Online sprite files."""
import argparse
import logging
from pathlib import Path
import sys

import redmoon.db
import redmoon.db.load
from redmoon.defaults import get_default_db_uri_with_origin
from redmoon.extract.lib.base import FormatError
from redmoon.extract.rle import extract_pngs, read_rle_file

log = logging.getLogger(__name__)


def get_session(args):
    """Given parsed arguments, connects to the database and returns a
    session.
    """
    if args.engine_uri:
        engine_uri = args.engine_uri
        got_from = 'command line'
    else:
        engine_uri, got_from = get_default_db_uri_with_origin()

    session = redmoon.db.connect(engine_uri)
    log.info("Connected to database %s (from %s)",
        session.get_bind().url, got_from)
    return session


def _parse_color(value):
    try:
        color = int(value, 16)
    except ValueError:
        raise argparse.ArgumentTypeError(
            "{!r} is not a hex color".format(value))
    if not 0 <= color <= 0xffff:
        raise argparse.ArgumentTypeError(
            "{!r} doesn't fit in 16 bits".format(value))
    return color


def do_inspect(args):
    rle = read_rle_file(args.path, args.file_number, strict=args.strict)
    print("file {}: unknown header value {:#010x}, {} slots, {} sprites"
        .format(rle.file_number, rle.unknown, len(rle.offsets), len(rle)))
    for sprite in rle:
        print("{:5d}  @{:<8d}  {:>5d}x{:<5d}  origin ({}, {}){}".format(
            sprite.index, sprite.offset, sprite.width, sprite.height,
            sprite.offset_x, sprite.offset_y,
            "  (oversized)" if sprite.is_sentinel else ""))


def do_extract(args):
    rle = read_rle_file(args.path, args.file_number, strict=args.strict)
    dest = Path(args.dest)
    dest.mkdir(parents=True, exist_ok=True)
    for path in extract_pngs(rle, dest, transparent=args.transparent):
        print("wrote", path)


def do_load(args):
    session = get_session(args)
    count = redmoon.db.load.load(
        session, args.root, kinds=args.kinds,
        drop_tables=args.drop_tables, strict=args.strict)
    print("Loaded {} sprites.".format(count))


def do_status(args):
    if args.engine_uri:
        print("Database {} (from command line)".format(args.engine_uri))
    else:
        print("Database {} (from {})".format(*get_default_db_uri_with_origin()))


def make_arg_parser():
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('-v', '--verbose', dest='verbosity',
        action='store_const', const=logging.DEBUG, default=logging.INFO,
        help='print debugging output')
    common.add_argument('-q', '--quiet', dest='verbosity',
        action='store_const', const=logging.WARNING,
        help='only print warnings and errors')

    p = argparse.ArgumentParser(prog='redmoon')
    sp = p.add_subparsers(metavar='command')
    sp.required = True

    def add_decode_args(subparser):
        subparser.add_argument('--file-number', type=int, default=None,
            help='file number to tag sprites with (default: from file name)')
        subparser.add_argument('--strict', action='store_true',
            help="reject paint runs that don't fit in their row")

    def add_engine_arg(subparser):
        subparser.add_argument('-e', '--engine', dest='engine_uri',
            default=None,
            help='database URI (default: $REDMOON_DB_ENGINE, or '
                 './rm.sqlite)')

    inspect_p = sp.add_parser('inspect', parents=[common],
        help='list the sprites in a resource file')
    inspect_p.set_defaults(cb=do_inspect)
    inspect_p.add_argument('path', help='path to an .rle file')
    add_decode_args(inspect_p)

    extract_p = sp.add_parser('extract', parents=[common],
        help='write the sprites in a resource file out as PNGs')
    extract_p.set_defaults(cb=do_extract)
    extract_p.add_argument('path', help='path to an .rle file')
    extract_p.add_argument('dest', help='directory to write PNGs into')
    extract_p.add_argument('--transparent', type=_parse_color, default=None,
        help='packed color (hex) to make transparent, e.g. 0 or f81f')
    add_decode_args(extract_p)

    load_p = sp.add_parser('load', parents=[common],
        help='load a whole data directory into a database')
    load_p.set_defaults(cb=do_load)
    load_p.add_argument('root',
        help='directory holding the Bul, Ico, Obj, Tle and Int folders')
    load_p.add_argument('kinds', nargs='*',
        help='sprite kinds to load, e.g. Icons or T* (default: all)')
    load_p.add_argument('-D', '--drop-tables', action='store_true',
        help='drop existing tables first')
    load_p.add_argument('--strict', action='store_true',
        help="reject paint runs that don't fit in their row")
    add_engine_arg(load_p)

    status_p = sp.add_parser('status', parents=[common],
        help='print which database would be used')
    status_p.set_defaults(cb=do_status)
    add_engine_arg(status_p)

    return p


def main(args=None):
    if args is None:
        args = sys.argv[1:]

    parser = make_arg_parser()
    args = parser.parse_args(args)
    logging.basicConfig(level=args.verbosity,
        format='%(levelname)s: %(name)s: %(message)s')

    try:
        args.cb(args)
    except FormatError as exc:
        print("{}: {}: {}".format(
            getattr(args, 'path', getattr(args, 'root', '')),
            type(exc).__name__, exc), file=sys.stderr)
        return 1

    return 0


def setuptools_entry():
    sys.exit(main())


if __name__ == '__main__':
    sys.exit(main())
