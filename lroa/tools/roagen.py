# coding: utf-8

import argparse
import datetime
import io
import logging
import sys

import lroa.config
import lroa.output
import lroa.pipeline
import lroa.source
from lroa.errors import FatalError

logger = logging.getLogger("lroa.roagen")


def build_argparser():
    argparser = argparse.ArgumentParser(
        description="Generate ROA tables from route objects")
    argparser.add_argument("files", nargs="*", type=str,
                           help="Files with RPSL route objects, '-' for stdin; "
                           "read the registry directory if omitted")
    argparser.add_argument("--database", "-D", type=str,
                           help="Path to registry")
    argparser.add_argument("--config", "-c", type=str,
                           help="Path to JSON configuration file")
    argparser.add_argument("-4", dest="version", action="store_const",
                           const=4, help="Only IPv4 ROAs")
    argparser.add_argument("-6", dest="version", action="store_const",
                           const=6, help="Only IPv6 ROAs")
    argparser.add_argument("--format", "-f", type=str,
                           choices=sorted(lroa.output.formats),
                           help="Output format")
    argparser.add_argument("--table", "-t", type=str,
                           help="Destination table (bird format)")
    argparser.add_argument("--flush", "-F", action="store_true",
                           default=False,
                           help="Flush table before adding entries (bird "
                           "format)")
    argparser.add_argument("--weak-maxlen", "-M", action="store_true",
                           default=False,
                           help="Do not enforce strict maximum lengths")
    argparser.add_argument("--build-time", type=str,
                           help="Build time recorded in JSON output, "
                           "defaults to now")
    argparser.add_argument("--output", "-o", type=str,
                           help="Write document to file instead of stdout")
    argparser.add_argument("--strict", action="store_true", default=False,
                           help="Exit with status 2 if any diagnostic was "
                           "produced")
    argparser.add_argument("--verbose", "-v", action="store_true",
                           default=False)
    argparser.add_argument("--quiet", "-q", action="store_true",
                           default=False)
    return argparser


def _stdin():
    if hasattr(sys.stdin, "buffer"):
        return io.TextIOWrapper(sys.stdin.buffer, encoding="utf-8",
                                errors="replace")
    return sys.stdin


def _text_blocks(files):
    for f in files:
        if f == "-":
            yield from lroa.source.read_text_blocks(_stdin(), name="stdin")
            continue
        with open(f, encoding="utf-8", errors="replace") as fh:
            yield from lroa.source.read_text_blocks(fh, name=f)


def _render_options(fmt, args, config):
    if fmt == "json":
        build_time = args.build_time
        if build_time is None:
            build_time = datetime.datetime.now(tz=datetime.timezone.utc)
        return {"build_time": build_time}
    elif fmt == "bird":
        return {"table": args.table or config.table, "flush": args.flush}
    return {}


def main(argv=sys.argv[1:]):
    argparser = build_argparser()
    args = argparser.parse_args(argv)

    level = logging.INFO
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    logging.basicConfig(level=level, stream=sys.stderr,
                        format="%(levelname)s %(name)s: %(message)s")

    try:
        config = lroa.config.load_config(args.config)
    except (OSError, ValueError) as err:
        logger.error("Invalid configuration: %s", err)
        return 1
    if args.weak_maxlen:
        config.weak_max_length = True

    if args.files:
        blocks = _text_blocks(args.files)
    else:
        blocks = lroa.source.FileSource(args.database or config.registry,
                                        route_dirs=config.route_dirs)

    try:
        result = lroa.pipeline.generate(blocks, config)
    except FatalError as err:
        logger.error("%s", err)
        return 1

    roas = result.roas
    if args.version is not None:
        roas = [roa for roa in roas if roa.version == args.version]

    fmt = args.format or config.format
    try:
        document = lroa.output.serialize(roas, fmt,
                                         **_render_options(fmt, args, config))
    except ValueError as err:
        logger.error("%s", err)
        return 1

    if args.output:
        with open(args.output, "w") as fh:
            fh.write(document)
    else:
        sys.stdout.write(document)

    if args.strict and result.diagnostics:
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
