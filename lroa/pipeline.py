# coding: utf-8

import logging

import lroa.config
import lroa.merge
import lroa.output
import lroa.parser
import lroa.resolver
from lroa.errors import DiagnosticLog, FatalError

logger = logging.getLogger(__name__)


class Result(object):
    """Outcome of one generation run: the sorted canonical ROAs and every
    diagnostic produced on the way."""

    def __init__(self, roas, diagnostics, blocks=0):
        self.roas = roas
        self.diagnostics = diagnostics
        self.blocks = blocks

    def render(self, fmt="json", **options):
        return lroa.output.serialize(self.roas, fmt, **options)

    def __iter__(self):
        return iter(self.roas)

    def __len__(self):
        return len(self.roas)

    def __repr__(self):
        return "<Result {} ROAs, {} diagnostics>".format(
            len(self.roas), len(self.diagnostics))


def _counted(blocks, counter):
    try:
        for block in blocks:
            counter[0] += 1
            yield block
    except OSError as err:
        raise FatalError("registry source unreadable: {}".format(err))


def generate(blocks, config=None, diagnostics=None):
    """Run the whole pipeline over `(object_id, block)` pairs.

    Raises FatalError if reading the source fails or it yields no block at
    all. Per-record problems never abort the run, they end up in the
    diagnostics of the returned Result."""
    if config is None:
        config = lroa.config.Config()
    if diagnostics is None:
        diagnostics = DiagnosticLog()

    counter = [0]
    entries = lroa.parser.parse_entries(_counted(blocks, counter),
                                        diagnostics)
    resolver = lroa.resolver.Resolver(config)
    authorizations = resolver.resolve(entries, diagnostics)
    roas = lroa.merge.merge(authorizations, diagnostics)

    if counter[0] == 0:
        raise FatalError("registry source yielded no objects")

    logger.info("Generated %d ROA entries from %d objects (%d diagnostics)",
                len(roas), counter[0], len(diagnostics))
    return Result(roas, list(diagnostics), blocks=counter[0])
