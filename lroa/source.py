# coding: utf-8

import logging
import os

import lroa.object
from lroa.errors import FatalError

logger = logging.getLogger(__name__)


class FileSource(object):
    """Registry objects stored one per file, in a directory per object
    class, as in the DN42 registry (`data/route/172.20.0.0_24`).

    Iterating yields `(object_id, text)` pairs where object_id is
    `<class directory>/<file name>`. Parsing the text is left to
    lroa.parser, which reports broken files instead of failing."""

    def __init__(self, path, route_dirs=("data/route", "data/route6")):
        self._path = path
        self.route_dirs = list(route_dirs)

    def _build_path(self, directory, name=None):
        if name is None:
            return os.path.join(self._path, directory)
        return os.path.join(self._path, directory, name)

    def lookup(self):
        """List object specifications as tuples of directory and file name.
        Raises FatalError if no directory is readable."""
        specs = []
        readable = 0
        for directory in self.route_dirs:
            try:
                names = sorted(os.listdir(self._build_path(directory)))
            except OSError as err:
                logger.warning("Can't read %s: %s",
                               self._build_path(directory), err)
                continue
            readable += 1
            logger.info("Discovered %d record files in %s", len(names),
                        directory)
            for name in names:
                if name[0] == ".":
                    continue
                if os.path.isfile(self._build_path(directory, name)):
                    specs.append((directory, name))
        if not readable:
            raise FatalError("no readable route directory in {}".format(
                ", ".join(self._build_path(d) for d in self.route_dirs)),
                subject=self._path)
        return specs

    def object_id(self, directory, name):
        return "{}/{}".format(os.path.basename(directory.rstrip("/")), name)

    def fetch(self, directory, name):
        """Return the raw text of an object file."""
        path = self._build_path(directory, name)
        with open(path, encoding="utf-8", errors="replace") as fh:
            return fh.read()

    def __iter__(self):
        for directory, name in self.lookup():
            yield self.object_id(directory, name), self.fetch(directory, name)


def read_text_blocks(lines, name="-"):
    """Split a stream of RPSL text containing several objects separated by
    empty lines into `(object_id, text)` pairs. Object ids are
    `<name>#<index>`, counting objects only; blocks consisting of nothing
    but comments, like the header of a database dump, are skipped."""
    blocks = lroa.object.split_objects(lines)
    blocks = (block for block in blocks
              if not lroa.object.is_comment_block(block))
    for index, block in enumerate(blocks, 1):
        text = "\n".join(line.rstrip("\r\n") for line in block)
        yield "{}#{}".format(name, index), text
