# coding: utf-8

import collections
import logging

from lroa.errors import CONFLICT
from lroa.resolver import subject

logger = logging.getLogger(__name__)


class CanonicalROA(collections.namedtuple(
        "CanonicalROA", ["prefix", "origin", "max_length", "sources"])):
    """Final ROA entry, unique by (prefix, origin) within a table."""
    __slots__ = ()

    @property
    def version(self):
        return self.prefix.version

    def sort_key(self):
        return _group_order((self.prefix, self.origin))

    def as_dict(self):
        return {
            "prefix": str(self.prefix),
            "maxLength": self.max_length,
            "asn": self.origin,
        }


def _group_order(key):
    prefix, origin = key
    return (prefix.version, prefix.value, prefix.prefixlen, origin)


def merge(authorizations, diagnostics):
    """Collapse authorizations with equal (prefix, origin) into one
    CanonicalROA each and return them sorted.

    This consumes all authorizations before producing anything. Groups with
    differing max-lengths resolve to the largest one and are recorded as a
    conflict in `diagnostics`."""
    groups = collections.defaultdict(list)
    for auth in authorizations:
        groups[auth.key].append(auth)

    roas = []
    for prefix, origin in sorted(groups, key=_group_order):
        group = groups[(prefix, origin)]
        max_lengths = sorted({auth.max_length for auth in group})
        sources = tuple(sorted({source for auth in group
                                for source in auth.sources}))
        if len(max_lengths) > 1:
            diagnostics.add(
                CONFLICT, subject(prefix, origin),
                "conflicting max-length values {} from {}, using {}".format(
                    ", ".join(map(str, max_lengths)),
                    ", ".join(map(str, sources)), max_lengths[-1]))
        elif len(group) > 1:
            logger.debug("Merged %d duplicate authorizations for %s",
                         len(group), subject(prefix, origin))
        roas.append(CanonicalROA(prefix, origin, max_lengths[-1], sources))

    return roas
