# coding: utf-8

import collections
import re

import netaddr

import lroa.object
from lroa.errors import ParseError, UnsupportedObject, ROAError

route_classes = {"route": 4, "route6": 6}


class RegistryEntry(collections.namedtuple(
        "RegistryEntry",
        ["prefix", "origin", "max_length", "source", "object_class"])):
    """One (prefix, origin) pair declared by a route or route6 object.
    `max_length` is None when the object declares none."""
    __slots__ = ()

    @property
    def version(self):
        return self.prefix.version


def parse_asn(asn):
    """Parse an AS number of the form `AS<digits>` (or bare digits) into an
    integer. Returns None if the string is not an AS number."""
    asn = asn.strip()
    m = re.match(r"(?:AS)?([0-9]+)$", asn, re.IGNORECASE)
    if m:
        return int(m.group(1))


def parse_prefix(prefix, version=None):
    """Parse a CIDR prefix, keeping any host bits. Raises ValueError for
    strings which aren't a network in CIDR notation of the requested address
    family."""
    if not re.match(r"[^/]+/[0-9]+$", prefix.strip()):
        raise ValueError(
            "expected <address>/<prefix length>, got {!r}".format(prefix))
    try:
        network = netaddr.IPNetwork(prefix.strip())
    except (netaddr.AddrFormatError, ValueError, TypeError):
        raise ValueError("invalid network {!r}".format(prefix))
    if version is not None and network.version != version:
        raise ValueError("{!r} is not an IPv{} network".format(prefix,
                                                               version))
    return network


def _as_object(block):
    if isinstance(block, lroa.object.Object):
        return block
    return lroa.object.Object(block)


def _object_class(obj, source):
    if obj.getfirst("route") is not None:
        return "route"
    elif obj.getfirst("route6") is not None:
        return "route6"
    if not obj:
        raise ParseError(source, "route", "empty object")
    if "origin" in obj:
        # origin without prefix is a broken route object
        raise ParseError(source, "route", "missing attribute")
    return obj.object_class


def parse_block(source, block):
    """Turn one registry object into a list of RegistryEntry values, one per
    origin attribute.

    `block` may be a lroa.object.Object, a mapping of attribute names to a
    value or a list of values, or RPSL text. Raises ParseError for malformed
    route objects and UnsupportedObject for objects of other classes."""
    try:
        obj = _as_object(block)
    except (ValueError, TypeError) as err:
        raise ParseError(source, "object", str(err))

    object_class = _object_class(obj, source)
    if object_class not in route_classes:
        raise UnsupportedObject(
            source, "ignoring {} object".format(object_class))
    if "route" in obj and "route6" in obj:
        raise ParseError(source, object_class,
                         "both route and route6 attributes present")

    prefixes = obj.get(object_class)
    if len(prefixes) != 1:
        raise ParseError(source, object_class,
                         "expected exactly one prefix, got {}".format(
                             len(prefixes)))
    try:
        prefix = parse_prefix(prefixes[0], route_classes[object_class])
    except ValueError as verr:
        raise ParseError(source, object_class, str(verr))

    max_lengths = obj.get("max-length")
    if len(max_lengths) > 1:
        raise ParseError(source, "max-length",
                         "expected at most one value, got {}".format(
                             len(max_lengths)))
    max_length = None
    if max_lengths:
        if not re.match(r"[0-9]+$", max_lengths[0].strip()):
            raise ParseError(source, "max-length",
                             "invalid value {!r}".format(max_lengths[0]))
        max_length = int(max_lengths[0])

    origins = obj.get("origin")
    if not origins:
        raise ParseError(source, "origin", "missing attribute")
    entries = []
    for origin in origins:
        asn = parse_asn(origin)
        if asn is None:
            raise ParseError(source, "origin",
                             "invalid AS number {!r}".format(origin))
        entries.append(RegistryEntry(prefix, asn, max_length, source,
                                     object_class))
    return entries


def parse_entries(blocks, diagnostics):
    """Lazily parse `(source, block)` pairs into RegistryEntry values.
    Malformed and unsupported blocks are skipped and recorded in
    `diagnostics`."""
    for source, block in blocks:
        try:
            entries = parse_block(source, block)
        except ROAError as err:
            diagnostics.record(err)
            continue
        yield from entries
