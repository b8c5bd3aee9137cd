# coding: utf-8

import datetime
import json

import dateutil.parser
import netaddr

import lroa.parser
from lroa.merge import CanonicalROA


def group_by_family(roas):
    """Return a dict of address family version to sorted ROA list."""
    families = {4: [], 6: []}
    for roa in roas:
        families[roa.version].append(roa)
    for family in families.values():
        family.sort(key=CanonicalROA.sort_key)
    return families


def _ordered(roas):
    families = group_by_family(roas)
    return families[4] + families[6]


def format_build_time(build_time):
    if isinstance(build_time, (int, float)):
        build_time = datetime.datetime.fromtimestamp(
            build_time, tz=datetime.timezone.utc)
    elif isinstance(build_time, str):
        build_time = dateutil.parser.parse(build_time)
    if build_time.tzinfo is None:
        build_time = build_time.replace(tzinfo=datetime.timezone.utc)
    return build_time.astimezone(
        tz=datetime.timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def to_json(roas, build_time=None):
    """Render ROAs as an rpki-client compatible JSON document. The build
    time is only included when given."""
    families = group_by_family(roas)
    ordered = families[4] + families[6]
    metadata = {}
    if build_time is not None:
        metadata["buildtime"] = format_build_time(build_time)
    metadata.update({
        "counts": len(ordered),
        "roas": len(ordered),
        "ipv4": len(families[4]),
        "ipv6": len(families[6]),
    })
    document = {
        "metadata": metadata,
        "roas": [roa.as_dict() for roa in ordered],
    }
    return json.dumps(document, indent=2) + "\n"


def bird_roa(roa, table=None):
    appendum = ""
    if table:
        appendum = " table {}".format(table)
    return "add roa {prefix} max {max} as {autnum}".format(
        prefix=roa.prefix,
        max=roa.max_length,
        autnum=roa.origin) + appendum


def to_bird(roas, table=None, flush=False):
    """Render ROAs as BIRD 1.x `add roa` commands."""
    lines = []
    if flush:
        if table:
            lines.append("flush roa table {}".format(table))
        else:
            lines.append("flush roa")
    lines.extend(bird_roa(roa, table=table) for roa in _ordered(roas))
    return "".join(line + "\n" for line in lines)


def to_bird2(roas):
    """Render ROAs as BIRD 2 static ROA routes, to be included in a
    `roa4`/`roa6` table protocol."""
    return "".join(
        "route {} max {} as {};\n".format(roa.prefix, roa.max_length,
                                         roa.origin)
        for roa in _ordered(roas))


formats = {
    "json": to_json,
    "bird": to_bird,
    "bird2": to_bird2,
}


def serialize(roas, fmt="json", **options):
    try:
        formatter = formats[fmt]
    except KeyError:
        raise ValueError("Unknown output format {!r}, expected one of {}".format(
            fmt, ", ".join(sorted(formats))))
    return formatter(roas, **options)


def from_json(text):
    """Parse a JSON document as produced by to_json back into a tuple of
    metadata and a sorted list of CanonicalROA values. A present build time
    is returned as datetime."""
    document = json.loads(text)
    try:
        metadata = dict(document.get("metadata", {}))
        entries = document["roas"]
    except (AttributeError, KeyError, TypeError):
        raise ValueError("Expected a document with a 'roas' list")
    if "buildtime" in metadata:
        metadata["buildtime"] = dateutil.parser.parse(metadata["buildtime"])

    roas = []
    for entry in entries:
        try:
            prefix = netaddr.IPNetwork(entry["prefix"])
            asn = entry["asn"]
            if isinstance(asn, str):
                asn = lroa.parser.parse_asn(asn)
            max_length = int(entry["maxLength"])
        except (KeyError, TypeError, ValueError, netaddr.AddrFormatError):
            raise ValueError("Invalid ROA entry {!r}".format(entry))
        if asn is None:
            raise ValueError("Invalid AS number in ROA entry {!r}".format(
                entry))
        roas.append(CanonicalROA(prefix, int(asn), max_length, ()))
    roas.sort(key=CanonicalROA.sort_key)
    return metadata, roas
