# coding: utf-8

import json
import logging
import os

import netaddr

logger = logging.getLogger(__name__)

CONFIG_PATH = "lroa.json"

ACTIONS = {"reject", "warn", "ignore"}

# AS0 (RFC 7607), AS_TRANS (RFC 6793), documentation (RFC 5398) and the
# last AS numbers of the 16 and 32 bit spaces (RFC 7300). Private use ranges
# are deliberately absent, DN42 lives in them.
DEFAULT_RESERVED_ASNS = [
    (0, 0),
    (23456, 23456),
    (64496, 64511),
    (65535, 65535),
    (65536, 65551),
    (4294967295, 4294967295),
]

defaults = {
    "registry": ".",
    "route_dirs": ["data/route", "data/route6"],
    "reserved_asns": DEFAULT_RESERVED_ASNS,
    "reserved_asn_action": "reject",
    "permitted_networks": [],
    "bogon_action": "reject",
    "weak_max_length": False,
    "format": "json",
    "table": None,
}


def parse_asn_range(value):
    """Parse an AS range given as an integer, a `[start, end]` pair or a
    string like `AS64496-AS64511`."""
    if isinstance(value, int):
        return (value, value)
    if isinstance(value, str):
        parts = [p.strip().upper().replace("AS", "")
                 for p in value.split("-", 1)]
        try:
            start, end = int(parts[0]), int(parts[-1])
        except ValueError:
            raise ValueError("Invalid AS range {!r}".format(value))
    else:
        try:
            start, end = (int(v) for v in value)
        except (TypeError, ValueError):
            raise ValueError("Invalid AS range {!r}".format(value))
    if start > end:
        raise ValueError("Invalid AS range {!r}: start after end".format(
            value))
    return (start, end)


class Config(object):
    """Policy and source settings of a generation run."""

    def __init__(self, **options):
        unknown = set(options) - set(defaults)
        if unknown:
            raise ValueError("Unknown configuration keys: {}".format(
                ", ".join(sorted(unknown))))
        settings = dict(defaults)
        settings.update(options)

        self.registry = settings["registry"]
        self.route_dirs = list(settings["route_dirs"])
        self.reserved_asns = [parse_asn_range(r)
                              for r in settings["reserved_asns"]]
        self.reserved_asn_action = self._action(
            "reserved_asn_action", settings["reserved_asn_action"])
        try:
            self.permitted_networks = netaddr.IPSet(
                settings["permitted_networks"])
        except (netaddr.AddrFormatError, ValueError, TypeError) as err:
            raise ValueError("Invalid permitted_networks: {}".format(err))
        self.bogon_action = self._action("bogon_action",
                                         settings["bogon_action"])
        self.weak_max_length = bool(settings["weak_max_length"])
        self.format = settings["format"]
        self.table = settings["table"]

    @staticmethod
    def _action(name, value):
        if value not in ACTIONS:
            raise ValueError("Expected {} to be one of {}, got {!r}".format(
                name, ", ".join(sorted(ACTIONS)), value))
        return value

    def is_reserved_asn(self, asn):
        return any(start <= asn <= end for start, end in self.reserved_asns)

    def is_permitted_network(self, network):
        if not self.permitted_networks.iter_cidrs():
            return True
        return network in self.permitted_networks

    @classmethod
    def from_file(cls, fh):
        data = json.load(fh)
        if not isinstance(data, dict):
            raise ValueError("Expected configuration to be a JSON object")
        return cls(**data)

    def __repr__(self):
        return "<Config registry={!r} format={!r}>".format(self.registry,
                                                         self.format)


def load_config(path=None):
    """Load configuration from `path`, the CONFIG_PATH environment variable
    or ./lroa.json. A missing default file yields the default
    configuration; a missing explicit file is an error."""
    explicit = path is not None or "CONFIG_PATH" in os.environ
    if path is None:
        path = os.environ.get("CONFIG_PATH", CONFIG_PATH)
    try:
        with open(path) as fh:
            config = Config.from_file(fh)
    except FileNotFoundError:
        if explicit:
            raise
        logger.debug("No configuration at %s, using defaults", path)
        return Config()
    logger.info("Loaded configuration from %s", path)
    return config
