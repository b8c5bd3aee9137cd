# coding: utf-8

import collections

import lroa.config
from lroa.errors import ValidationError, POLICY

MAX_ASN = 4294967295

family_width = {4: 32, 6: 128}


class Authorization(collections.namedtuple(
        "Authorization", ["prefix", "origin", "max_length", "sources"])):
    """A validated (prefix, origin, max_length) triple. `prefix` is always
    canonical and `prefix.prefixlen <= max_length <= width`."""
    __slots__ = ()

    @property
    def key(self):
        return (self.prefix, self.origin)


def subject(prefix, origin):
    return "{} AS{}".format(prefix, origin)


class Resolver(object):
    """Turns RegistryEntry values into Authorization values, applying the
    AS number and prefix policy of a lroa.config.Config."""

    def __init__(self, config=None):
        if config is None:
            config = lroa.config.Config()
        self.config = config

    def resolve_entry(self, entry, diagnostics=None):
        """Resolve a single entry. Raises ValidationError if the entry is
        rejected. Policy violations which only warn are recorded in
        `diagnostics`."""
        prefix = entry.prefix
        width = family_width[prefix.version]

        if prefix.ip != prefix.network:
            raise ValidationError(
                entry.source,
                "prefix {} has host bits set, expected {}".format(
                    prefix, prefix.cidr))

        if not 0 <= entry.origin <= MAX_ASN:
            raise ValidationError(
                entry.source,
                "AS{} is out of range [0, {}]".format(entry.origin, MAX_ASN))

        if entry.max_length is None:
            max_length = prefix.prefixlen
        elif not prefix.prefixlen <= entry.max_length <= width:
            raise ValidationError(
                entry.source,
                "max-length {} out of range [{}, {}] for {}".format(
                    entry.max_length, prefix.prefixlen, width, prefix))
        else:
            max_length = entry.max_length

        if self.config.is_reserved_asn(entry.origin):
            self._apply_policy(self.config.reserved_asn_action, entry,
                               "AS{} is reserved".format(entry.origin),
                               diagnostics)

        if not self.config.is_permitted_network(prefix):
            self._apply_policy(self.config.bogon_action, entry,
                               "{} is outside the permitted networks".format(
                                   prefix),
                               diagnostics)

        if self.config.weak_max_length:
            max_length = width

        return Authorization(prefix.cidr, entry.origin, max_length,
                             (entry.source,))

    def _apply_policy(self, action, entry, message, diagnostics):
        if action == "reject":
            raise ValidationError(entry.source, message)
        elif action == "warn" and diagnostics is not None:
            diagnostics.add(POLICY, entry.source, message)

    def resolve(self, entries, diagnostics):
        """Lazily resolve entries, skipping and recording rejected ones."""
        for entry in entries:
            try:
                yield self.resolve_entry(entry, diagnostics)
            except ValidationError as err:
                diagnostics.record(err)
