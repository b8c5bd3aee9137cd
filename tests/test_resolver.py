"""Tests for validation and max-length resolution in lroa.resolver."""

import netaddr
import pytest

from lroa.config import Config
from lroa.errors import ValidationError, POLICY, VALIDATION_ERROR
from lroa.parser import RegistryEntry
from lroa.resolver import Resolver


def entry(prefix, origin=4242423914, max_length=None, source="test"):
    network = netaddr.IPNetwork(prefix)
    object_class = "route" if network.version == 4 else "route6"
    return RegistryEntry(network, origin, max_length, source, object_class)


class TestCanonicalPrefix:
    def test_host_bits_rejected(self):
        with pytest.raises(ValidationError) as excinfo:
            Resolver().resolve_entry(entry("192.0.2.1/24"))
        assert "host bits" in excinfo.value.message

    def test_canonical_accepted(self):
        auth = Resolver().resolve_entry(entry("192.0.2.0/24"))
        assert str(auth.prefix) == "192.0.2.0/24"

    def test_ipv6_host_bits_rejected(self):
        with pytest.raises(ValidationError):
            Resolver().resolve_entry(entry("fd00::1/48"))


class TestMaxLength:
    def test_defaults_to_prefix_length(self):
        assert Resolver().resolve_entry(entry("10.0.0.0/24")).max_length == 24

    def test_declared_value_is_used(self):
        auth = Resolver().resolve_entry(entry("10.0.0.0/24", max_length=28))
        assert auth.max_length == 28

    def test_family_width_is_allowed(self):
        auth = Resolver().resolve_entry(entry("fd00::/48", max_length=128))
        assert auth.max_length == 128

    @pytest.mark.parametrize("prefix,max_length", [
        ("10.0.0.0/24", 23),
        ("10.0.0.0/24", 33),
        ("fd00::/48", 47),
        ("fd00::/48", 129),
    ])
    def test_out_of_range_is_rejected(self, prefix, max_length):
        with pytest.raises(ValidationError):
            Resolver().resolve_entry(entry(prefix, max_length=max_length))

    def test_weak_max_length(self):
        resolver = Resolver(Config(weak_max_length=True))
        assert resolver.resolve_entry(entry("10.0.0.0/24")).max_length == 32
        assert resolver.resolve_entry(entry("fd00::/48")).max_length == 128


class TestOrigin:
    def test_out_of_range(self):
        with pytest.raises(ValidationError):
            Resolver().resolve_entry(entry("10.0.0.0/24", origin=2 ** 32))

    def test_dn42_private_range_is_allowed(self):
        auth = Resolver().resolve_entry(entry("10.0.0.0/24",
                                              origin=4242423914))
        assert auth.origin == 4242423914

    @pytest.mark.parametrize("origin", [0, 23456, 64496, 65535, 65551,
                                        4294967295])
    def test_reserved_rejected_by_default(self, origin):
        with pytest.raises(ValidationError):
            Resolver().resolve_entry(entry("10.0.0.0/24", origin=origin))

    def test_reserved_warn(self, diagnostics):
        resolver = Resolver(Config(reserved_asn_action="warn"))
        auth = resolver.resolve_entry(entry("10.0.0.0/24", origin=0),
                                      diagnostics)
        assert auth.origin == 0
        assert diagnostics.count(POLICY) == 1

    def test_reserved_ignore(self, diagnostics):
        resolver = Resolver(Config(reserved_asn_action="ignore"))
        resolver.resolve_entry(entry("10.0.0.0/24", origin=0), diagnostics)
        assert len(diagnostics) == 0

    def test_custom_reserved_ranges(self):
        resolver = Resolver(Config(reserved_asns=["AS4242420000-AS4242420099"]))
        with pytest.raises(ValidationError):
            resolver.resolve_entry(entry("10.0.0.0/24", origin=4242420010))
        assert resolver.resolve_entry(entry("10.0.0.0/24", origin=0))


class TestPermittedNetworks:
    def test_all_networks_permitted_by_default(self):
        assert Resolver().resolve_entry(entry("198.51.100.0/24"))

    def test_outside_rejected(self):
        resolver = Resolver(Config(permitted_networks=["172.20.0.0/14",
                                                       "fd00::/8"]))
        with pytest.raises(ValidationError):
            resolver.resolve_entry(entry("10.0.0.0/24"))
        assert resolver.resolve_entry(entry("172.20.1.0/24"))
        assert resolver.resolve_entry(entry("fd42::/48"))

    def test_outside_warn(self, diagnostics):
        resolver = Resolver(Config(permitted_networks=["172.20.0.0/14"],
                                   bogon_action="warn"))
        assert resolver.resolve_entry(entry("10.0.0.0/24"), diagnostics)
        assert diagnostics.of_kind(POLICY)[0].subject == "test"


class TestResolve:
    def test_invalid_entries_become_diagnostics(self, diagnostics):
        entries = [
            entry("10.0.0.0/24", source="a"),
            entry("10.0.0.1/24", source="b"),
            entry("10.0.1.0/24", max_length=8, source="c"),
            entry("fd00::/48", source="d"),
        ]
        auths = list(Resolver().resolve(entries, diagnostics))
        assert [a.sources for a in auths] == [("a",), ("d",)]
        assert diagnostics.count(VALIDATION_ERROR) == 2
        assert {d.subject for d in diagnostics} == {"b", "c"}

    def test_bounds_hold_for_all_authorizations(self, diagnostics):
        entries = [entry("10.0.0.0/{}".format(length), max_length=m)
                   for length in (8, 16, 24, 32)
                   for m in (None, 0, 16, 24, 32, 40)]
        for auth in Resolver().resolve(entries, diagnostics):
            width = 32 if auth.prefix.version == 4 else 128
            assert auth.prefix.prefixlen <= auth.max_length <= width
