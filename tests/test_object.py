"""Tests for the RPSL object reader in lroa.object."""

import pytest

from lroa.object import Object, is_comment_block, parse_object, split_objects


class TestParseObject:
    def test_keys_are_folded_and_stripped(self):
        result = parse_object(["Route:   10.0.0.0/24", "ORIGIN :AS64512"])
        assert result == [("route", "10.0.0.0/24"), ("origin", "AS64512")]

    def test_ipv6_values_keep_colons(self):
        assert parse_object(["route6: fd00::/48"]) == [("route6", "fd00::/48")]

    def test_comments_are_removed(self):
        result = parse_object([
            "% generated object",
            "route: 10.0.0.0/24 % trailing comment",
            "source: DN42 # flags",
        ])
        assert result == [("route", "10.0.0.0/24"), ("source", "DN42")]

    def test_continuation_lines(self):
        result = parse_object(["descr: first", "  second", "+", "\tthird"])
        assert result == [("descr", "first\nsecond\n\nthird")]

    def test_missing_colon_raises(self):
        with pytest.raises(ValueError):
            parse_object(["route 10.0.0.0/24"])

    def test_leading_continuation_raises(self):
        with pytest.raises(ValueError):
            parse_object(["  dangling"])

    def test_empty_lines_are_skipped(self):
        assert parse_object(["", "   ", "route: 10.0.0.0/24"]) == [
            ("route", "10.0.0.0/24")]


class TestParseObjects:
    TEXT = [
        "route: 10.0.0.0/24\n",
        "origin: AS64512\n",
        "\n",
        "\n",
        "route6: fd00::/48\n",
        "origin: AS64513\n",
    ]

    def test_split_at_empty_lines(self):
        assert len(list(split_objects(self.TEXT))) == 2

    def test_objects_in_order(self):
        objects = [Object(parse_object(lines))
                   for lines in split_objects(self.TEXT)]
        assert [o.object_class for o in objects] == ["route", "route6"]
        assert objects[1].getfirst("origin") == "AS64513"

    def test_comment_blocks(self):
        assert is_comment_block(["% RPSL dump header\n", "#\n", "  \n"])
        assert not is_comment_block(["% header\n", "route: 10.0.0.0/24\n"])


class TestObject:
    def test_from_mapping_with_lists(self):
        obj = Object({"route": "10.0.0.0/24", "origin": ["AS1", "AS2"]})
        assert obj.object_class == "route"
        assert obj.object_key == "10.0.0.0/24"
        assert obj.get("origin") == ["AS1", "AS2"]

    def test_from_text(self):
        obj = Object("route: 10.0.0.0/24\norigin: AS1\n")
        assert obj.get("ORIGIN") == ["AS1"]
        assert "Origin" in obj

    def test_getfirst(self):
        obj = Object([("route", "10.0.0.0/24")])
        assert obj.getfirst("max-length") is None
        assert obj.getfirst("max-length", default="24") == "24"

    def test_repeated_keys_keep_order(self):
        obj = Object([("route", "10.0.0.0/24"), ("origin", "AS1"),
                      ("origin", "AS2")])
        assert obj.get("origin") == ["AS1", "AS2"]
        assert list(obj.keys()) == ["route", "origin", "origin"]

    def test_scalar_mapping_values(self):
        obj = Object({"route": "10.0.0.0/24", "max-length": 28,
                      "descr": None})
        assert obj.get("max-length") == ["28"]
        assert obj.get("descr") == ["None"]

    def test_empty_object_is_falsy(self):
        assert not Object()
        assert "empty" in repr(Object())
