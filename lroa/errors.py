# coding: utf-8

import collections
import logging

logger = logging.getLogger(__name__)

PARSE_ERROR = "parse-error"
VALIDATION_ERROR = "validation-error"
CONFLICT = "conflict"
UNSUPPORTED_OBJECT = "unsupported-object"
POLICY = "policy"


class ROAError(Exception):
    """Base class for errors raised while generating ROA tables."""
    kind = None

    def __init__(self, subject, message):
        Exception.__init__(self, subject, message)
        self.subject = subject
        self.message = message

    def __str__(self):
        return "{}: {}".format(self.subject, self.message)


class ParseError(ROAError):
    """A registry object lacks a required attribute or carries one that
    can't be parsed."""
    kind = PARSE_ERROR

    def __init__(self, subject, attribute, message):
        ROAError.__init__(self, subject,
                          "{}: {}".format(attribute, message))
        self.attribute = attribute


class UnsupportedObject(ROAError):
    kind = UNSUPPORTED_OBJECT


class ValidationError(ROAError):
    """A parsed entry violates a registry or address family constraint."""
    kind = VALIDATION_ERROR


class FatalError(ROAError):
    """The registry source is unusable. No document is produced."""

    def __init__(self, message, subject=None):
        ROAError.__init__(self, subject, message)

    def __str__(self):
        if self.subject is None:
            return self.message
        return ROAError.__str__(self)


class Diagnostic(collections.namedtuple("Diagnostic",
                                        ["kind", "subject", "message"])):
    """Structured warning about an omitted, altered or suspicious record."""
    __slots__ = ()

    def __str__(self):
        return "[{}] {}: {}".format(self.kind, self.subject, self.message)


class DiagnosticLog(object):
    """Collects diagnostics of one generation run and logs them as they
    arrive."""

    def __init__(self, logger=logger):
        self.logger = logger
        self._diagnostics = []

    def add(self, kind, subject, message):
        diagnostic = Diagnostic(kind, subject, message)
        if kind == UNSUPPORTED_OBJECT:
            self.logger.info("%s", diagnostic)
        else:
            self.logger.warning("%s", diagnostic)
        self._diagnostics.append(diagnostic)
        return diagnostic

    def record(self, error):
        """Record a per-record ROAError."""
        return self.add(error.kind, error.subject, error.message)

    def count(self, kind=None):
        if kind is None:
            return len(self._diagnostics)
        return sum(1 for d in self._diagnostics if d.kind == kind)

    def of_kind(self, kind):
        return [d for d in self._diagnostics if d.kind == kind]

    def __iter__(self):
        return iter(self._diagnostics)

    def __len__(self):
        return len(self._diagnostics)

    def __bool__(self):
        return bool(self._diagnostics)

    def __repr__(self):
        return "<DiagnosticLog {} diagnostics>".format(len(self))
