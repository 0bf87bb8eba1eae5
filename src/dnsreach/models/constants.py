"""Shared constants for the models layer.

Defines the record types queried by a dual-stack check, the error codes
used to classify resolver failures, and the defaults applied when
translating [ResolverOptions][dnsreach.models.options.ResolverOptions]
into resolver settings.

See Also:
    [dnsreach.utils.dns][]: Uses [ErrorCode][dnsreach.models.constants.ErrorCode]
        to classify ``dnspython`` exceptions.
    [dnsreach.checker][]: Races one lookup per
        [RecordType][dnsreach.models.constants.RecordType].
"""

from __future__ import annotations

from enum import StrEnum


class RecordType(StrEnum):
    """DNS address record types queried by the checker.

    Attributes:
        A: IPv4 address record.
        AAAA: IPv6 address record.
    """

    A = "A"
    AAAA = "AAAA"


class ErrorCode(StrEnum):
    """Identifiers for resolver failure classes.

    The values follow the naming used by common stub resolvers
    (``ENOTFOUND``, ``ENODATA``, ...) so that log output stays familiar.
    A code is derived from an exception for inspection only; the exception
    itself is never replaced.

    Attributes:
        NOT_FOUND: The name does not exist (NXDOMAIN).
        NO_DATA: The name exists but has no records of the requested type.
        TIMEOUT: No answer within the resolver lifetime.
        SERVFAIL: Every configured nameserver failed to answer.
        BAD_NAME: The hostname is not a syntactically valid DNS name.
        BAD_OPTIONS: The resolver options could not be parsed.
        BAD_SERVER: A configured nameserver address is invalid.
        CONNREFUSED: A socket-level error talking to a nameserver.
        UNKNOWN: Any other failure.
    """

    NOT_FOUND = "ENOTFOUND"
    NO_DATA = "ENODATA"
    TIMEOUT = "ETIMEOUT"
    SERVFAIL = "ESERVFAIL"
    BAD_NAME = "EBADNAME"
    BAD_OPTIONS = "EBADOPTS"
    BAD_SERVER = "EBADSERVER"
    CONNREFUSED = "ECONNREFUSED"
    UNKNOWN = "EUNKNOWN"


# Lookup order is also the order of failures in an aggregate error.
DUAL_STACK_RECORD_TYPES: tuple[RecordType, ...] = (RecordType.A, RecordType.AAAA)

# Attempts per query when only a per-attempt timeout is configured.
DEFAULT_TRIES = 4
