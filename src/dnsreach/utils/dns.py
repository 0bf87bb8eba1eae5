"""DNS resolver capability for dnsreach.

Wraps ``dnspython``'s asyncio resolver. One fresh resolver is built per
lookup from [ResolverOptions][dnsreach.models.options.ResolverOptions],
so concurrent lookups share no state.

Option mapping:

- ``timeout`` (ms) sets ``Resolver.timeout``, the per-attempt timeout.
- ``timeout`` and ``tries`` together bound ``Resolver.lifetime`` to
  ``timeout * tries``; a missing ``tries`` counts as
  [DEFAULT_TRIES][dnsreach.models.constants.DEFAULT_TRIES], a missing
  ``timeout`` uses the resolver's per-attempt default.
- ``servers`` replaces ``Resolver.nameservers``. The system configuration
  (``/etc/resolv.conf``) is not read in that case. ``ip:port`` and
  ``[ipv6]:port`` entries become ``Do53Nameserver`` objects; anything else
  is handed to ``dnspython`` as-is and rejected there if malformed.

``localhost`` and names under it are answered locally with the loopback
addresses (RFC 6761 section 6.3) and never sent to a nameserver.

Note:
    Failures are never translated. [error_code][dnsreach.utils.dns.error_code]
    classifies an exception for logs without replacing it.

See Also:
    [DualStackChecker][dnsreach.checker.DualStackChecker]: Races one
        [resolve_record][dnsreach.utils.dns.resolve_record] call per
        address family.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol

import dns.asyncresolver
import dns.exception
import dns.name
import dns.nameserver
import dns.resolver
from pydantic import ValidationError

from dnsreach.models.constants import ErrorCode, RecordType
from dnsreach.models.options import ResolverOptions


logger = logging.getLogger("dnsreach.utils.dns")

_HOST_PORT = re.compile(r"(?P<host>[^:\[\]/]+):(?P<port>\d+)")
_BRACKETED = re.compile(r"\[(?P<host>[^\]]+)\](?::(?P<port>\d+))?")

_LOOPBACK_ADDRESSES: dict[str, tuple[str, ...]] = {
    RecordType.A: ("127.0.0.1",),
    RecordType.AAAA: ("::1",),
}


class AsyncResolver(Protocol):
    """Anything with a ``dnspython``-compatible async ``resolve`` method."""

    async def resolve(self, qname: str, rdtype: str, *, search: bool | None = None) -> Any: ...


ResolverFactory = Callable[[ResolverOptions], AsyncResolver]


@dataclass(frozen=True, slots=True)
class LoopbackAnswer:
    """Answer for a ``localhost`` name, produced without a DNS query."""

    qname: str
    rdtype: str
    addresses: tuple[str, ...]


def is_localhost(hostname: str) -> bool:
    """Return True for ``localhost`` and any name ending in ``.localhost``.

    Matching is case-insensitive and allows one trailing dot. Names with
    empty labels (``.localhost``, ``a..localhost``) do not match.
    """
    name = hostname[:-1] if hostname.endswith(".") else hostname
    labels = name.lower().split(".")
    return labels[-1] == "localhost" and all(labels)


def parse_server(server: str) -> str | dns.nameserver.Nameserver:
    """Turn one ``servers`` entry into a ``dnspython`` nameserver.

    Examples:
        ```python
        parse_server("8.8.8.8")          # '8.8.8.8'
        parse_server("8.8.8.8:5353")     # Do53Nameserver('8.8.8.8', 5353)
        parse_server("[::1]:53")         # Do53Nameserver('::1', 53)
        parse_server("invalid-server")   # 'invalid-server' (rejected later)
        ```
    """
    match = _BRACKETED.fullmatch(server) or _HOST_PORT.fullmatch(server)
    if match is None:
        return server
    if match["port"] is None:
        return match["host"]
    return dns.nameserver.Do53Nameserver(match["host"], int(match["port"]))


def build_resolver(options: ResolverOptions) -> dns.asyncresolver.Resolver:
    """Create an asyncio resolver configured from *options*.

    Raises:
        ValueError: If a ``servers`` entry is not a valid nameserver.
        dns.resolver.NoResolverConfiguration: If no servers are given and
            the system resolver configuration cannot be read.
    """
    servers = options.servers or []
    resolver = dns.asyncresolver.Resolver(configure=not servers)
    if servers:
        resolver.nameservers = [parse_server(server) for server in servers]

    timeout = options.timeout_seconds
    if timeout is not None:
        resolver.timeout = timeout
    lifetime = options.lifetime_seconds(resolver.timeout)
    if lifetime is not None:
        resolver.lifetime = lifetime

    return resolver


async def resolve_record(
    hostname: str,
    record_type: RecordType | str,
    options: ResolverOptions | Mapping[str, Any] | None = None,
    *,
    resolver_factory: ResolverFactory = build_resolver,
) -> Any:
    """Resolve one record type for *hostname*.

    Options are coerced and the resolver is built here, inside the lookup,
    so invalid options or server addresses fail this lookup instead of the
    caller. Search domains are not applied: a relative name is queried as
    if it were absolute. A ``localhost`` name is answered with the loopback
    address of *record_type* and no resolver is built.

    Args:
        hostname: Name to query, passed to the resolver unvalidated.
        record_type: ``"A"`` or ``"AAAA"``.
        options: Resolver options, a mapping of them, or None for defaults.
        resolver_factory: Builds the resolver; replaced in tests.

    Returns:
        The ``dns.resolver.Answer`` produced by the resolver, or a
        [LoopbackAnswer][dnsreach.utils.dns.LoopbackAnswer] for ``localhost``.

    Raises:
        dns.resolver.NXDOMAIN: The name does not exist.
        dns.resolver.NoAnswer: No records of *record_type* exist.
        dns.resolver.LifetimeTimeout: No answer within the lifetime.
        dns.resolver.NoNameservers: All nameservers failed.
        pydantic.ValidationError: *options* could not be parsed.
        ValueError: A ``servers`` entry is invalid.
    """
    resolver_options = ResolverOptions.coerce(options)
    loopback = _LOOPBACK_ADDRESSES.get(str(record_type))
    if loopback is not None and is_localhost(hostname):
        logger.debug("dns_loopback host=%s type=%s", hostname, record_type)
        return LoopbackAnswer(qname=hostname, rdtype=str(record_type), addresses=loopback)

    resolver = resolver_factory(resolver_options)
    logger.debug("dns_resolving host=%s type=%s", hostname, record_type)
    return await resolver.resolve(hostname, str(record_type), search=False)


_ERROR_CODES: tuple[tuple[tuple[type[BaseException], ...], ErrorCode], ...] = (
    # ValidationError subclasses ValueError, so it is matched first.
    ((ValidationError,), ErrorCode.BAD_OPTIONS),
    ((dns.resolver.NXDOMAIN,), ErrorCode.NOT_FOUND),
    ((dns.resolver.NoAnswer,), ErrorCode.NO_DATA),
    ((dns.exception.Timeout, TimeoutError), ErrorCode.TIMEOUT),
    ((dns.resolver.NoNameservers,), ErrorCode.SERVFAIL),
    (
        (dns.exception.SyntaxError, dns.name.NameTooLong, dns.name.IDNAException),
        ErrorCode.BAD_NAME,
    ),
    ((ValueError,), ErrorCode.BAD_SERVER),
    ((OSError,), ErrorCode.CONNREFUSED),
)


def error_code(error: BaseException) -> ErrorCode:
    """Classify a lookup failure.

    Examples:
        ```python
        error_code(dns.resolver.NXDOMAIN())   # ErrorCode.NOT_FOUND ('ENOTFOUND')
        error_code(dns.resolver.NoAnswer())   # ErrorCode.NO_DATA ('ENODATA')
        error_code(RuntimeError("boom"))      # ErrorCode.UNKNOWN
        ```
    """
    for types, code in _ERROR_CODES:
        if isinstance(error, types):
            return code
    return ErrorCode.UNKNOWN
