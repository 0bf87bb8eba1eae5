"""DNS resolution helpers built on ``dnspython``.

Attributes:
    dns: Resolver construction from
        [ResolverOptions][dnsreach.models.options.ResolverOptions],
        single-record lookups, and failure classification.

Note:
    The utils layer depends only on [dnsreach.models][dnsreach.models].
"""

from .dns import (
    AsyncResolver,
    LoopbackAnswer,
    ResolverFactory,
    build_resolver,
    error_code,
    is_localhost,
    parse_server,
    resolve_record,
)


__all__ = [
    "AsyncResolver",
    "LoopbackAnswer",
    "ResolverFactory",
    "build_resolver",
    "error_code",
    "is_localhost",
    "parse_server",
    "resolve_record",
]
