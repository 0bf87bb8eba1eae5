"""dnsreach exception hierarchy.

Only two error kinds are raised by this package. Every other failure
(NXDOMAIN, empty answers, timeouts, malformed names, bad nameserver
addresses) comes from ``dnspython`` and is carried unmodified inside
[LookupsFailedError][dnsreach.core.exceptions.LookupsFailedError].

Exception hierarchy:

```text
DnsReachError (base -- never raised directly)
├── ConfigurationError   -- invalid YAML file or CLI configuration
└── LookupsFailedError   -- every address lookup for a hostname failed
```

See Also:
    [DualStackChecker][dnsreach.checker.DualStackChecker]: Raises
        [LookupsFailedError][dnsreach.core.exceptions.LookupsFailedError]
        when both the A and AAAA lookup fail.
    [CheckConfig][dnsreach.core.config.CheckConfig]: Raises
        [ConfigurationError][dnsreach.core.exceptions.ConfigurationError]
        on unreadable or invalid configuration.
"""

from __future__ import annotations

from collections.abc import Sequence


class DnsReachError(Exception):
    """Base exception for all dnsreach errors.

    Never raised directly -- always use a specific subclass.
    """


class ConfigurationError(DnsReachError):
    """Invalid or missing configuration (YAML file, CLI flags)."""


class LookupsFailedError(DnsReachError):
    """Aggregate failure raised when every address lookup failed.

    The underlying exceptions are kept in lookup order (A first, then
    AAAA) regardless of which one failed first in wall-clock time.

    Attributes:
        hostname: The hostname that was checked.
        errors: The underlying resolver exceptions, in lookup order.

    Examples:
        ```python
        try:
            await check("nonexistent.invalid")
        except LookupsFailedError as e:
            str(e)          # 'all lookups failed'
            len(e.errors)   # 2
        ```
    """

    DEFAULT_MESSAGE = "all lookups failed"

    def __init__(
        self,
        hostname: str,
        errors: Sequence[BaseException],
        message: str = DEFAULT_MESSAGE,
    ) -> None:
        super().__init__(message)
        self.hostname = hostname
        self.errors: tuple[BaseException, ...] = tuple(errors)

    @property
    def message(self) -> str:
        """Human-readable summary."""
        return str(self.args[0])

    def __repr__(self) -> str:
        return f"{type(self).__name__}(hostname={self.hostname!r}, errors={self.errors!r})"
