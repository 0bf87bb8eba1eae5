"""Resolver configuration passed through to every lookup.

[ResolverOptions][dnsreach.models.options.ResolverOptions] mirrors the
option set of common stub resolvers: a per-attempt ``timeout`` in
milliseconds, a ``tries`` count, and an ordered ``servers`` list. The
model only checks types and ranges; server addresses are handed to
``dnspython`` unparsed so that a malformed address fails the lookup that
uses it.

Examples:
    ```python
    ResolverOptions(timeout=100, servers=["192.0.2.1"])
    ResolverOptions.coerce({"tries": 2})
    ResolverOptions.coerce(None)  # resolver defaults
    ```
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .constants import DEFAULT_TRIES


class ResolverOptions(BaseModel):
    """Options forwarded unchanged to both the A and AAAA lookup.

    Attributes:
        timeout: Milliseconds before a single query attempt is abandoned.
            ``None`` or ``-1`` keeps the resolver default.
        tries: Attempts per query. ``None`` keeps the resolver default.
        servers: Nameservers to use instead of the system configuration,
            in order. ``None`` or an empty list keeps the system default.
    """

    model_config = ConfigDict(frozen=True)

    timeout: int | None = Field(default=None, ge=-1)
    tries: int | None = Field(default=None, ge=1)
    servers: list[str] | None = None

    @classmethod
    def coerce(cls, options: ResolverOptions | Mapping[str, Any] | None) -> ResolverOptions:
        """Return *options* as a ``ResolverOptions`` instance.

        Raises:
            pydantic.ValidationError: If *options* is not a mapping or holds
                invalid values.
        """
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        if isinstance(options, Mapping):
            options = dict(options)
        return cls.model_validate(options)

    @property
    def has_timeout(self) -> bool:
        """Return True if an explicit, non-negative timeout is set."""
        return self.timeout is not None and self.timeout >= 0

    @property
    def timeout_seconds(self) -> float | None:
        """Per-attempt timeout in seconds, or None for the resolver default."""
        if not self.has_timeout:
            return None
        return self.timeout / 1000.0  # type: ignore[operator]

    def lifetime_seconds(self, default_timeout: float) -> float | None:
        """Total time budget for one query across all attempts.

        Args:
            default_timeout: Per-attempt timeout of the resolver, used when
                only ``tries`` is set.

        Returns:
            ``timeout * tries`` in seconds, or ``None`` when neither option
            is set and the resolver's own lifetime applies.
        """
        if not self.has_timeout and self.tries is None:
            return None
        per_try = self.timeout_seconds if self.has_timeout else default_timeout
        tries = self.tries if self.tries is not None else DEFAULT_TRIES
        return per_try * tries  # type: ignore[operator]
