"""Dual-stack DNS reachability check.

[DualStackChecker][dnsreach.checker.DualStackChecker] starts an A and an
AAAA lookup for the same hostname at the same time and succeeds as soon
as either of them returns an answer. It fails only when both fail, with a
[LookupsFailedError][dnsreach.core.exceptions.LookupsFailedError] that
carries both resolver exceptions in lookup order (A, then AAAA).

The slower lookup is not cancelled when the faster one succeeds. It keeps
running until it completes or reaches its resolver lifetime, and its
outcome is discarded. If the task awaiting the check is itself cancelled,
both lookups are cancelled with it.

Examples:
    ```python
    from dnsreach import check

    await check("example.com")
    await check("example.com", {"timeout": 500, "servers": ["9.9.9.9"]})
    ```

See Also:
    [resolve_record][dnsreach.utils.dns.resolve_record]: The single lookup
        raced for each record type.
    [error_code][dnsreach.utils.dns.error_code]: Classification of the
        failures inside the aggregate error.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping, Sequence
from typing import Any

from dnsreach.core.exceptions import LookupsFailedError
from dnsreach.core.logger import Logger
from dnsreach.models.constants import DUAL_STACK_RECORD_TYPES, RecordType
from dnsreach.models.options import ResolverOptions
from dnsreach.utils.dns import ResolverFactory, build_resolver, error_code, resolve_record


logger = Logger("dnsreach.checker")

# Lookups that lost the race, referenced until they finish.
_background_lookups: set[asyncio.Task[Any]] = set()


def _discard_outcome(task: asyncio.Task[Any]) -> None:
    """Drop a finished losing lookup and consume its result or exception."""
    _background_lookups.discard(task)
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        logger.debug(
            "late_lookup_failed",
            lookup=task.get_name(),
            code=error_code(error),
            error=str(error) or type(error).__name__,
        )


class DualStackChecker:
    """Race A and AAAA lookups for a hostname; the first success wins.

    Args:
        options: Resolver options forwarded unchanged to both lookups, as a
            [ResolverOptions][dnsreach.models.options.ResolverOptions], a
            mapping, or None for resolver defaults. Not validated here: an
            invalid value fails both lookups.
        resolver_factory: Builds one resolver per lookup.
        record_types: Record types to race. Failures in an aggregate error
            follow this order.
    """

    def __init__(
        self,
        options: ResolverOptions | Mapping[str, Any] | None = None,
        *,
        resolver_factory: ResolverFactory = build_resolver,
        record_types: Sequence[RecordType] = DUAL_STACK_RECORD_TYPES,
    ) -> None:
        self._options = options
        self._resolver_factory = resolver_factory
        self._record_types = tuple(record_types)

    @property
    def options(self) -> ResolverOptions | Mapping[str, Any] | None:
        return self._options

    @property
    def record_types(self) -> tuple[RecordType, ...]:
        return self._record_types

    def _start_lookups(self, hostname: str) -> list[asyncio.Task[Any]]:
        return [
            asyncio.create_task(
                resolve_record(
                    hostname,
                    record_type,
                    self._options,
                    resolver_factory=self._resolver_factory,
                ),
                name=f"{record_type}:{hostname}",
            )
            for record_type in self._record_types
        ]

    async def check(self, hostname: str) -> None:
        """Succeed if at least one record type resolves for *hostname*.

        Args:
            hostname: Name to check. Passed to the resolver unvalidated.

        Raises:
            LookupsFailedError: Every lookup failed. ``errors`` holds the
                resolver exceptions in record type order.
        """
        logger.debug("check_started", hostname=hostname, types=",".join(self._record_types))
        lookups = self._start_lookups(hostname)
        pending: set[asyncio.Task[Any]] = set(lookups)

        try:
            while pending:
                done, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_COMPLETED)
                winner: asyncio.Task[Any] | None = None
                for task in done:
                    error = task.exception()
                    if error is None:
                        winner = winner or task
                        continue
                    logger.debug(
                        "lookup_failed",
                        hostname=hostname,
                        lookup=task.get_name(),
                        code=error_code(error),
                        error=str(error) or type(error).__name__,
                    )
                if winner is not None:
                    logger.debug("check_succeeded", hostname=hostname, lookup=winner.get_name())
                    for loser in pending:
                        _background_lookups.add(loser)
                        loser.add_done_callback(_discard_outcome)
                    return
        except asyncio.CancelledError:
            for task in lookups:
                task.cancel()
            raise

        errors = [error for task in lookups if (error := task.exception()) is not None]
        logger.debug(
            "check_failed",
            hostname=hostname,
            codes=",".join(error_code(error) for error in errors),
        )
        raise LookupsFailedError(hostname, errors)


async def check(
    hostname: str,
    options: ResolverOptions | Mapping[str, Any] | None = None,
) -> None:
    """Check that *hostname* resolves over IPv4 or IPv6.

    Resolves when the A or the AAAA lookup succeeds; raises
    [LookupsFailedError][dnsreach.core.exceptions.LookupsFailedError] with
    both failures when neither does.

    Args:
        hostname: Name to check.
        options: ``timeout`` (ms), ``tries`` and ``servers`` forwarded to
            both lookups. None or ``{}`` uses the resolver defaults.
    """
    await DualStackChecker(options).check(hostname)
