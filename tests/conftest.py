"""
Pytest configuration and shared fixtures for dnsreach tests.

Provides:
- FakeResolver: scripted stand-in for ``dns.asyncresolver.Resolver``
- A factory fixture that records the options each lookup was built with
- Logging configured for DEBUG so checker log calls are exercised
"""

import asyncio
import logging
from typing import Any

import dns.resolver
import pytest

from dnsreach.models.options import ResolverOptions


# ============================================================================
# Logging Configuration
# ============================================================================


@pytest.fixture(scope="session", autouse=True)
def setup_logging() -> None:
    """Configure logging for tests."""
    logging.basicConfig(level=logging.DEBUG)


# ============================================================================
# Resolver Doubles
# ============================================================================


class FakeResolver:
    """Resolver whose outcome per record type is scripted by the test.

    ``outcomes`` maps a record type to either an answer (returned) or an
    exception instance (raised). ``gates`` optionally maps a record type to
    an ``asyncio.Event`` the lookup waits on before settling, and ``delays``
    to a number of seconds to sleep first.
    """

    def __init__(
        self,
        outcomes: dict[str, Any],
        *,
        gates: dict[str, asyncio.Event] | None = None,
        delays: dict[str, float] | None = None,
    ) -> None:
        self.outcomes = outcomes
        self.gates = gates or {}
        self.delays = delays or {}
        self.calls: list[tuple[str, str, bool | None]] = []
        self.tasks: dict[str, asyncio.Task[Any]] = {}

    async def resolve(self, qname: str, rdtype: str, *, search: bool | None = None) -> Any:
        self.calls.append((qname, rdtype, search))
        task = asyncio.current_task()
        assert task is not None
        self.tasks[rdtype] = task

        if rdtype in self.delays:
            await asyncio.sleep(self.delays[rdtype])
        if rdtype in self.gates:
            await self.gates[rdtype].wait()

        outcome = self.outcomes[rdtype]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class FakeResolverFactory:
    """Callable resolver factory that records the options it receives."""

    def __init__(self, resolver: FakeResolver) -> None:
        self.resolver = resolver
        self.options_seen: list[ResolverOptions] = []

    def __call__(self, options: ResolverOptions) -> FakeResolver:
        self.options_seen.append(options)
        return self.resolver


@pytest.fixture
def nxdomain() -> dns.resolver.NXDOMAIN:
    return dns.resolver.NXDOMAIN()


@pytest.fixture
def no_answer() -> dns.resolver.NoAnswer:
    return dns.resolver.NoAnswer()


@pytest.fixture
def make_factory():
    """Build a ``FakeResolverFactory`` around a scripted ``FakeResolver``."""

    def _make(outcomes: dict[str, Any], **kwargs: Any) -> FakeResolverFactory:
        return FakeResolverFactory(FakeResolver(outcomes, **kwargs))

    return _make
