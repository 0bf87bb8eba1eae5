"""
Unit tests for the checker module.

Tests:
- DualStackChecker.check()
  - Success when either record type resolves
  - Aggregate failure when both fail, in A/AAAA order
  - Concurrent start, first-success-wins, loser left running
  - Options forwarded unchanged to both lookups
  - Cancellation of the caller cancels both lookups
- check() module-level entry point, including localhost
"""

import asyncio
from unittest.mock import AsyncMock, patch

import dns.resolver
import pytest
from pydantic import ValidationError

from dnsreach.checker import DualStackChecker, _background_lookups, check
from dnsreach.core.exceptions import LookupsFailedError
from dnsreach.models.constants import RecordType
from dnsreach.models.options import ResolverOptions


ANSWER = object()


# =============================================================================
# Success Cases
# =============================================================================


class TestCheckSuccess:
    """check() succeeds when at least one lookup succeeds."""

    async def test_both_resolve(self, make_factory) -> None:
        factory = make_factory({"A": ANSWER, "AAAA": ANSWER})
        checker = DualStackChecker(resolver_factory=factory)

        assert await checker.check("example.com") is None

    async def test_only_a_resolves(self, make_factory, no_answer) -> None:
        factory = make_factory({"A": ANSWER, "AAAA": no_answer})
        checker = DualStackChecker(resolver_factory=factory)

        await checker.check("ipv4only.example.com")

    async def test_only_aaaa_resolves(self, make_factory, no_answer) -> None:
        factory = make_factory({"A": no_answer, "AAAA": ANSWER})
        checker = DualStackChecker(resolver_factory=factory)

        await checker.check("ipv6.example.com")

    async def test_failure_first_then_success(self, make_factory, nxdomain) -> None:
        """A failing first does not decide the outcome while AAAA is pending."""
        factory = make_factory({"A": nxdomain, "AAAA": ANSWER}, delays={"AAAA": 0.01})
        checker = DualStackChecker(resolver_factory=factory)

        await checker.check("example.com")

    async def test_queries_both_record_types(self, make_factory) -> None:
        factory = make_factory({"A": ANSWER, "AAAA": ANSWER})
        checker = DualStackChecker(resolver_factory=factory)

        await checker.check("example.com")
        await asyncio.sleep(0)

        qtypes = sorted(rdtype for _, rdtype, _ in factory.resolver.calls)
        assert qtypes == ["A", "AAAA"]

    async def test_hostname_passed_through_without_search(self, make_factory) -> None:
        factory = make_factory({"A": ANSWER, "AAAA": ANSWER})
        checker = DualStackChecker(resolver_factory=factory)

        await checker.check("  Weird..Name  ")
        await asyncio.sleep(0)

        for qname, _, search in factory.resolver.calls:
            assert qname == "  Weird..Name  "
            assert search is False


# =============================================================================
# Failure Cases
# =============================================================================


class TestCheckFailure:
    """check() raises LookupsFailedError only when both lookups fail."""

    async def test_both_fail(self, make_factory, nxdomain, no_answer) -> None:
        factory = make_factory({"A": nxdomain, "AAAA": no_answer})
        checker = DualStackChecker(resolver_factory=factory)

        with pytest.raises(LookupsFailedError) as exc_info:
            await checker.check("nonexistent.invalid")

        error = exc_info.value
        assert str(error) == "all lookups failed"
        assert error.hostname == "nonexistent.invalid"
        assert len(error.errors) == 2

    async def test_errors_are_unmodified(self, make_factory, nxdomain, no_answer) -> None:
        factory = make_factory({"A": nxdomain, "AAAA": no_answer})
        checker = DualStackChecker(resolver_factory=factory)

        with pytest.raises(LookupsFailedError) as exc_info:
            await checker.check("nonexistent.invalid")

        assert exc_info.value.errors[0] is nxdomain
        assert exc_info.value.errors[1] is no_answer

    async def test_order_is_a_then_aaaa_when_aaaa_fails_first(self, make_factory) -> None:
        a_error = dns.resolver.LifetimeTimeout()
        aaaa_error = dns.resolver.NXDOMAIN()
        factory = make_factory({"A": a_error, "AAAA": aaaa_error}, delays={"A": 0.02})
        checker = DualStackChecker(resolver_factory=factory)

        with pytest.raises(LookupsFailedError) as exc_info:
            await checker.check("slow.example.com")

        assert exc_info.value.errors == (a_error, aaaa_error)

    async def test_invalid_options_fail_both_lookups(self, make_factory) -> None:
        factory = make_factory({"A": ANSWER, "AAAA": ANSWER})
        checker = DualStackChecker({"tries": 0}, resolver_factory=factory)

        with pytest.raises(LookupsFailedError) as exc_info:
            await checker.check("example.com")

        assert len(exc_info.value.errors) == 2
        assert all(isinstance(e, ValidationError) for e in exc_info.value.errors)
        assert factory.options_seen == []

    async def test_factory_error_fails_both_lookups(self) -> None:
        def broken_factory(options: ResolverOptions):
            raise ValueError("nameserver invalid-server is not valid")

        checker = DualStackChecker({"servers": ["invalid-server"]}, resolver_factory=broken_factory)

        with pytest.raises(LookupsFailedError) as exc_info:
            await checker.check("example.com")

        assert [type(e) for e in exc_info.value.errors] == [ValueError, ValueError]

    async def test_repeated_calls_same_outcome(self, make_factory, nxdomain) -> None:
        factory = make_factory({"A": nxdomain, "AAAA": nxdomain})
        checker = DualStackChecker(resolver_factory=factory)

        for _ in range(3):
            with pytest.raises(LookupsFailedError):
                await checker.check("nonexistent.invalid")


# =============================================================================
# Options Forwarding
# =============================================================================


class TestOptionsForwarding:
    """The same options reach both lookups."""

    @pytest.mark.parametrize("options", [None, {}, ResolverOptions()])
    async def test_default_options(self, make_factory, options) -> None:
        factory = make_factory({"A": ANSWER, "AAAA": ANSWER})
        checker = DualStackChecker(options, resolver_factory=factory)

        await checker.check("example.com")
        await asyncio.sleep(0)

        assert factory.options_seen == [ResolverOptions(), ResolverOptions()]

    async def test_mapping_options(self, make_factory) -> None:
        factory = make_factory({"A": ANSWER, "AAAA": ANSWER})
        options = {"timeout": 5000, "tries": 3, "servers": ["8.8.8.8"]}
        checker = DualStackChecker(options, resolver_factory=factory)

        await checker.check("example.com")
        await asyncio.sleep(0)

        expected = ResolverOptions(timeout=5000, tries=3, servers=["8.8.8.8"])
        assert factory.options_seen == [expected, expected]

    def test_options_property(self) -> None:
        options = {"timeout": 100}
        assert DualStackChecker(options).options is options

    def test_default_record_types(self) -> None:
        assert DualStackChecker().record_types == (RecordType.A, RecordType.AAAA)


# =============================================================================
# Race Semantics
# =============================================================================


class TestRace:
    """Both lookups start together; the first success wins."""

    async def test_lookups_start_concurrently(self, make_factory) -> None:
        gates = {"A": asyncio.Event(), "AAAA": asyncio.Event()}
        factory = make_factory({"A": ANSWER, "AAAA": ANSWER}, gates=gates)
        checker = DualStackChecker(resolver_factory=factory)

        task = asyncio.create_task(checker.check("example.com"))
        for _ in range(3):
            await asyncio.sleep(0)

        assert len(factory.resolver.calls) == 2
        assert not task.done()

        gates["AAAA"].set()
        await task
        gates["A"].set()
        await asyncio.wait([factory.resolver.tasks["A"]])

    async def test_success_does_not_wait_for_slow_lookup(self, make_factory) -> None:
        gate = asyncio.Event()
        factory = make_factory({"A": ANSWER, "AAAA": ANSWER}, gates={"AAAA": gate})
        checker = DualStackChecker(resolver_factory=factory)

        await asyncio.wait_for(checker.check("example.com"), timeout=1.0)

        loser = factory.resolver.tasks["AAAA"]
        assert not loser.done()
        assert loser in _background_lookups

        gate.set()
        await asyncio.wait([loser])
        assert not loser.cancelled()
        assert loser not in _background_lookups

    async def test_late_failure_is_discarded(self, make_factory, nxdomain) -> None:
        gate = asyncio.Event()
        factory = make_factory({"A": ANSWER, "AAAA": nxdomain}, gates={"AAAA": gate})
        checker = DualStackChecker(resolver_factory=factory)

        await checker.check("ipv4only.example.com")

        loser = factory.resolver.tasks["AAAA"]
        gate.set()
        await asyncio.wait([loser])

        assert loser.exception() is nxdomain
        assert loser not in _background_lookups

    async def test_caller_cancellation_cancels_lookups(self, make_factory) -> None:
        gates = {"A": asyncio.Event(), "AAAA": asyncio.Event()}
        factory = make_factory({"A": ANSWER, "AAAA": ANSWER}, gates=gates)
        checker = DualStackChecker(resolver_factory=factory)

        task = asyncio.create_task(checker.check("example.com"))
        for _ in range(3):
            await asyncio.sleep(0)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

        lookups = list(factory.resolver.tasks.values())
        await asyncio.wait(lookups)
        assert all(lookup.cancelled() for lookup in lookups)


# =============================================================================
# Module-level check()
# =============================================================================


class TestCheckFunction:
    """check() builds real dnspython resolvers from the options."""

    async def test_success_via_dnspython_resolver(self) -> None:
        async def fake_resolve(qname, rdtype, **kwargs):
            if rdtype == "A":
                raise dns.resolver.NoAnswer()
            return ANSWER

        with patch("dns.asyncresolver.Resolver.resolve", new=AsyncMock(side_effect=fake_resolve)):
            await check("ipv6.example.com", {"servers": ["192.0.2.53"]})

    async def test_failure_via_dnspython_resolver(self) -> None:
        mock_resolve = AsyncMock(side_effect=dns.resolver.NXDOMAIN())

        with (
            patch("dns.asyncresolver.Resolver.resolve", new=mock_resolve),
            pytest.raises(LookupsFailedError) as exc_info,
        ):
            await check("nonexistent.invalid", {"servers": ["192.0.2.53"], "timeout": 100})

        assert len(exc_info.value.errors) == 2
        assert mock_resolve.await_count == 2

    async def test_invalid_server_fails_both(self) -> None:
        with pytest.raises(LookupsFailedError) as exc_info:
            await check("example.com", {"servers": ["invalid-server"]})

        assert [type(e) for e in exc_info.value.errors] == [ValueError, ValueError]

    @pytest.mark.parametrize("hostname", ["localhost", "localhost.", "api.localhost"])
    async def test_localhost_resolves_without_query(self, hostname: str) -> None:
        mock_resolve = AsyncMock(side_effect=dns.resolver.NXDOMAIN())

        with patch("dns.asyncresolver.Resolver.resolve", new=mock_resolve):
            await check(hostname)
            await check(hostname, {"timeout": 100, "servers": ["192.0.2.1"]})

        mock_resolve.assert_not_awaited()

    async def test_localhost_with_invalid_options_fails_both(self) -> None:
        with pytest.raises(LookupsFailedError) as exc_info:
            await check("localhost", "timeout=100")  # type: ignore[arg-type]

        assert all(isinstance(e, ValidationError) for e in exc_info.value.errors)
