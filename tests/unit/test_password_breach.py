"""Unit tests for the breach resolver."""

import asyncio
import logging

import pytest

from app.exceptions import RateLimited, RemoteFailure, TransportTimeout, ValidationError
from app.models.check import CheckResult
from app.services.breach_check import (
    ERROR_RATE_LIMITED,
    ERROR_TIMEOUT,
    ERROR_UNAVAILABLE,
    RangeEntry,
    check_password,
    parse_range_response,
    resolve,
)
from app.services.digest import split_digest

PREFIX = "5BAA6"
SUFFIX = "1E4C9B93F3F0682250B6CF8331B7EE68FD8"
BODY = "1E4C9B93F3F0682250B6CF8331B7EE68FD8:3\nAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAA:1"


class TestParseRangeResponse:
    def test_parses_entries(self):
        assert list(parse_range_response(BODY)) == [
            RangeEntry(SUFFIX, 3),
            RangeEntry("AAAAAAAAAAAAAAAAAAAAAAAAAAAAAAA", 1),
        ]

    def test_crlf_and_blank_lines(self):
        body = "\r\nabc:5\r\n\r\nDEF:0\r\n"
        assert list(parse_range_response(body)) == [RangeEntry("ABC", 5), RangeEntry("DEF", 0)]

    def test_lines_without_colon_skipped(self):
        assert list(parse_range_response("garbage\nABC:2")) == [RangeEntry("ABC", 2)]

    def test_bad_count_defaults_to_zero(self):
        assert list(parse_range_response("ABC:notanumber\nDEF:-4")) == [
            RangeEntry("ABC", 0),
            RangeEntry("DEF", 0),
        ]


class TestResolve:
    async def test_match_reports_breach(self, fake_provider):
        fake_provider.responses[PREFIX] = BODY
        result = await resolve(PREFIX, SUFFIX, fake_provider)
        assert result == CheckResult(is_breached=True, breach_count=3)
        assert result.error is None

    async def test_no_match(self, fake_provider):
        fake_provider.responses[PREFIX] = BODY
        result = await resolve(PREFIX, "F" * 35, fake_provider)
        assert result == CheckResult(is_breached=False, breach_count=0)

    async def test_case_insensitive_match(self, fake_provider):
        fake_provider.responses[PREFIX] = BODY.lower()
        result = await resolve(PREFIX.lower(), SUFFIX.lower(), fake_provider)
        assert result.is_breached is True
        assert result.breach_count == 3
        assert fake_provider.calls == [PREFIX]

    async def test_malformed_count_yields_zero(self, fake_provider):
        fake_provider.responses[PREFIX] = f"{SUFFIX}:notanumber"
        result = await resolve(PREFIX, SUFFIX, fake_provider)
        assert result == CheckResult(is_breached=False, breach_count=0)
        assert result.error is None

    async def test_padding_record_is_not_a_breach(self, fake_provider):
        fake_provider.responses[PREFIX] = f"{SUFFIX}:0\n{'A' * 35}:12"
        result = await resolve(PREFIX, SUFFIX, fake_provider)
        assert result == CheckResult(is_breached=False, breach_count=0)

    @pytest.mark.parametrize("prefix", ["5BAA6\n", "5BAA6 ", "5BAA", "5BAA61"])
    async def test_prefix_must_be_exactly_five_hex(self, fake_provider, prefix):
        with pytest.raises(ValidationError, match="invalid prefix"):
            await resolve(prefix, SUFFIX, fake_provider)
        assert fake_provider.calls == []

    async def test_partial_suffix_does_not_match(self, fake_provider):
        fake_provider.responses[PREFIX] = f"{SUFFIX[:-1]}:9\n{SUFFIX}0:9"
        result = await resolve(PREFIX, SUFFIX, fake_provider)
        assert result.is_breached is False

    async def test_only_prefix_sent(self, fake_provider):
        await resolve(PREFIX, SUFFIX, fake_provider)
        assert fake_provider.calls == [PREFIX]

    async def test_invalid_prefix_rejected_without_call(self, fake_provider):
        with pytest.raises(ValidationError, match="invalid prefix"):
            await resolve("ZZZZZ", SUFFIX, fake_provider)
        assert fake_provider.calls == []


class TestResolveFailures:
    async def test_provider_timeout(self, fake_provider):
        fake_provider.responses[PREFIX] = TransportTimeout("slow")
        result = await resolve(PREFIX, SUFFIX, fake_provider)
        assert result == CheckResult(is_breached=False, breach_count=0, error=ERROR_TIMEOUT)

    async def test_hang_bounded_by_timeout(self, fake_provider):
        fake_provider.responses[PREFIX] = 5.0
        loop = asyncio.get_running_loop()
        start = loop.time()
        result = await resolve(PREFIX, SUFFIX, fake_provider, timeout=0.05)
        assert result.error == ERROR_TIMEOUT
        assert loop.time() - start < 1.0

    async def test_rate_limited(self, fake_provider):
        fake_provider.responses[PREFIX] = RateLimited(retry_after="2")
        result = await resolve(PREFIX, SUFFIX, fake_provider)
        assert result == CheckResult(is_breached=False, breach_count=0, error=ERROR_RATE_LIMITED)

    async def test_remote_failure(self, fake_provider):
        fake_provider.responses[PREFIX] = RemoteFailure("HTTP 503", status_code=503)
        result = await resolve(PREFIX, SUFFIX, fake_provider)
        assert result == CheckResult(is_breached=False, breach_count=0, error=ERROR_UNAVAILABLE)

    async def test_unexpected_error_is_contained(self, fake_provider):
        fake_provider.responses[PREFIX] = KeyError("boom")
        result = await resolve(PREFIX, SUFFIX, fake_provider)
        assert result.error == ERROR_UNAVAILABLE
        assert result.is_breached is False

    def test_error_strings_are_distinct(self):
        assert len({ERROR_TIMEOUT, ERROR_RATE_LIMITED, ERROR_UNAVAILABLE}) == 3

    async def test_failure_log_omits_password_and_suffix(self, fake_provider, caplog):
        password = "Tr0ub4dor&3"
        prefix, suffix = split_digest(password)
        fake_provider.responses[prefix] = RemoteFailure("range query returned HTTP 500", 500)
        with caplog.at_level(logging.DEBUG):
            result = await check_password(password, fake_provider)
        assert result.error == ERROR_UNAVAILABLE
        assert "HTTP 500" in caplog.text
        assert password not in caplog.text
        assert suffix not in caplog.text


class TestCheckPassword:
    async def test_breached_password(self, fake_provider):
        fake_provider.breach("password", 9_545_824)
        result = await check_password("password", fake_provider)
        assert result.is_breached is True
        assert result.breach_count == 9_545_824

    async def test_clean_password(self, fake_provider):
        fake_provider.breach("password")
        result = await check_password("Xk9m!z-unique-2024", fake_provider)
        assert result == CheckResult(is_breached=False, breach_count=0)

    async def test_empty_password_never_calls_provider(self, fake_provider):
        with pytest.raises(ValidationError, match="password required"):
            await check_password("", fake_provider)
        assert fake_provider.calls == []


class TestCheckResultModel:
    def test_serializes_camel_case(self):
        data = CheckResult(is_breached=True, breach_count=3).model_dump(by_alias=True)
        assert data == {"isBreached": True, "breachCount": 3, "error": None}

    def test_error_cannot_report_breach(self):
        with pytest.raises(ValueError):
            CheckResult(is_breached=True, breach_count=1, error="timeout")

    def test_count_zero_when_not_breached(self):
        with pytest.raises(ValueError):
            CheckResult(is_breached=False, breach_count=4)
