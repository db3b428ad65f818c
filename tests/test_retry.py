"""Tests para el reintento ante token caducado."""

import asyncio

import pytest

from progress_sync.api.client import ApiResponse
from progress_sync.core import CredentialState, LoginState, MissingCredential, Ok, RetryExhausted
from progress_sync.core.retry import Renewal, RenewalRetry, RetryState

from fakes import FakeAuth

EXPIRED = ApiResponse(401, {"type": "expiry_token"})


def scripted(*responses: ApiResponse):
    """Petición que devuelve las respuestas en orden y anota los tokens."""
    queue = list(responses)
    tokens: list[str] = []

    async def request(token: str) -> ApiResponse:
        tokens.append(token)
        return queue.pop(0)

    return request, tokens


def make_retry(auth: FakeAuth, max_renewals: int = 2) -> RenewalRetry:
    login = LoginState(state=CredentialState.LOGGED_IN)
    return RenewalRetry(auth, Renewal(auth, login), max_renewals)


class TestRetryState:
    def test_exhausted(self) -> None:
        state = RetryState(operation="add_progress", max_renewals=1)
        assert not state.exhausted
        state.renewals = 1
        assert state.exhausted


class TestRenewalRetry:
    @pytest.mark.asyncio
    async def test_success_without_renewal(self) -> None:
        auth = FakeAuth()
        request, tokens = scripted(ApiResponse(200, [1, 2]))

        result = await make_retry(auth).call("fetch_progress", request)

        assert result == Ok(payload=[1, 2])
        assert tokens == ["token-0"]
        assert auth.renewals == 0

    @pytest.mark.asyncio
    async def test_expired_then_success(self) -> None:
        auth = FakeAuth()
        request, tokens = scripted(EXPIRED, ApiResponse(200, None))

        result = await make_retry(auth).call("add_progress", request)

        assert isinstance(result, Ok)
        assert tokens == ["token-0", "token-1"]
        assert auth.renewals == 1

    @pytest.mark.asyncio
    async def test_exhausted_after_max_renewals(self) -> None:
        auth = FakeAuth()
        request, tokens = scripted(EXPIRED, EXPIRED)

        result = await make_retry(auth, max_renewals=1).call("add_progress", request)

        assert result == RetryExhausted(operation="add_progress", renewals=1)
        assert len(tokens) == 2

    @pytest.mark.asyncio
    async def test_zero_renewals_allowed(self) -> None:
        auth = FakeAuth()
        request, tokens = scripted(EXPIRED)

        result = await make_retry(auth, max_renewals=0).call("add_progress", request)

        assert isinstance(result, RetryExhausted)
        assert auth.renewals == 0

    @pytest.mark.asyncio
    async def test_no_token_no_request(self) -> None:
        auth = FakeAuth(token=None)
        request, tokens = scripted()

        result = await make_retry(auth).call("fetch_stars", request)

        assert result == MissingCredential()
        assert tokens == []


class TestRenewal:
    @pytest.mark.asyncio
    async def test_state_during_and_after_renewal(self) -> None:
        seen = []
        login = LoginState(state=CredentialState.LOGGED_IN)

        class ObservingAuth(FakeAuth):
            async def renew(self) -> None:
                seen.append(login.state)
                await super().renew()

        renewal = Renewal(ObservingAuth(), login)
        await renewal()

        assert seen == [CredentialState.REFRESHING]
        assert login.state is CredentialState.LOGGED_IN

    @pytest.mark.asyncio
    async def test_concurrent_expiries_share_one_renewal(self) -> None:
        gate = asyncio.Event()

        class SlowAuth(FakeAuth):
            async def renew(self) -> None:
                await gate.wait()
                await super().renew()

        auth = SlowAuth()
        renewal = Renewal(auth, LoginState(state=CredentialState.LOGGED_IN))

        first = asyncio.ensure_future(renewal())
        second = asyncio.ensure_future(renewal())
        await asyncio.sleep(0)
        gate.set()
        await asyncio.gather(first, second)

        assert auth.renewals == 1
        assert renewal.count == 1
