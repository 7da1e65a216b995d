"""
Test suite for the Launchpad application aggregate.
"""
from unittest.mock import AsyncMock, MagicMock

import pytest

from token_launchpad.adapters.evm.constants import INJECTIVE_EVM_TESTNET
from token_launchpad.app import Launchpad
from token_launchpad.clients.verify_client import VerificationClient
from token_launchpad.engine.events import StatusChangedEvent, TokenCreatedEvent
from token_launchpad.engine.exceptions import TransactionError
from token_launchpad.schemas.bases import StatusKind
from token_launchpad.schemas.https import VerificationResponse
from token_launchpad.schemas.tokens import TokenCreationRequest

from flow_mocks import (
    FakeWalletProvider,
    NATIVE_ONLY_DEPLOYMENT,
    MOCK_TOKEN_ADDRESS,
    MOCK_USER_ADDRESS,
)


def make_launchpad(provider=None, **kwargs) -> Launchpad:
    return Launchpad(
        provider=provider if provider is not None else FakeWalletProvider(),
        network=INJECTIVE_EVM_TESTNET,
        deployment=NATIVE_ONLY_DEPLOYMENT,
        **kwargs,
    )


@pytest.mark.asyncio
async def test_connect_failure_is_recorded():
    launchpad = Launchpad(provider=None, deployment=NATIVE_ONLY_DEPLOYMENT)

    assert await launchpad.connect() is False
    assert "No wallet provider" in launchpad.connect_error
    assert launchpad.wallet_label() == "Connect Wallet"


@pytest.mark.asyncio
async def test_connect_clears_previous_error():
    provider = FakeWalletProvider()
    provider.failures["eth_requestAccounts"] = TransactionError("User rejected the request.")
    launchpad = make_launchpad(provider)

    assert await launchpad.connect() is False
    assert launchpad.connect_error is not None

    del provider.failures["eth_requestAccounts"]
    assert await launchpad.connect() is True
    assert launchpad.connect_error is None


@pytest.mark.asyncio
async def test_toggle_connection_and_wallet_label():
    launchpad = make_launchpad(FakeWalletProvider(native_balance=1234567 * 10**13))

    assert await launchpad.toggle_connection() is True
    assert launchpad.wallet_label() == f"12.3457 INJ | {MOCK_USER_ADDRESS[:6]}...{MOCK_USER_ADDRESS[-4:]}"

    assert await launchpad.toggle_connection() is False
    assert not launchpad.session.connected


@pytest.mark.asyncio
async def test_flows_share_one_bus():
    launchpad = make_launchpad()
    flows = []
    created = []

    @launchpad.hook(StatusChangedEvent)
    async def on_status(event, deps):
        flows.append(event.flow)

    @launchpad.hook(TokenCreatedEvent)
    async def on_created(event, deps):
        created.append((event.result.address, deps.network.chain_id))

    await launchpad.connect()
    await launchpad.create_token(TokenCreationRequest(name="A", ticker="A"))
    await launchpad.wrap("1")

    assert set(flows) == {"creation", "wrap"}
    assert created == [(MOCK_TOKEN_ADDRESS, 1439)]
    assert launchpad.creation.status.kind == StatusKind.SUCCESS
    assert launchpad.wrapping.status.kind == StatusKind.SUCCESS


@pytest.mark.asyncio
async def test_dismiss_and_add_to_wallet():
    launchpad = make_launchpad()
    await launchpad.connect()
    await launchpad.create_token(TokenCreationRequest(name="A", ticker="A"))

    assert await launchpad.add_token_to_wallet() is True
    await launchpad.dismiss_result()

    assert launchpad.creation.result is None
    assert launchpad.creation.status.kind == StatusKind.IDLE


@pytest.mark.asyncio
async def test_verify_created_token_uses_client():
    client = MagicMock(spec=VerificationClient)
    client.verify = AsyncMock(return_value=VerificationResponse(success=True, output="ok"))
    launchpad = make_launchpad(verification_client=client)

    assert await launchpad.verify_created_token() is None

    await launchpad.connect()
    await launchpad.create_token(TokenCreationRequest(name="A", ticker="A", raw_supply="5", decimals="0"))
    response = await launchpad.verify_created_token(["A", "A", 0, 5])

    assert response.success
    client.verify.assert_awaited_once_with(MOCK_TOKEN_ADDRESS, ["A", "A", 0, 5])


def test_from_env_without_wallet(monkeypatch):
    monkeypatch.delenv("LAUNCHPAD_WALLET_RPC_URL", raising=False)

    launchpad = Launchpad.from_env(deployment=NATIVE_ONLY_DEPLOYMENT)

    assert launchpad.session.provider is None
