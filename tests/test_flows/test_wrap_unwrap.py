"""
Test suite for WrapUnwrapFlow.
"""
import asyncio

import pytest

from token_launchpad.adapters.evm.constants import DeploymentConfig
from token_launchpad.engine.events import EventBus, StatusChangedEvent, WrapSettledEvent
from token_launchpad.engine.exceptions import TransactionError
from token_launchpad.flows.creation import TokenCreationFlow
from token_launchpad.flows.wrapping import WrapUnwrapFlow, parse_amount
from token_launchpad.schemas.bases import StatusKind
from token_launchpad.schemas.tokens import TokenCreationRequest, WrapDirection

from flow_mocks import (
    FakeWalletProvider,
    EventRecorder,
    create_mock_session,
    create_connected_session,
    MOCK_FACTORY_ADDRESS,
    MOCK_WRAPPED_ADDRESS,
    MOCK_NATIVE_BALANCE,
    MOCK_WRAPPED_BALANCE,
    ONE_INJ,
)


async def make_flow(provider=None, bus=None):
    provider = provider or FakeWalletProvider()
    session = await create_connected_session(provider, bus=bus)
    return WrapUnwrapFlow(session, bus=bus), provider


@pytest.mark.parametrize("amount, expected", [
    ("1", ONE_INJ),
    ("0.5", ONE_INJ // 2),
    ("0.000000000000000001", 1),
    ("0", None),
    ("-1", None),
    ("abc", None),
    ("", None),
    ("NaN", None),
    ("Infinity", None),
    ("0.0000000000000000001", None),
    ("1e999999", None),
    ("1e60", None),
    ("1." + "0" * 120 + "1", None),
])
def test_parse_amount(amount, expected):
    assert parse_amount(amount, 18) == expected


@pytest.mark.asyncio
async def test_wrap_deposits_value_and_refreshes_balances():
    bus = EventBus()
    recorder = EventRecorder(bus, StatusChangedEvent, WrapSettledEvent)
    flow, provider = await make_flow(bus=bus)
    flow.amount = "1.5"

    tx_hash = await flow.wrap()

    assert tx_hash is not None
    assert provider.transactions == [(MOCK_WRAPPED_ADDRESS, "deposit", (), 15 * ONE_INJ // 10)]
    assert flow.session.state.native_balance == MOCK_NATIVE_BALANCE - 15 * ONE_INJ // 10
    assert flow.session.state.wrapped_balance == MOCK_WRAPPED_BALANCE + 15 * ONE_INJ // 10
    assert flow.amount == ""

    kinds = [e.status.kind for e in recorder.of_type(StatusChangedEvent)]
    assert kinds == [StatusKind.PENDING, StatusKind.PENDING, StatusKind.SUCCESS]
    assert recorder.of_type(StatusChangedEvent)[1].status.message == "Transaction sent, waiting for confirmation..."

    settled = recorder.of_type(WrapSettledEvent)
    assert settled[0].operation.direction == WrapDirection.WRAP
    assert settled[0].operation.amount == "1.5"
    assert settled[0].tx_hash == tx_hash


@pytest.mark.asyncio
async def test_unwrap_withdraws_amount_without_value():
    flow, provider = await make_flow()

    await flow.unwrap("2")

    assert provider.transactions == [(MOCK_WRAPPED_ADDRESS, "withdraw", (2 * ONE_INJ,), 0)]
    assert flow.session.state.wrapped_balance == MOCK_WRAPPED_BALANCE - 2 * ONE_INJ
    assert flow.status.kind == StatusKind.SUCCESS


@pytest.mark.asyncio
@pytest.mark.parametrize("amount", ["0", "-1", "abc", "", "1.2.3", "1e999999"])
async def test_invalid_amount_rejected_before_network(amount):
    flow, provider = await make_flow()

    assert await flow.wrap(amount) is None
    assert await flow.unwrap(amount) is None

    assert flow.status.kind == StatusKind.ERROR
    assert flow.status.message == "Please enter a valid amount!"
    assert provider.events == []


@pytest.mark.asyncio
async def test_not_connected_rejected():
    provider = FakeWalletProvider()
    flow = WrapUnwrapFlow(create_mock_session(provider))

    assert await flow.wrap("1") is None
    assert flow.status.message == "Please connect your wallet first!"
    assert provider.events == []


@pytest.mark.asyncio
async def test_no_wrapped_token_rejected():
    provider = FakeWalletProvider()
    session = create_mock_session(provider, DeploymentConfig(factory_address=MOCK_FACTORY_ADDRESS))
    await session.connect()
    flow = WrapUnwrapFlow(session)

    assert await flow.wrap("1") is None
    assert flow.status.kind == StatusKind.ERROR
    assert provider.transactions == []


@pytest.mark.asyncio
async def test_wallet_rejection_keeps_amount():
    flow, provider = await make_flow()
    provider.failures["deposit"] = TransactionError("User denied transaction signature.")
    flow.amount = "1"

    assert await flow.wrap() is None

    assert flow.status.kind == StatusKind.ERROR
    assert flow.status.message == "Wrap failed: User denied transaction signature."
    assert flow.amount == "1"


@pytest.mark.asyncio
async def test_wrap_and_unwrap_share_in_flight_flag():
    flow, provider = await make_flow()
    provider.gate = asyncio.Event()

    first = asyncio.create_task(flow.wrap("1"))
    while "tx:deposit" not in provider.events:
        await asyncio.sleep(0)

    assert await flow.unwrap("1") is None

    provider.gate.set()
    await first
    assert provider.functions_sent() == ["deposit"]


@pytest.mark.asyncio
async def test_wrap_independent_of_token_creation():
    provider = FakeWalletProvider()
    session = await create_connected_session(provider)
    creation = TokenCreationFlow(session)
    wrapping = WrapUnwrapFlow(session)
    provider.gate = asyncio.Event()

    pending_creation = asyncio.create_task(
        creation.submit(TokenCreationRequest(name="A", ticker="A"))
    )
    while "tx:createToken" not in provider.events:
        await asyncio.sleep(0)

    pending_wrap = asyncio.create_task(wrapping.wrap("1"))
    while "tx:deposit" not in provider.events:
        await asyncio.sleep(0)

    assert creation.status.is_pending and wrapping.status.is_pending
    provider.gate.set()
    await asyncio.gather(pending_creation, pending_wrap)

    assert creation.status.kind == StatusKind.SUCCESS
    assert wrapping.status.kind == StatusKind.SUCCESS
    assert sorted(provider.functions_sent()) == ["createToken", "deposit"]


@pytest.mark.asyncio
async def test_raising_settled_hook_does_not_block_the_flow():
    bus = EventBus()

    async def crash(event, deps):
        raise RuntimeError("ui hook crashed")

    bus.hook(WrapSettledEvent, crash)
    flow, provider = await make_flow(bus=bus)

    assert await flow.wrap("1") is not None
    assert flow.status.kind == StatusKind.SUCCESS

    assert await flow.unwrap("1") is not None
    assert provider.functions_sent() == ["deposit", "withdraw"]
