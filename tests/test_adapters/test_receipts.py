"""
Test suite for creation receipt parsing.
"""
import pytest
from eth_utils import keccak

from token_launchpad.adapters.evm.abis import event_signature, get_token_created_event_abi
from token_launchpad.adapters.evm.constants import DeploymentConfig
from token_launchpad.adapters.evm.receipts import (
    event_topic,
    extract_token_address,
    find_event_address,
    find_positional_address,
)
from token_launchpad.engine.exceptions import ReceiptParsingError

from adapter_mocks import (
    create_event_log,
    create_log,
    MOCK_ACCOUNT,
    MOCK_TOKEN,
    MOCK_FACTORY,
    MOCK_TX_HASH,
    MOCK_TX_HASH_BYTES,
    TOKEN_CREATED,
)


def test_event_topic_matches_abi_signature():
    signature = event_signature(get_token_created_event_abi()[0])

    assert signature == TOKEN_CREATED
    assert event_topic(signature) == keccak(text=TOKEN_CREATED)
    assert DeploymentConfig(factory_address=MOCK_FACTORY).token_created_event == TOKEN_CREATED


def test_event_rule_wins_over_position():
    receipt = {"logs": [create_log(MOCK_FACTORY), create_log(MOCK_ACCOUNT), create_event_log()]}

    assert extract_token_address(receipt, TOKEN_CREATED) == (MOCK_TOKEN, "event")


def test_event_with_bytes_topics():
    log = create_event_log()
    log["topics"] = [bytes.fromhex(t[2:]) for t in log["topics"]]

    assert find_event_address({"logs": [log]}, TOKEN_CREATED) == MOCK_TOKEN


def test_other_events_are_ignored():
    receipt = {"logs": [create_event_log(signature="TokenCreated(address)")]}

    assert find_event_address(receipt, TOKEN_CREATED) is None


def test_positional_fallback_uses_second_log():
    receipt = {"logs": [create_log(MOCK_FACTORY), create_log(MOCK_TOKEN.lower())]}

    assert extract_token_address(receipt, TOKEN_CREATED) == (MOCK_TOKEN, "position")


def test_positional_rule_needs_two_logs():
    assert find_positional_address({"logs": [create_log(MOCK_TOKEN)]}) is None
    assert find_positional_address({"logs": []}) is None
    assert find_positional_address({}) is None


@pytest.mark.parametrize("tx_hash", [MOCK_TX_HASH, MOCK_TX_HASH_BYTES])
def test_no_rule_matches_raises_with_hash(tx_hash):
    receipt = {"logs": [create_log(MOCK_FACTORY)], "transactionHash": tx_hash}

    with pytest.raises(ReceiptParsingError) as exc_info:
        extract_token_address(receipt, TOKEN_CREATED)

    assert exc_info.value.tx_hash == MOCK_TX_HASH
    assert "TokenCreated" in str(exc_info.value)
