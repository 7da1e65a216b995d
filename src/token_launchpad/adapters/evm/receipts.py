"""
Creation Receipt Parsing

Finds the deployed token's address in a ``createToken`` receipt.

Two rules are applied in order:

1. **event**: the first log whose ``topics[0]`` is the keccak hash of the
   factory's creation-event signature; the token is its first indexed
   argument (``topics[1]``).
2. **position**: the emitter address of the receipt's second log
   (``logs[1].address``). This relies on the factory emitting its logs in a
   fixed order and breaks silently if that order changes; it is kept for
   factories that do not emit the creation event.

If neither rule matches, ReceiptParsingError is raised.
"""

from typing import Any, Dict, Mapping, Optional, Tuple, Union

from eth_utils import keccak, to_bytes, to_checksum_address

from ...engine.exceptions import ReceiptParsingError

#: Index of the log whose emitter is the deployed token in the positional rule.
POSITIONAL_LOG_INDEX = 1


def event_topic(signature: str) -> bytes:
    """keccak256 of a canonical event signature, e.g. ``Transfer(address,address,uint256)``."""
    return keccak(text=signature)


def _as_bytes(value: Union[bytes, str]) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    return to_bytes(hexstr=value)


def _log_field(log: Mapping[str, Any], key: str) -> Any:
    return log.get(key) if hasattr(log, "get") else getattr(log, key, None)


def find_event_address(receipt: Mapping[str, Any], signature: str) -> Optional[str]:
    """Address carried in ``topics[1]`` of the first log matching ``signature``, if any."""
    topic0 = event_topic(signature)
    for log in receipt.get("logs") or []:
        topics = _log_field(log, "topics") or []
        if len(topics) < 2:
            continue
        if _as_bytes(topics[0]) != topic0:
            continue
        indexed = _as_bytes(topics[1])
        return to_checksum_address("0x" + indexed[-20:].hex())
    return None


def find_positional_address(receipt: Mapping[str, Any], index: int = POSITIONAL_LOG_INDEX) -> Optional[str]:
    """Emitter address of ``logs[index]``, if the receipt has that many logs."""
    logs = receipt.get("logs") or []
    if len(logs) <= index:
        return None
    address = _log_field(logs[index], "address")
    return to_checksum_address(address) if address else None


def extract_token_address(receipt: Dict[str, Any], event_signature: str) -> Tuple[str, str]:
    """
    Locate the deployed token address in a creation receipt.

    Args:
        receipt: Confirmed ``createToken`` receipt.
        event_signature: Canonical signature of the factory's creation event.

    Returns:
        Tuple[str, str]: ``(address, source)`` with source ``"event"`` or ``"position"``.

    Raises:
        ReceiptParsingError: If no rule yields an address.
    """
    address = find_event_address(receipt, event_signature)
    if address:
        return address, "event"

    address = find_positional_address(receipt)
    if address:
        return address, "position"

    tx_hash = receipt.get("transactionHash")
    if isinstance(tx_hash, (bytes, bytearray)):
        tx_hash = "0x" + bytes(tx_hash).hex()
    raise ReceiptParsingError(
        f"Token address not found in receipt: no {event_signature.split('(')[0]} event "
        f"and fewer than {POSITIONAL_LOG_INDEX + 1} logs",
        tx_hash=tx_hash,
    )
