import asyncio
import logging

from token_launchpad import Launchpad, TokenCreationRequest
from token_launchpad.adapters.evm import EVMWalletProvider
from token_launchpad.clients import VerificationClient
from token_launchpad.engine import StatusChangedEvent, TokenCreatedEvent, ApprovalFailedEvent

logging.basicConfig(level=logging.INFO)

# Wallet / signer endpoint that exposes eth_requestAccounts and eth_sendTransaction
# (e.g. a local Frame instance). Keys never leave the wallet.
provider = EVMWalletProvider("http://127.0.0.1:1248")

launchpad = Launchpad(provider=provider, verification_client=VerificationClient())


@launchpad.hook(StatusChangedEvent)
async def on_status(event, deps):
    print(f"[{event.flow}] {event.status.kind.value}: {event.status.message}")


@launchpad.hook(ApprovalFailedEvent)
async def on_approval_failed(event, deps):
    print(f"wINJ approval failed: {event.error_message}")


@launchpad.hook(TokenCreatedEvent)
async def on_token_created(event, deps):
    print(f"Token deployed at {event.result.address} ({event.result.address_source})")


async def main():
    if not await launchpad.connect():
        print("Connect failed:", launchpad.connect_error)
        return
    print(launchpad.wallet_label())

    result = await launchpad.create_token(
        TokenCreationRequest(name="My Token", ticker="MTK", raw_supply="1000000", decimals="18")
    )
    if result is None:
        return

    await launchpad.add_token_to_wallet()
    verification = await launchpad.verify_created_token()
    print("Verification:", verification)

    await launchpad.wrap("0.5")


if __name__ == "__main__":
    asyncio.run(main())
