"""
Factory fee discovery.

The factory is read on every creation attempt; a redeployed or reconfigured
factory is picked up without restarting.
"""

import logging

from ..adapters.evm.constants import FeeVariant
from ..adapters.evm.queries import query_fee_constants
from ..schemas.tokens import FeeSchedule, NativeAndWrappedFees, NativeOnlyFees
from .session import WalletSession

logger = logging.getLogger(__name__)


class FeeResolver:
    """Reads the factory's fee constants and normalizes them into a FeeSchedule."""

    def __init__(self, session: WalletSession):
        self.session = session

    async def fetch_fee_schedule(self) -> FeeSchedule:
        """
        Read the fee constants of the configured fee variant.

        Returns:
            NativeOnlyFees or NativeAndWrappedFees.

        Raises:
            ProviderError: If the session is not connected.
            TransactionError: If an accessor call fails.
        """
        provider = self.session.require_connected()
        deployment = self.session.deployment

        if deployment.fee_variant == FeeVariant.NATIVE_ONLY:
            fees = await query_fee_constants(
                provider, deployment.factory_address, deployment.total_fee_accessor
            )
            schedule = NativeOnlyFees(total_fee=fees[deployment.total_fee_accessor])
        else:
            fees = await query_fee_constants(
                provider,
                deployment.factory_address,
                deployment.creation_fee_accessor,
                deployment.bank_module_fee_accessor,
            )
            schedule = NativeAndWrappedFees(
                creation_fee_wrapped=fees[deployment.creation_fee_accessor],
                bank_module_fee_native=fees[deployment.bank_module_fee_accessor],
            )

        logger.info(f"Fee schedule: {schedule.to_canonical_json()}")
        return schedule
