"""
Hardhat contract verification runner.

Runs ``npx hardhat verify`` as a child process (argument vector, no shell)
inside the hardhat project that compiled the factory and its tokens.

Environment Variables:
    - LAUNCHPAD_HARDHAT_DIR: hardhat project directory (default: current directory)
    - LAUNCHPAD_VERIFY_NETWORK: hardhat network name (default: ``inj_testnet``)
"""

import asyncio
import logging
import os
from typing import Any, List, Optional, Sequence

from ..schemas.https import VerificationResponse

logger = logging.getLogger(__name__)

DEFAULT_VERIFY_NETWORK = "inj_testnet"
DEFAULT_VERIFY_TIMEOUT = 300.0


class HardhatVerifier:
    """Verifies deployed contracts on the block explorer through hardhat."""

    def __init__(
        self,
        project_dir: Optional[str] = None,
        network: Optional[str] = None,
        timeout: float = DEFAULT_VERIFY_TIMEOUT,
        executable: str = "npx",
    ):
        self.project_dir = project_dir or os.getenv("LAUNCHPAD_HARDHAT_DIR") or os.getcwd()
        self.network = network or os.getenv("LAUNCHPAD_VERIFY_NETWORK", DEFAULT_VERIFY_NETWORK)
        self.timeout = timeout
        self.executable = executable

    def build_command(self, contract_address: str, constructor_args: Sequence[Any] = ()) -> List[str]:
        """
        Argument vector for ``hardhat verify``.

        ``--force`` is appended only when constructor arguments are given.
        """
        command = [self.executable, "hardhat", "verify", "--network", self.network, contract_address]
        if constructor_args:
            command.extend(str(arg) for arg in constructor_args)
            command.append("--force")
        return command

    async def verify(self, contract_address: str, constructor_args: Sequence[Any] = ()) -> VerificationResponse:
        """
        Run the verification and report its outcome.

        Args:
            contract_address: Deployed contract address.
            constructor_args: Constructor arguments in declaration order.

        Returns:
            VerificationResponse: ``success=True`` with the tool output, or
            ``success=False`` with ``error`` and ``details``.
        """
        command = self.build_command(contract_address, constructor_args)
        printable = " ".join(command)
        logger.info(f"Executing command: {printable}")

        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                cwd=self.project_dir,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            logger.error(f"Verification could not start: {e}")
            return VerificationResponse(success=False, error=f"Command failed: {printable}", details=str(e))

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            logger.error(f"Verification timed out after {self.timeout}s: {printable}")
            return VerificationResponse(
                success=False,
                error=f"Command timed out after {self.timeout:g} seconds: {printable}",
                details=None,
            )

        output = stdout.decode(errors="replace")
        errors = stderr.decode(errors="replace")

        if process.returncode != 0:
            logger.error(f"Verification error (exit {process.returncode}): {errors or output}")
            return VerificationResponse(
                success=False,
                error=f"Command failed: {printable}",
                details=errors or output,
            )

        logger.info(f"Verification output: {output}")
        return VerificationResponse(success=True, message="Contract verified successfully", output=output)
