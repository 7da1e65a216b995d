"""
Test suite for the contract verification service and its client.
Tests: 1) Endpoint contract 2) Hardhat command construction 3) Subprocess outcomes 4) httpx client
"""
import asyncio
import sys
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from fastapi.testclient import TestClient

from token_launchpad.clients.verify_client import VerificationClient
from token_launchpad.engine.exceptions import VerificationError
from token_launchpad.schemas.https import VerificationResponse
from token_launchpad.servers.apps import create_verification_app
from token_launchpad.servers.verifier import HardhatVerifier

MOCK_CONTRACT = "0xfB6916095ca1df60bB79Ce92cE3Ea74c37c5d359"


def create_mock_verifier(response: VerificationResponse) -> MagicMock:
    verifier = MagicMock(spec=HardhatVerifier)
    verifier.verify = AsyncMock(return_value=response)
    return verifier


# ==================== Endpoint ====================

def test_missing_address_returns_400():
    verifier = create_mock_verifier(VerificationResponse(success=True))
    client = TestClient(create_verification_app(verifier))

    response = client.post("/verify", json={"constructorArgs": []})

    assert response.status_code == 400
    assert response.json() == {"error": "contractAddress is required"}
    verifier.verify.assert_not_awaited()


def test_invalid_body_returns_400():
    client = TestClient(create_verification_app(create_mock_verifier(VerificationResponse(success=True))))

    response = client.post("/verify", content=b"not json", headers={"content-type": "application/json"})

    assert response.status_code == 400


def test_success_returns_output():
    verifier = create_mock_verifier(
        VerificationResponse(success=True, message="Contract verified successfully", output="Verified")
    )
    client = TestClient(create_verification_app(verifier))

    response = client.post("/verify", json={"contractAddress": MOCK_CONTRACT, "constructorArgs": ["My Token", 18]})

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Contract verified successfully", "output": "Verified"}
    verifier.verify.assert_awaited_once_with(MOCK_CONTRACT, ["My Token", 18])


def test_failure_returns_500():
    verifier = create_mock_verifier(
        VerificationResponse(success=False, error="Command failed: npx hardhat verify", details="Already verified")
    )
    client = TestClient(create_verification_app(verifier))

    response = client.post("/verify", json={"contractAddress": MOCK_CONTRACT})

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "error": "Command failed: npx hardhat verify",
        "details": "Already verified",
    }


def test_cors_allows_any_origin():
    client = TestClient(create_verification_app(create_mock_verifier(VerificationResponse(success=True))))

    response = client.options(
        "/verify",
        headers={"Origin": "http://localhost:5173", "Access-Control-Request-Method": "POST"},
    )

    assert response.headers["access-control-allow-origin"] in ("*", "http://localhost:5173")


# ==================== Hardhat runner ====================

def test_command_without_constructor_args():
    verifier = HardhatVerifier(project_dir="/tmp", network="inj_testnet")

    assert verifier.build_command(MOCK_CONTRACT) == [
        "npx", "hardhat", "verify", "--network", "inj_testnet", MOCK_CONTRACT,
    ]


def test_command_with_constructor_args_forces():
    verifier = HardhatVerifier(project_dir="/tmp", network="inj_testnet")

    assert verifier.build_command(MOCK_CONTRACT, ["My Token", 18]) == [
        "npx", "hardhat", "verify", "--network", "inj_testnet", MOCK_CONTRACT, "My Token", "18", "--force",
    ]


def test_network_from_environment(monkeypatch):
    monkeypatch.setenv("LAUNCHPAD_VERIFY_NETWORK", "inj_mainnet")
    monkeypatch.setenv("LAUNCHPAD_HARDHAT_DIR", "/srv/hardhat")

    verifier = HardhatVerifier()

    assert verifier.network == "inj_mainnet"
    assert verifier.project_dir == "/srv/hardhat"


class ScriptVerifier(HardhatVerifier):
    """Runs a Python one-liner in place of hardhat."""

    def __init__(self, script: str, timeout: float = 30.0):
        super().__init__(project_dir=".", network="inj_testnet", timeout=timeout)
        self.script = script

    def build_command(self, contract_address, constructor_args=()):
        return [sys.executable, "-c", self.script]


@pytest.mark.asyncio
async def test_verifier_success():
    result = await ScriptVerifier("print('Successfully verified contract')").verify(MOCK_CONTRACT)

    assert result.success
    assert result.message == "Contract verified successfully"
    assert "Successfully verified contract" in result.output


@pytest.mark.asyncio
async def test_verifier_failure_reports_stderr():
    script = "import sys; sys.stderr.write('Already Verified'); sys.exit(1)"
    result = await ScriptVerifier(script).verify(MOCK_CONTRACT)

    assert not result.success
    assert result.error.startswith("Command failed: ")
    assert result.details == "Already Verified"


@pytest.mark.asyncio
async def test_verifier_timeout():
    result = await ScriptVerifier("import time; time.sleep(5)", timeout=0.2).verify(MOCK_CONTRACT)

    assert not result.success
    assert "timed out" in result.error


@pytest.mark.asyncio
async def test_verifier_missing_executable():
    verifier = HardhatVerifier(project_dir=".", executable="definitely-not-a-real-binary-xyz")

    result = await verifier.verify(MOCK_CONTRACT)

    assert not result.success
    assert result.details


# ==================== Client ====================

def create_client(handler) -> VerificationClient:
    return VerificationClient(base_url="http://verifier.test", transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_client_sends_camel_case_body():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = request.read()
        return httpx.Response(200, json={"success": True, "message": "Contract verified successfully", "output": "ok"})

    async with create_client(handler) as client:
        result = await client.verify(MOCK_CONTRACT, ["My Token"])

    assert seen["path"] == "/verify"
    assert b'"contractAddress"' in seen["body"]
    assert b'"constructorArgs"' in seen["body"]
    assert result.success
    assert result.output == "ok"


@pytest.mark.asyncio
async def test_client_returns_failed_verification():
    def handler(request):
        return httpx.Response(500, json={"success": False, "error": "Command failed", "details": "boom"})

    async with create_client(handler) as client:
        result = await client.verify(MOCK_CONTRACT)

    assert not result.success
    assert result.details == "boom"


@pytest.mark.asyncio
async def test_client_bad_request_raises():
    def handler(request):
        return httpx.Response(400, json={"error": "contractAddress is required"})

    async with create_client(handler) as client:
        with pytest.raises(VerificationError, match="contractAddress is required"):
            await client.verify("")


@pytest.mark.asyncio
async def test_client_unreachable_raises():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with create_client(handler) as client:
        with pytest.raises(VerificationError, match="unreachable"):
            await client.verify(MOCK_CONTRACT)
