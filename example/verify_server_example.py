from token_launchpad.servers import HardhatVerifier, create_verification_app

# Hardhat project that compiled the factory and token contracts.
app = create_verification_app(
    HardhatVerifier(project_dir="./contracts", network="inj_testnet"),
    title="Launchpad Verification API",
)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="localhost", port=3001, log_level="debug")
