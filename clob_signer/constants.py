"""
Compatibility-critical constants for the Polymarket CLOB.

Contract addresses: https://github.com/Polymarket/ctf-exchange and
https://github.com/Polymarket/neg-risk-ctf-adapter (Polygon mainnet).
Changing any value here produces signatures the exchange silently rejects.
"""

# Polygon Mainnet
POLYGON_CHAIN_ID = 137

# Verifying contracts for the order domain
CTF_EXCHANGE = "0x4bFb41d5B3570DeFd03C39a9A4D8dE6Bd8B8982E"  # Standard markets
NEG_RISK_CTF_EXCHANGE = "0xC5d563A36AE78145C45a50134d48A1215220f80a"  # Negative-risk markets

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# EIP-712 domains
AUTH_DOMAIN_NAME = "ClobAuthDomain"
ORDER_DOMAIN_NAME = "Polymarket CTF Exchange"
DOMAIN_VERSION = "1"

# Wallet attestation signed during credential derivation
CLOB_AUTH_MESSAGE = "This message attests that I control the given wallet"

# Signatures carry v = recoveryId + 27 (Ethereum convention expected by the exchange)
RECOVERY_ID_OFFSET = 27

# Order defaults
FEE_RATE_BPS = 100
FIXED_POINT_DECIMALS = 6
FIXED_POINT_FACTOR = 10 ** FIXED_POINT_DECIMALS  # 1,000,000
ORDER_EXPIRATION = 0  # No expiry (GTC)
ORDER_NONCE = 0

# Largest value representable in a uint256 word
MAX_UINT256 = 2 ** 256 - 1

# Endpoints
DERIVE_API_KEY_PATH = "/auth/derive-api-key"
ORDER_PATH = "/order"

# L2 authentication headers
POLY_ADDRESS = "POLY_ADDRESS"
POLY_SIGNATURE = "POLY_SIGNATURE"
POLY_TIMESTAMP = "POLY_TIMESTAMP"
POLY_API_KEY = "POLY_API_KEY"
POLY_PASSPHRASE = "POLY_PASSPHRASE"


def exchange_for(neg_risk: bool) -> str:
    """Return the verifying contract governing a market."""
    return NEG_RISK_CTF_EXCHANGE if neg_risk else CTF_EXCHANGE
