from __future__ import annotations

# topic0 constants (lowercase, 0x-prefixed)
REGISTERED_T0   = "0xca52e62c367d81bb2e328eb795f7c7ba24afb478408a26c0e201d155c449bc4a"
URI_UPDATED_T0  = "0x3a2c7fffc2cba7582c690e3b82c453ea02a308326a98a3ad7576c606336409fb"

# ABI string header: one offset word + one length word, as 0x-prefixed hex
MIN_DATA_HEX_LENGTH = 66

# registration file format
SPEC_TYPE_VALUE = "https://eips.ethereum.org/EIPS/eip-8004#registration-v1"

KNOWN_PROTOCOLS    = ("mcp", "a2a", "oasf", "ens", "did")
KNOWN_TRUST_TYPES  = ("reputation", "crypto-economic", "tee-attestation")
KNOWN_SPEC_FIELDS  = (
    "type",
    "name",
    "description",
    "image",
    "services",
    "x402Support",
    "active",
    "supportedTrust",
)
X402_FIELD = "x402Support"
X402_ALIAS = "x402support"

# URI prefixes
BASE64_JSON_PREFIX = "data:application/json;base64,"
IPFS_SCHEME = "ipfs://"
