"""Protocol constants for the supported chain families."""

DEFAULT_RPC_TIMEOUT_SECONDS = 10.0
DEFAULT_CATALOG_TIMEOUT_SECONDS = 15.0

BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"

# --- EVM / Tron ---
# keccak("totalSupply()")[:4]
TOTAL_SUPPLY_SELECTOR = "0x18160ddd"

# --- NEAR ---
NEAR_FT_TOTAL_SUPPLY_METHOD = "ft_total_supply"
NEAR_EMPTY_ARGS_BASE64 = "e30="  # base64("{}")

# --- Algorand ---
# Circle's USDC reserve; circulating supply = MAX_UINT64 - reserve holding
ALGORAND_USDC_RESERVE = "2UEQTE5QDNXPI7M3TU44G6SYKLFWLPQO7EBZM7K7MHMQQMFI4QJPLHQFHM"
MAX_UINT64 = 2**64 - 1

# --- Aptos ---
APTOS_METADATA_RESOURCE = "0x1::fungible_asset::Metadata"
APTOS_SUPPLY_FUNCTION = "0x1::fungible_asset::supply"
APTOS_METADATA_MODULES = ("usdt", "usdc")

# --- Starknet ---
# sn_keccak("ERC20_total_supply") storage slot (low u128) per token contract
STARKNET_TOTAL_SUPPLY_KEYS: dict[str, str] = {
    # bridged USDC.e
    "0x053c91253bc9682c04929ca02ed00b3e423f6710d2ee7e0d5ebb06f3ecf368a8": "0x110e2f729c9c2b988559994a3daccd838cf52faf88e18101373e67dd061455a",
    # native USDC
    "0x033068f6539f8e6e6b131e6b2b814e6c34a5224bc66947c47dab9dfee93b35fb": "0x1557182e4359a1f0c6301278e8f5b35a776ab58d39892581e357578fb287836",
}
U128_MASK = 2**128 - 1

# --- XRPL ---
XRPL_CURRENCY_CODE_BYTES = 20
