"""Constants shared across the Wallact package."""

# Entity holding the provider-bound, signer-less contract handle.
READ_ENTITY = "readContract"

# The default identity is stored under DEFAULT_ENTITY; DEFAULT_CONTRACT_ALIAS
# names the same entity when addressing its contract handle.
DEFAULT_ENTITY = "defaultWallet"
DEFAULT_CONTRACT_ALIAS = "defaultContract"

DEFAULT_CONFIRMATIONS = 5
DEFAULT_SHARD = "anyShard"

# Relative path descended from the mnemonic's account node.
ACCOUNT_NODE_PATH = "m/44'/60'/0'/0/0"
WALLET_PATH = "44'/60'/0'/0/0"

ETHER_DECIMALS = 18
WEI_PER_ETHER = 10**ETHER_DECIMALS


def canonical_entity(entity: str | None) -> str | None:
    """Normalise an entity name, mapping blanks to ``None`` and aliases to their entity."""
    if not entity:
        return None
    if entity == DEFAULT_CONTRACT_ALIAS:
        return DEFAULT_ENTITY
    return entity
