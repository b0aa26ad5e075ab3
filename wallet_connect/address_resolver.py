import logging
from typing import Any, Dict, Optional

from web3 import Web3

logger = logging.getLogger(__name__)


def is_valid_address(address) -> bool:
    return isinstance(address, str) and Web3.is_address(address)


def _candidate_addresses(wallet_address: Optional[str], context: Optional[Dict[str, Any]]):
    """Yield (source, address) in priority order"""
    yield 'provided wallet address', wallet_address

    user = (context or {}).get('user') or {}
    yield 'context connected wallet', user.get('connectedWallet')

    verified = user.get('verified_addresses') or {}
    primary = verified.get('primary') or {}
    yield 'primary verified address', primary.get('eth_address')

    eth_addresses = verified.get('eth_addresses') or []
    if eth_addresses:
        yield 'first verified address', eth_addresses[0]

    yield 'Farcaster custody address', user.get('custody_address')


def resolve_wallet_address(wallet_address: Optional[str] = None,
                           context: Optional[Dict[str, Any]] = None,
                           fid: Optional[int] = None) -> Optional[str]:
    """
    Pick the user's on-chain address.

    Priority order:
    1. Explicitly provided address (the connected wallet from the frontend)
    2. Connected wallet from the mini-app context
    3. Verified addresses from context (primary first, then the first listed)
    4. Farcaster custody address
    """
    for source, candidate in _candidate_addresses(wallet_address, context):
        if is_valid_address(candidate):
            logger.info(f"👛 Using {source} for user {fid}: {candidate}")
            return candidate

    logger.warning(f"⚠️ No valid wallet found for user {fid}")
    return None
