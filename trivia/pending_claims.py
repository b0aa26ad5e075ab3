import logging
from decimal import Decimal

from blockchain import mask_wallet_address
from errors import InvalidAddress, InvalidAmount, NoPendingBalance
from locking import keyed_lock
from models import (MAX_TOKEN_AMOUNT, PendingClaim, amount_context, format_amount, parse_amount,
                    quantize_amount, utcnow)
from wallet_connect import is_valid_address

logger = logging.getLogger(__name__)


class PendingClaimLedger:
    """Unclaimed BLITZ per user, drained by an explicit claim that mints on-chain"""

    def __init__(self, repository, minter, locks=None):
        self.repository = repository
        self.minter = minter
        self.locks = locks or keyed_lock

        logger.info("💰 Pending Claim Ledger initialized")

    def _key(self, fid):
        return f"pending:{fid}"

    def add_pending(self, fid: int, amount) -> str:
        """Add ``amount`` to the user's pending balance; returns the new balance"""
        try:
            value = quantize_amount(parse_amount(amount))
        except ValueError:
            raise InvalidAmount()
        # Anything below one wei truncates to zero
        if value <= 0:
            raise InvalidAmount()

        with self.locks.hold(self._key(fid)):
            existing = self.repository.get_pending_claim(fid)
            current = parse_amount(existing.amount) if existing else Decimal('0')
            with amount_context():
                total = current + value
            if total > MAX_TOKEN_AMOUNT:
                raise InvalidAmount("Pending balance would exceed the token supply limit")
            new_amount = format_amount(total)

            self.repository.save_pending_claim(PendingClaim(fid=fid, amount=new_amount, updated_at=utcnow()))

        logger.info(f"➕ Pending for {fid}: +{format_amount(value)} BLITZ (total {new_amount})")
        return new_amount

    def get_pending(self, fid: int) -> str:
        claim = self.repository.get_pending_claim(fid)
        return claim.amount if claim else '0'

    def claim(self, fid: int, wallet_address: str) -> dict:
        """
        Mint the full pending balance to ``wallet_address``.

        The balance is cleared only after the mint is confirmed; if the mint
        raises, the balance is untouched and the error propagates.
        """
        with self.locks.hold(self._key(fid)):
            existing = self.repository.get_pending_claim(fid)
            amount = parse_amount(existing.amount) if existing else Decimal('0')
            if amount <= 0:
                raise NoPendingBalance()

            if not is_valid_address(wallet_address):
                raise InvalidAddress()

            logger.info(f"🎁 Claiming {existing.amount} BLITZ for {fid} to {mask_wallet_address(wallet_address)}")
            tx_hash = self.minter.mint(wallet_address, amount)

            self.repository.delete_pending_claim(fid)

        logger.info(f"✅ Claimed {existing.amount} BLITZ for user {fid} - TX: {tx_hash}")
        return {
            'transactionHash': tx_hash,
            'amount': existing.amount,
        }
