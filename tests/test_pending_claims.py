"""
Unit tests for PendingClaimLedger.
"""
import threading
import time
import unittest

from errors import InvalidAddress, InvalidAmount, MintRejected, MintTimeout, NoPendingBalance
from locking import KeyedLock
from models import MAX_TOKEN_AMOUNT, format_amount
from trivia import PendingClaimLedger
from tests.test_fixtures import PLAYER_WALLET, TX_HASH, TestFixtures


class TestPendingClaimLedger(unittest.TestCase):
    """Test cases for staging and claiming BLITZ."""

    def setUp(self):
        self.repository = TestFixtures.create_repository()
        self.minter = TestFixtures.create_minter()
        self.ledger = PendingClaimLedger(self.repository, self.minter, locks=KeyedLock())

    def test_get_pending_defaults_to_zero(self):
        self.assertEqual(self.ledger.get_pending(42), '0')

    def test_add_pending_accumulates(self):
        self.ledger.add_pending(42, '10')
        self.ledger.add_pending(42, '1')
        self.assertEqual(self.ledger.add_pending(42, '5'), '16')
        self.assertEqual(self.ledger.get_pending(42), '16')

    def test_add_pending_keeps_fractions(self):
        self.ledger.add_pending(42, '0.1')
        self.ledger.add_pending(42, '0.2')
        self.assertEqual(self.ledger.get_pending(42), '0.3')

    def test_add_pending_rejects_non_positive_amounts(self):
        for amount in ('0', '-5', 'abc', '', 'NaN'):
            with self.assertRaises(InvalidAmount):
                self.ledger.add_pending(42, amount)
        self.assertEqual(self.ledger.get_pending(42), '0')

    def test_add_pending_large_amounts(self):
        self.assertEqual(self.ledger.add_pending(42, '123456789012'), '123456789012')
        self.assertEqual(self.ledger.add_pending(42, '0.000000000000000001'), '123456789012.000000000000000001')

    def test_add_pending_rejects_sub_wei_amounts(self):
        with self.assertRaises(InvalidAmount):
            self.ledger.add_pending(42, '0.0000000000000000001')
        self.assertEqual(self.ledger.get_pending(42), '0')
        self.assertIsNone(self.repository.get_pending_claim(42))

    def test_add_pending_rejects_uint256_overflow(self):
        with self.assertRaises(InvalidAmount):
            self.ledger.add_pending(42, '1e60')

        self.ledger.add_pending(42, MAX_TOKEN_AMOUNT)
        with self.assertRaises(InvalidAmount):
            self.ledger.add_pending(42, '1')
        self.assertEqual(self.ledger.get_pending(42), format_amount(MAX_TOKEN_AMOUNT))

    def test_claim_mints_full_balance_and_clears(self):
        self.ledger.add_pending(42, '11')

        result = self.ledger.claim(42, PLAYER_WALLET)

        self.assertEqual(result['transactionHash'], TX_HASH)
        self.assertEqual(result['amount'], '11')
        self.minter.mint.assert_called_once()
        address, amount = self.minter.mint.call_args[0]
        self.assertEqual(address, PLAYER_WALLET)
        self.assertEqual(str(amount), '11')
        self.assertEqual(self.ledger.get_pending(42), '0')

    def test_claim_without_balance(self):
        with self.assertRaises(NoPendingBalance):
            self.ledger.claim(42, PLAYER_WALLET)
        self.minter.mint.assert_not_called()

    def test_claim_checks_balance_before_address(self):
        with self.assertRaises(NoPendingBalance):
            self.ledger.claim(42, 'not-an-address')

    def test_claim_rejects_invalid_address(self):
        self.ledger.add_pending(42, '10')
        for address in (None, '', 'not-an-address', '0x1234'):
            with self.assertRaises(InvalidAddress):
                self.ledger.claim(42, address)
        self.minter.mint.assert_not_called()
        self.assertEqual(self.ledger.get_pending(42), '10')

    def test_failed_mint_keeps_balance(self):
        """A failed claim never debits the pending balance."""
        self.ledger.add_pending(42, '25')
        self.minter.mint.side_effect = MintRejected("Transaction failed on blockchain")

        before = self.ledger.get_pending(42)
        with self.assertRaises(MintRejected):
            self.ledger.claim(42, PLAYER_WALLET)

        self.assertEqual(self.ledger.get_pending(42), before)

    def test_mint_timeout_keeps_balance(self):
        self.ledger.add_pending(42, '25')
        self.minter.mint.side_effect = MintTimeout()

        with self.assertRaises(MintTimeout):
            self.ledger.claim(42, PLAYER_WALLET)
        self.assertEqual(self.ledger.get_pending(42), '25')

        # A later successful claim still pays the whole balance
        self.minter.mint.side_effect = None
        self.ledger.claim(42, PLAYER_WALLET)
        self.assertEqual(self.ledger.get_pending(42), '0')

    def test_concurrent_claims_mint_once(self):
        self.ledger.add_pending(42, '30')

        def slow_mint(address, amount):
            time.sleep(0.05)
            return TX_HASH

        self.minter.mint.side_effect = slow_mint
        outcomes = []

        def claim():
            try:
                self.ledger.claim(42, PLAYER_WALLET)
                outcomes.append('claimed')
            except NoPendingBalance:
                outcomes.append('empty')

        threads = [threading.Thread(target=claim) for _ in range(5)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(outcomes.count('claimed'), 1)
        self.assertEqual(outcomes.count('empty'), 4)
        self.assertEqual(self.minter.mint.call_count, 1)

    def test_balances_are_per_user(self):
        self.ledger.add_pending(1, '5')
        self.ledger.add_pending(2, '7')
        self.ledger.claim(1, PLAYER_WALLET)
        self.assertEqual(self.ledger.get_pending(1), '0')
        self.assertEqual(self.ledger.get_pending(2), '7')


if __name__ == '__main__':
    unittest.main()
