"""
Unit tests for wallet address resolution.
"""
import unittest

from wallet_connect import is_valid_address, resolve_wallet_address
from tests.test_fixtures import PLAYER_WALLET, SECOND_WALLET, THIRD_WALLET, TestFixtures

CUSTODY_WALLET = '0x' + '99' * 20


class TestResolveWalletAddress(unittest.TestCase):

    def test_explicit_address_wins(self):
        context = TestFixtures.create_context(connected=SECOND_WALLET, primary=THIRD_WALLET)
        self.assertEqual(resolve_wallet_address(PLAYER_WALLET, context, 42), PLAYER_WALLET)

    def test_connected_wallet_from_context(self):
        context = TestFixtures.create_context(connected=SECOND_WALLET, primary=THIRD_WALLET,
                                              custody=CUSTODY_WALLET)
        self.assertEqual(resolve_wallet_address(None, context, 42), SECOND_WALLET)

    def test_primary_verified_before_first_listed(self):
        context = TestFixtures.create_context(primary=THIRD_WALLET, eth_addresses=[SECOND_WALLET])
        self.assertEqual(resolve_wallet_address(None, context, 42), THIRD_WALLET)

    def test_first_verified_address(self):
        context = TestFixtures.create_context(eth_addresses=[SECOND_WALLET, THIRD_WALLET],
                                              custody=CUSTODY_WALLET)
        self.assertEqual(resolve_wallet_address(None, context, 42), SECOND_WALLET)

    def test_custody_address_is_last_resort(self):
        context = TestFixtures.create_context(custody=CUSTODY_WALLET)
        self.assertEqual(resolve_wallet_address(None, context, 42), CUSTODY_WALLET)

    def test_invalid_candidates_are_skipped(self):
        context = TestFixtures.create_context(connected='not-a-wallet', primary='0x1234',
                                              custody=CUSTODY_WALLET)
        self.assertEqual(resolve_wallet_address('', context, 42), CUSTODY_WALLET)

    def test_nothing_valid(self):
        self.assertIsNone(resolve_wallet_address(None, None, 42))
        self.assertIsNone(resolve_wallet_address('garbage', {'user': {}}, 42))

    def test_is_valid_address(self):
        self.assertTrue(is_valid_address(PLAYER_WALLET))
        self.assertFalse(is_valid_address(None))
        self.assertFalse(is_valid_address(12345))
        self.assertFalse(is_valid_address('0xabc'))


if __name__ == '__main__':
    unittest.main()
