"""
Unit tests for LeaderboardStore.
"""
import unittest

from errors import ValidationError
from locking import KeyedLock
from trivia import LeaderboardStore
from tests.test_fixtures import PLAYER_WALLET, TestFixtures


class TestLeaderboardStore(unittest.TestCase):

    def setUp(self):
        self.repository = TestFixtures.create_repository()
        self.leaderboard = LeaderboardStore(self.repository, locks=KeyedLock())

    def test_upsert_replaces_entry_wholesale(self):
        self.leaderboard.upsert(1, 'alice', score=50, streak=5)
        self.leaderboard.upsert(1, 'alice', score=20, streak=0, wallet_address=PLAYER_WALLET)

        entries = self.leaderboard.top_n(10)
        self.assertEqual(len(entries), 1)
        self.assertEqual(entries[0].score, 20)
        self.assertEqual(entries[0].streak, 0)
        self.assertEqual(entries[0].wallet_address, PLAYER_WALLET)

    def test_upsert_requires_user_information(self):
        with self.assertRaises(ValidationError):
            self.leaderboard.upsert(None, 'alice')
        with self.assertRaises(ValidationError):
            self.leaderboard.upsert(1, '')

    def test_top_n_orders_by_score_then_streak(self):
        self.leaderboard.upsert(1, 'alice', score=30, streak=1)
        self.leaderboard.upsert(2, 'bob', score=50, streak=0)
        self.leaderboard.upsert(3, 'carol', score=30, streak=4)
        self.leaderboard.upsert(4, 'dave', score=10, streak=9)

        ranked = [entry.username for entry in self.leaderboard.top_n(10)]
        self.assertEqual(ranked, ['bob', 'carol', 'alice', 'dave'])

    def test_top_n_is_sorted_and_bounded(self):
        for fid in range(1, 21):
            self.leaderboard.upsert(fid, f'user{fid}', score=(fid * 7) % 13, streak=fid % 3)

        for n in (0, 1, 5, 20, 50):
            entries = self.leaderboard.top_n(n)
            self.assertEqual(len(entries), min(n, 20))
            keys = [(e.score, e.streak) for e in entries]
            self.assertEqual(keys, sorted(keys, reverse=True))

    def test_ties_keep_insertion_order(self):
        self.leaderboard.upsert(7, 'first', score=10, streak=2)
        self.leaderboard.upsert(3, 'second', score=10, streak=2)

        ranked = [entry.username for entry in self.leaderboard.top_n(2)]
        self.assertEqual(ranked, ['first', 'second'])

    def test_negative_limit_rejected(self):
        with self.assertRaises(ValidationError):
            self.leaderboard.top_n(-1)

    def test_entry_renders_camel_case(self):
        entry = self.leaderboard.upsert(1, 'alice', score=5, streak=1)
        data = entry.to_dict()
        self.assertEqual(data['fid'], 1)
        self.assertIn('lastPlayed', data)
        self.assertIn('walletAddress', data)


if __name__ == '__main__':
    unittest.main()
