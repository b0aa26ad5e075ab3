import logging
from typing import List, Optional

from errors import ValidationError
from locking import keyed_lock
from models import LeaderboardEntry, utcnow

logger = logging.getLogger(__name__)


class LeaderboardStore:
    """Latest known score/streak per user"""

    def __init__(self, repository, locks=None):
        self.repository = repository
        self.locks = locks or keyed_lock

    def upsert(self, fid: int, username: str, score: int = 0, streak: int = 0,
               wallet_address: Optional[str] = None) -> LeaderboardEntry:
        """Replace the user's entry wholesale (stats are not accumulated)"""
        if not fid or not username:
            raise ValidationError("Missing user information")

        entry = LeaderboardEntry(
            fid=fid,
            username=username,
            score=score or 0,
            streak=streak or 0,
            last_played=utcnow(),
            wallet_address=wallet_address,
        )
        with self.locks.hold(f"leaderboard:{fid}"):
            self.repository.save_leaderboard_entry(entry)

        logger.info(f"🏆 Leaderboard updated: {username} ({fid}) score={entry.score} streak={entry.streak}")
        return entry

    def top_n(self, n: int) -> List[LeaderboardEntry]:
        if n is None or n < 0:
            raise ValidationError("Limit must not be negative")

        entries = self.repository.list_leaderboard_entries()
        # sorted() is stable, so equal score/streak keep insertion order
        ranked = sorted(entries, key=lambda e: (-e.score, -e.streak))
        return ranked[:n]
