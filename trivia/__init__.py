import logging

from .rewards import RewardCalculator, RewardSettings
from .pending_claims import PendingClaimLedger
from .leaderboard import LeaderboardStore
from .trivia_manager import TriviaManager
from .routes import leaderboard_bp, game_result_bp

logger = logging.getLogger(__name__)


def init_trivia(app):
    """Initialize single-player trivia, leaderboard and pending claims"""
    app.register_blueprint(leaderboard_bp)
    app.register_blueprint(game_result_bp)

    logger.info("✅ Trivia module initialized")
    logger.info("   POST /api/game-result")
    logger.info("   POST /api/leaderboard (get, update, claim, addPending, getPending)")
    return True


__all__ = ['RewardCalculator', 'RewardSettings', 'PendingClaimLedger', 'LeaderboardStore',
           'TriviaManager', 'leaderboard_bp', 'game_result_bp', 'init_trivia']
