import logging

from .catalog import QuizCatalog
from .session import QuizSession
from .distributor import RewardDistributor
from .routes import quizzes_bp
from .sample_quizzes import seed_sample_quizzes

logger = logging.getLogger(__name__)


def init_quizzes(app):
    """Initialize the hosted quiz marketplace"""
    app.register_blueprint(quizzes_bp)

    logger.info("✅ Quiz module initialized")
    logger.info("📚 Available endpoints:")
    logger.info("   GET  /api/quizzes?action=get|questions|list|featured|trending|test")
    logger.info("   POST /api/quizzes (create, join, submit-answer, complete, claim-reward, activate, close)")
    return True


__all__ = ['QuizCatalog', 'QuizSession', 'RewardDistributor', 'quizzes_bp',
           'seed_sample_quizzes', 'init_quizzes']
