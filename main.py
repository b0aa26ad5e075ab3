from flask import Flask, jsonify
from flask_compress import Compress
import os
import logging

from config import QUIZ_CONFIG, SEED_SAMPLE_QUIZZES, STORAGE_BACKEND
from blockchain import TokenMintService
from storage import create_repository
from quizzes import QuizCatalog, QuizSession, RewardDistributor, init_quizzes, seed_sample_quizzes
from trivia import (LeaderboardStore, PendingClaimLedger, RewardCalculator, RewardSettings,
                    TriviaManager, init_trivia)
from wallet_connect import init_wallet_connect

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

# Reduce werkzeug logging for health checks
logging.getLogger('werkzeug').setLevel(logging.ERROR)
logging.getLogger('httpx').setLevel(logging.ERROR)


def build_services(repository=None, minter=None, reward_settings=None, quiz_settings=None):
    """Wire storage, the mint collaborator and every service around them"""
    repository = repository or create_repository(STORAGE_BACKEND)
    minter = minter or TokenMintService()
    quiz_settings = quiz_settings or QUIZ_CONFIG

    calculator = RewardCalculator(reward_settings or RewardSettings.from_config())
    ledger = PendingClaimLedger(repository, minter)
    leaderboard = LeaderboardStore(repository)
    catalog = QuizCatalog(repository, settings=quiz_settings)

    return {
        'repository': repository,
        'minter': minter,
        'calculator': calculator,
        'ledger': ledger,
        'leaderboard': leaderboard,
        'catalog': catalog,
        'session': QuizSession(repository, catalog),
        'distributor': RewardDistributor(repository, catalog, minter, ledger=ledger, settings=quiz_settings),
        'trivia': TriviaManager(repository, calculator, ledger, leaderboard),
    }


def create_app(services=None, seed=None):
    app = Flask(__name__)
    app.secret_key = os.environ.get('SECRET_KEY', 'your-secret-key-here')
    app.config['JSON_SORT_KEYS'] = False

    # Enable gzip compression
    compress = Compress()
    compress.init_app(app)

    services = services or build_services()
    app.extensions['blitz'] = services

    if seed is None:
        seed = SEED_SAMPLE_QUIZZES
    if seed:
        try:
            seed_sample_quizzes(services['repository'])
        except Exception as e:
            logger.error(f"❌ Error seeding sample quizzes: {e}")

    init_quizzes(app)
    init_trivia(app)
    init_wallet_connect(app)

    @app.route('/health')
    def health():
        return jsonify({'status': 'healthy', 'service': 'based-blitz'})

    logger.info("🚀 Based Blitz API ready")
    return app


if __name__ == '__main__':
    port = int(os.environ.get('PORT', 5000))
    create_app().run(host='0.0.0.0', port=port, debug=False)
