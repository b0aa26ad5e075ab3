"""
Application Configuration
"""
import os


def _env_flag(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


# ============================
# BLITZ Token Settings
# ============================
BLITZ_TOKEN_CONFIG = {
    'RPC_URL': os.getenv('SEPOLIA_RPC_URL', 'https://ethereum-sepolia-rpc.publicnode.com'),
    'CHAIN_ID': int(os.getenv('CHAIN_ID', 11155111)),  # Sepolia
    'TOKEN_ADDRESS': os.getenv('BLITZ_TOKEN_ADDRESS', '0x0de0C9880f32F20F09EFb126E0d36A94f70572B0'),
    'REWARD_WALLET_PRIVATE_KEY': os.getenv('REWARD_WALLET_PRIVATE_KEY'),
    'RECEIPT_TIMEOUT': int(os.getenv('MINT_RECEIPT_TIMEOUT', 120)),  # seconds
    'GAS_LIMIT': int(os.getenv('MINT_GAS_LIMIT', 250000)),
    'EXPLORER_URL': os.getenv('EXPLORER_URL', 'https://sepolia.etherscan.io/tx/'),
}

# ============================
# Trivia Reward Settings
# ============================
REWARDS_CONFIG = {
    # Reward amounts (in BLITZ)
    'CORRECT_ANSWER': os.getenv('REWARD_CORRECT_ANSWER', '10'),
    'PARTICIPATION': os.getenv('REWARD_PARTICIPATION', '1'),
    'STREAK_BONUS': os.getenv('REWARD_STREAK_BONUS', '5'),

    # Bonus is paid on every Nth consecutive correct answer
    'STREAK_INTERVAL': int(os.getenv('REWARD_STREAK_INTERVAL', 5)),
}

# ============================
# Hosted Quiz Settings
# ============================
QUIZ_CONFIG = {
    # Status given to a newly created quiz ('draft' or 'active')
    'DEFAULT_STATUS': os.getenv('QUIZ_DEFAULT_STATUS', 'active'),

    # Question defaults
    'DEFAULT_POINTS': 10,
    'DEFAULT_TIME_LIMIT': 30,  # seconds
    'DEFAULT_MAX_PARTICIPANTS': 100,

    # Prize pool split for rank 1, 2, 3
    'PRIZE_SPLIT': ['0.5', '0.3', '0.2'],

    # Credit prizes to pending claims instead of minting on distribution
    'STAGE_PRIZES': _env_flag('QUIZ_STAGE_PRIZES'),

    # Marketplace listings
    'FEATURED_LIMIT': 5,
    'TRENDING_LIMIT': 10,
}

# ============================
# Storage Settings
# ============================
STORAGE_BACKEND = os.getenv('STORAGE_BACKEND', 'memory')  # 'memory' or 'supabase'
SEED_SAMPLE_QUIZZES = _env_flag('SEED_SAMPLE_QUIZZES', default=True)
LEADERBOARD_DEFAULT_LIMIT = 10
