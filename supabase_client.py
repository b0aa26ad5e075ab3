import os
import logging
import time
from functools import wraps
from supabase import create_client, Client

# Configure logging
logger = logging.getLogger(__name__)

# Supabase configuration
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_KEY = os.getenv("SUPABASE_ANON_KEY")

# Lazily created client
supabase: Client = None
supabase_enabled = False

CONNECTION_ERROR_KEYWORDS = ['server disconnected', 'connection', 'timeout', 'network']


def retry_on_connection_error(max_retries=3, delay=1):
    """Decorator to retry database operations on connection errors"""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            last_exception = None

            for attempt in range(max_retries):
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    last_exception = e
                    error_msg = str(e).lower()

                    # Check if it's a connection-related error
                    if any(keyword in error_msg for keyword in CONNECTION_ERROR_KEYWORDS):
                        if attempt < max_retries - 1:
                            logger.warning(f"⚠️ Connection error on attempt {attempt + 1}/{max_retries}: {e}")
                            time.sleep(delay * (attempt + 1))  # Linear backoff
                            continue
                        else:
                            logger.error(f"❌ All {max_retries} connection attempts failed: {e}")
                    else:
                        # Not a connection error, don't retry
                        raise

            # If we get here, all retries failed
            raise last_exception
        return wrapper
    return decorator


def get_supabase_client(url=None, key=None):
    """Get Supabase client instance with retry logic for initialization"""
    global supabase, supabase_enabled

    if supabase_enabled and supabase is not None:
        return supabase

    url = url or SUPABASE_URL
    key = key or SUPABASE_KEY

    if not url or not key or url == "your-supabase-url":
        logger.error("❌ SUPABASE NOT CONFIGURED!")
        logger.error(f"   SUPABASE_URL exists: {bool(url)}")
        logger.error(f"   SUPABASE_KEY exists: {bool(key)}")
        logger.info("💡 Set SUPABASE_URL and SUPABASE_ANON_KEY environment variables to enable Supabase storage")
        return None

    # Attempt to create client, with retries for initial connection
    for attempt in range(3):
        try:
            client = create_client(url, key)
            # Test connection by performing a simple query
            client.table("quizzes").select("id").limit(1).execute()
            supabase = client
            supabase_enabled = True
            logger.info("✅ Supabase client initialized successfully")
            return supabase
        except Exception as e:
            logger.error(f"❌ Supabase initialization failed on attempt {attempt + 1}: {e}")
            if attempt < 2:
                time.sleep(2)  # Wait before retrying initialization

    logger.error("💡 Check your Supabase URL and API key in environment variables")
    supabase_enabled = False
    return None


# SQL COMMANDS TO RUN IN YOUR SUPABASE SQL EDITOR:

"""
-- 1. Hosted quizzes
CREATE TABLE IF NOT EXISTS quizzes (
    id VARCHAR(64) PRIMARY KEY,
    title VARCHAR(200) NOT NULL,
    description TEXT NOT NULL,
    host_fid BIGINT NOT NULL,
    host_username VARCHAR(100) NOT NULL,
    host_wallet_address VARCHAR(42),
    category VARCHAR(100) NOT NULL,
    difficulty VARCHAR(10) DEFAULT 'medium', -- 'easy', 'medium', 'hard'
    entry_fee NUMERIC(78, 18) DEFAULT 0,
    prize_pool NUMERIC(78, 18) DEFAULT 0,
    max_participants INTEGER NOT NULL,
    current_participants INTEGER DEFAULT 0 CHECK (current_participants <= max_participants),
    status VARCHAR(20) DEFAULT 'active', -- 'draft', 'active', 'completed'
    start_time TIMESTAMP WITH TIME ZONE,
    end_time TIMESTAMP WITH TIME ZONE,
    created_at TIMESTAMP WITH TIME ZONE DEFAULT NOW(),
    updated_at TIMESTAMP WITH TIME ZONE DEFAULT NOW()
);

-- 2. Questions (immutable after creation)
CREATE TABLE IF NOT EXISTS quiz_questions (
    id VARCHAR(100) PRIMARY KEY,
    quiz_id VARCHAR(64) NOT NULL REFERENCES quizzes(id) ON DELETE CASCADE,
    question TEXT NOT NULL,
    options JSONB NOT NULL,
    correct_answer TEXT NOT NULL,
    points INTEGER DEFAULT 10,
    time_limit INTEGER DEFAULT 30,
    "order" INTEGER NOT NULL
);

-- 3. Participant roster, answers kept inline
CREATE TABLE IF NOT EXISTS quiz_participants (
    id VARCHAR(100) PRIMARY KEY,
    quiz_id VARCHAR(64) NOT NULL REFERENCES quizzes(id) ON DELETE CASCADE,
    fid BIGINT NOT NULL,
    username VARCHAR(100),
    wallet_address VARCHAR(42),
    score INTEGER DEFAULT 0,
    streak INTEGER DEFAULT 0,
    answers JSONB DEFAULT '[]',
    joined_at TIMESTAMP WITH TIME ZONE DEFAULT NOW(),
    completed_at TIMESTAMP WITH TIME ZONE,
    reward_amount NUMERIC(78, 18),
    reward_tx_hash VARCHAR(66),
    UNIQUE (quiz_id, fid)
);

-- 4. Trivia leaderboard (latest stats per user)
CREATE TABLE IF NOT EXISTS leaderboard (
    fid BIGINT PRIMARY KEY,
    username VARCHAR(100) NOT NULL,
    score INTEGER DEFAULT 0,
    streak INTEGER DEFAULT 0,
    last_played TIMESTAMP WITH TIME ZONE DEFAULT NOW(),
    wallet_address VARCHAR(42)
);

-- 5. Unclaimed BLITZ per user
CREATE TABLE IF NOT EXISTS pending_claims (
    fid BIGINT PRIMARY KEY,
    amount NUMERIC(78, 18) NOT NULL,
    updated_at TIMESTAMP WITH TIME ZONE DEFAULT NOW()
);

-- 6. Single-player round history
CREATE TABLE IF NOT EXISTS game_results (
    id SERIAL PRIMARY KEY,
    fid BIGINT NOT NULL,
    username VARCHAR(100),
    wallet_address VARCHAR(42),
    score INTEGER,
    streak INTEGER,
    round_id VARCHAR(100),
    is_correct BOOLEAN,
    question TEXT,
    selected_answer TEXT,
    correct_answer TEXT,
    token_amount NUMERIC(78, 18),
    created_at TIMESTAMP WITH TIME ZONE DEFAULT NOW()
);

CREATE INDEX IF NOT EXISTS idx_quizzes_status ON quizzes(status);
CREATE INDEX IF NOT EXISTS idx_leaderboard_score ON leaderboard(score DESC, streak DESC);
CREATE INDEX IF NOT EXISTS idx_game_results_fid ON game_results(fid);
"""
