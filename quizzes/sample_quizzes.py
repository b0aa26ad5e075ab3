import logging
from datetime import timedelta

from models import Question, Quiz, utcnow

logger = logging.getLogger(__name__)

SAMPLE_QUIZZES = [
    {
        'id': 'quiz_1',
        'title': 'Crypto Knowledge Challenge',
        'description': 'Test your knowledge about cryptocurrencies, blockchain, and DeFi!',
        'host_fid': 1234,
        'host_username': 'crypto_expert',
        'host_wallet_address': '0x1234567890123456789012345678901234567890',
        'category': 'Science & Technology',
        'difficulty': 'medium',
        'entry_fee': '5',
        'prize_pool': '500',
        'max_participants': 100,
        'age_hours': 24,
        'duration_days': 7,
    },
    {
        'id': 'quiz_2',
        'title': 'Farcaster Trivia',
        'description': 'How well do you know the Farcaster ecosystem?',
        'host_fid': 5678,
        'host_username': 'farcaster_fan',
        'host_wallet_address': '0x2345678901234567890123456789012345678901',
        'category': 'General Knowledge',
        'difficulty': 'easy',
        'entry_fee': '0',
        'prize_pool': '200',
        'max_participants': 50,
        'age_hours': 12,
        'duration_days': 3,
    },
    {
        'id': 'quiz_3',
        'title': 'Web3 Development Master',
        'description': 'Advanced questions about smart contracts, dApps, and blockchain development',
        'host_fid': 9101,
        'host_username': 'web3_dev',
        'host_wallet_address': '0x3456789012345678901234567890123456789012',
        'category': 'Science & Technology',
        'difficulty': 'hard',
        'entry_fee': '10',
        'prize_pool': '1000',
        'max_participants': 30,
        'age_hours': 6,
        'duration_days': 5,
    },
]

SAMPLE_QUESTIONS = [
    {
        'question': 'What is the primary purpose of blockchain technology?',
        'options': ['To create digital currencies', 'To provide decentralized trust',
                    'To speed up transactions', 'To reduce costs'],
        'correct_answer': 'To provide decentralized trust',
    },
    {
        'question': 'Which consensus mechanism does Bitcoin use?',
        'options': ['Proof of Stake', 'Proof of Work', 'Delegated Proof of Stake', 'Proof of Authority'],
        'correct_answer': 'Proof of Work',
    },
    {
        'question': 'What does DeFi stand for?',
        'options': ['Decentralized Finance', 'Digital Finance', 'Distributed Finance', 'Direct Finance'],
        'correct_answer': 'Decentralized Finance',
    },
]


def seed_sample_quizzes(repository) -> int:
    """Load the demo quizzes into an empty store; returns how many were added"""
    now = utcnow()
    added = 0

    for sample in SAMPLE_QUIZZES:
        if repository.get_quiz(sample['id']):
            continue

        created_at = now - timedelta(hours=sample['age_hours'])
        quiz = Quiz(
            id=sample['id'],
            title=sample['title'],
            description=sample['description'],
            host_fid=sample['host_fid'],
            host_username=sample['host_username'],
            host_wallet_address=sample['host_wallet_address'],
            category=sample['category'],
            difficulty=sample['difficulty'],
            entry_fee=sample['entry_fee'],
            prize_pool=sample['prize_pool'],
            max_participants=sample['max_participants'],
            current_participants=0,
            status='active',
            start_time=created_at,
            end_time=now + timedelta(days=sample['duration_days']),
            created_at=created_at,
            updated_at=now,
        )
        questions = [
            Question(
                id=f"q_{quiz.id}_{index}",
                quiz_id=quiz.id,
                question=item['question'],
                options=list(item['options']),
                correct_answer=item['correct_answer'],
                points=10,
                time_limit=30,
                order=index,
            )
            for index, item in enumerate(SAMPLE_QUESTIONS)
        ]
        repository.create_quiz(quiz, questions)
        added += 1

    logger.info(f"🌱 Seeded {added} sample quizzes")
    return added
