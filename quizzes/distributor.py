import logging
from decimal import Decimal

from blockchain import mask_wallet_address
from config import QUIZ_CONFIG
from errors import (ClaimFailed, ExternalServiceError, InvalidAddress, NotParticipant, PayoutNotRecorded,
                    RewardAlreadyClaimed)
from models import amount_context, format_amount, parse_amount
from wallet_connect import is_valid_address

logger = logging.getLogger(__name__)


class RewardDistributor:
    """Splits a quiz's prize pool between its top finishers"""

    def __init__(self, repository, catalog, minter, ledger=None, settings=None):
        settings = settings or QUIZ_CONFIG

        self.repository = repository
        self.catalog = catalog
        self.minter = minter
        self.ledger = ledger
        self.prize_split = [parse_amount(share) for share in settings['PRIZE_SPLIT']]
        self.stage_prizes = bool(settings.get('STAGE_PRIZES'))
        # (quiz_id, fid) -> tx hash of prizes minted but not yet written to the store
        self.unrecorded_payouts = {}

        if self.stage_prizes and ledger is None:
            raise ValueError("STAGE_PRIZES requires a pending claim ledger")

        logger.info(f"🏅 Reward Distributor initialized (split {settings['PRIZE_SPLIT']}, "
                    f"{'staged' if self.stage_prizes else 'direct mint'})")

    def rank_of(self, quiz_id, fid):
        """1-based rank among completed participants, plus how many completed"""
        completed = [p for p in self.repository.get_participants(quiz_id) if p.completed_at]
        # Stable sort keeps roster order for equal scores
        ranked = sorted(completed, key=lambda p: p.score, reverse=True)
        for index, participant in enumerate(ranked):
            if participant.fid == fid:
                return index + 1, len(ranked)
        return None, len(ranked)

    def prize_for_rank(self, prize_pool, rank, finishers) -> Decimal:
        if not rank or rank > len(self.prize_split) or finishers < rank:
            return Decimal('0')
        with amount_context():
            return parse_amount(prize_pool) * self.prize_split[rank - 1]

    def _record_payout(self, quiz_id, fid, amount, tx_hash):
        with self.catalog.locks.hold(self.catalog.lock_key(quiz_id)):
            participant = self.repository.get_participant(quiz_id, fid)
            participant.reward_amount = amount
            participant.reward_tx_hash = tx_hash
            self.repository.save_participant(participant)

    def distribute(self, quiz_id, fid, wallet_address) -> dict:
        with self.catalog.locks.hold(f"prize:{quiz_id}:{fid}"):
            quiz = self.catalog.get(quiz_id)
            participant = self.repository.get_participant(quiz_id, fid)
            if not participant:
                raise NotParticipant()
            if participant.reward_amount is not None or (quiz_id, fid) in self.unrecorded_payouts:
                raise RewardAlreadyClaimed()

            rank, finishers = self.rank_of(quiz_id, fid)
            reward = self.prize_for_rank(quiz.prize_pool, rank, finishers)
            reward_amount = format_amount(reward)

            if parse_amount(reward_amount) <= 0:
                return {
                    'rewardAmount': '0',
                    'rank': rank,
                    'message': 'No reward to claim',
                }

            if self.stage_prizes:
                pending = self.ledger.add_pending(fid, reward_amount)
                self._record_payout(quiz_id, fid, reward_amount, None)
                logger.info(f"🏅 Rank {rank} prize {reward_amount} BLITZ staged for {fid} in {quiz_id}")
                return {
                    'rewardAmount': reward_amount,
                    'rank': rank,
                    'staged': True,
                    'pendingAmount': pending,
                    'message': f"Reward added to pending claims! You earned {reward_amount} BLITZ tokens",
                }

            if not is_valid_address(wallet_address):
                raise InvalidAddress()

            logger.info(f"🏅 Rank {rank} prize {reward_amount} BLITZ for {fid} -> {mask_wallet_address(wallet_address)}")
            try:
                tx_hash = self.minter.mint(wallet_address, parse_amount(reward_amount))
            except ExternalServiceError as e:
                logger.error(f"❌ Failed to mint quiz reward for {fid} in {quiz_id}: {e}")
                raise ClaimFailed("Failed to claim reward", cause=e) from e

            try:
                self._record_payout(quiz_id, fid, reward_amount, tx_hash)
            except Exception as e:
                self.unrecorded_payouts[(quiz_id, fid)] = tx_hash
                logger.error(f"❌ Minted {reward_amount} BLITZ to {fid} in {quiz_id} but could not record it "
                             f"- TX: {tx_hash}: {e}")
                raise PayoutNotRecorded(tx_hash) from e

        return {
            'rewardAmount': reward_amount,
            'rank': rank,
            'transactionHash': tx_hash,
            'message': f"Reward claimed! You earned {reward_amount} BLITZ tokens",
        }
