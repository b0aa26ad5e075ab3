"""
Error taxonomy shared by the trivia and quiz services.

Every error carries a machine-readable ``kind`` and the HTTP status the
routes answer with. Components raise them; blueprints turn them into
``{"success": False, "error": ..., "kind": ...}`` responses.
"""


class BlitzError(Exception):
    kind = 'error'
    status_code = 500

    def __init__(self, message=None):
        self.message = message or self.__class__.__doc__ or self.kind
        super().__init__(self.message)

    def to_dict(self):
        return {'success': False, 'error': self.message, 'kind': self.kind}


# Client errors - never retried automatically

class ValidationError(BlitzError):
    """Invalid request"""
    kind = 'validation_error'
    status_code = 400


class InvalidAmount(ValidationError):
    """Amount must be a positive number"""
    kind = 'invalid_amount'


class InvalidAddress(ValidationError):
    """No valid wallet address found"""
    kind = 'invalid_address'


class NotQuizHost(ValidationError):
    """Only the quiz host can do this"""
    kind = 'not_quiz_host'
    status_code = 403


class NotFound(BlitzError):
    """Not found"""
    kind = 'not_found'
    status_code = 404


class NotParticipant(NotFound):
    """Not a participant"""
    kind = 'not_participant'


class Conflict(BlitzError):
    """Conflicting request"""
    kind = 'conflict'
    status_code = 409


class NotJoinable(Conflict):
    """Quiz is not active"""
    kind = 'not_joinable'


class QuizFull(Conflict):
    """Quiz is full"""
    kind = 'quiz_full'


class AlreadyJoined(Conflict):
    """Already joined this quiz"""
    kind = 'already_joined'


class AlreadyAnswered(Conflict):
    """Already answered this question"""
    kind = 'already_answered'


class AlreadyCompleted(Conflict):
    """Quiz already completed"""
    kind = 'already_completed'


class InvalidStatusTransition(Conflict):
    """Quiz status cannot change this way"""
    kind = 'invalid_status_transition'


class NoPendingBalance(Conflict):
    """No pending tokens to claim"""
    kind = 'no_pending_balance'


class RewardAlreadyClaimed(Conflict):
    """Reward already claimed"""
    kind = 'reward_already_claimed'


# Collaborator failures - caller may retry, never silently

class ExternalServiceError(BlitzError):
    """External service failed"""
    kind = 'external_service_error'
    status_code = 502


class MintRejected(ExternalServiceError):
    """Token mint failed"""
    kind = 'mint_rejected'


class MintTimeout(ExternalServiceError):
    """Token mint was not confirmed in time"""
    kind = 'mint_timeout'
    status_code = 504


class ClaimFailed(ExternalServiceError):
    """Failed to claim reward"""
    kind = 'claim_failed'

    def __init__(self, message=None, cause=None):
        super().__init__(message)
        self.cause = cause
        if isinstance(cause, ExternalServiceError):
            self.status_code = cause.status_code

    def to_dict(self):
        payload = super().to_dict()
        if self.cause is not None and isinstance(self.cause, BlitzError):
            payload['cause'] = self.cause.kind
        return payload


class PayoutNotRecorded(BlitzError):
    """Reward was minted but could not be recorded"""
    kind = 'payout_not_recorded'
    status_code = 500

    def __init__(self, tx_hash):
        super().__init__(f"Reward minted but not recorded - TX: {tx_hash}")
        self.tx_hash = tx_hash

    def to_dict(self):
        payload = super().to_dict()
        payload['transactionHash'] = self.tx_hash
        return payload


def error_response(error):
    """(body, status) for a BlitzError"""
    return error.to_dict(), error.status_code
