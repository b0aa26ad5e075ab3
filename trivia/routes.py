import logging

from flask import Blueprint, current_app, jsonify, request

from errors import ValidationError
from schemas import GameResultSchema, error_payload, leaderboard_action_adapter
from wallet_connect import resolve_wallet_address

logger = logging.getLogger(__name__)

leaderboard_bp = Blueprint('leaderboard', __name__, url_prefix='/api/leaderboard')
game_result_bp = Blueprint('game_result', __name__, url_prefix='/api/game-result')


def _services():
    return current_app.extensions['blitz']


def _missing(message):
    return jsonify({'success': False, 'error': message, 'kind': ValidationError.kind}), 400


def _handle_error(e, operation_name):
    handled = error_payload(e)
    if handled:
        if handled[1] >= 500:
            logger.error(f"❌ {operation_name} failed: {e}")
        return jsonify(handled[0]), handled[1]

    logger.error(f"❌ {operation_name} error: {e}")
    import traceback
    logger.error(f"🔍 Traceback: {traceback.format_exc()}")
    return jsonify({'success': False, 'error': f'Failed to process {operation_name.lower()}'}), 500


@leaderboard_bp.route('', methods=['POST'])
def leaderboard_action():
    """Leaderboard reads/updates and pending BLITZ claims"""
    services = _services()

    try:
        payload = leaderboard_action_adapter.validate_python(request.get_json(silent=True) or {})
        action = payload.action

        if action == 'get':
            entries = services['leaderboard'].top_n(payload.limit)
            return jsonify({'success': True, 'leaderboard': [e.to_dict() for e in entries]})

        if action == 'update':
            if not payload.fid or not payload.username:
                return _missing('Missing user information')

            user_wallet = resolve_wallet_address(payload.wallet_address, payload.context, payload.fid)
            services['leaderboard'].upsert(
                payload.fid, payload.username, payload.score, payload.streak, user_wallet
            )
            return jsonify({'success': True, 'message': 'Leaderboard updated'})

        if action == 'claim':
            if not payload.fid:
                return _missing('Missing user information')

            user_wallet = resolve_wallet_address(payload.wallet_address, payload.context, payload.fid)
            result = services['ledger'].claim(payload.fid, user_wallet)
            return jsonify({
                'success': True,
                'transactionHash': result['transactionHash'],
                'message': f"Successfully claimed {result['amount']} $BLITZ!",
            })

        if action == 'addPending':
            if not payload.fid or not payload.amount:
                return _missing('Missing user information or amount')

            pending = services['ledger'].add_pending(payload.fid, payload.amount)
            return jsonify({
                'success': True,
                'pendingAmount': pending,
                'message': f"{payload.amount} $BLITZ added to pending claims",
            })

        if action == 'getPending':
            if not payload.fid:
                return _missing('Missing user FID')

            return jsonify({'success': True, 'pendingAmount': services['ledger'].get_pending(payload.fid)})

        return _missing('Invalid action')

    except Exception as e:
        return _handle_error(e, 'Leaderboard request')


@game_result_bp.route('', methods=['POST'])
def submit_game_result():
    """Record a trivia round and stage its BLITZ reward"""
    try:
        payload = GameResultSchema.model_validate(request.get_json(silent=True) or {})
        if not payload.fid or not payload.username:
            return _missing('Missing user information')

        result = _services()['trivia'].record_round(
            fid=payload.fid,
            username=payload.username,
            score=payload.score,
            streak=payload.streak,
            is_correct=payload.is_correct,
            round_id=payload.round_id,
            question=payload.question,
            selected_answer=payload.selected_answer,
            correct_answer=payload.correct_answer,
            wallet_address=payload.wallet_address,
            context=payload.context,
        )
        return jsonify({'success': True, **result})

    except Exception as e:
        return _handle_error(e, 'Game result')


@game_result_bp.route('/history/<int:fid>', methods=['GET'])
def game_history(fid):
    """Most recent trivia rounds for a user"""
    try:
        limit = request.args.get('limit', 50, type=int)
        history = _services()['trivia'].get_history(fid, max(0, min(limit, 500)))
        return jsonify({'success': True, 'results': history, 'total': len(history)})

    except Exception as e:
        return _handle_error(e, 'Game history')
