import logging
from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify, request

from errors import ValidationError
from schemas import error_payload, quiz_action_adapter
from wallet_connect import resolve_wallet_address

logger = logging.getLogger(__name__)

quizzes_bp = Blueprint('quizzes', __name__, url_prefix='/api/quizzes')


def _services():
    return current_app.extensions['blitz']


@quizzes_bp.route('', methods=['GET'])
def quiz_query():
    """Read-only quiz actions selected by ?action="""
    action = request.args.get('action')
    quiz_id = request.args.get('quizId')
    catalog = _services()['catalog']

    try:
        if action == 'test':
            return jsonify({
                'success': True,
                'message': 'Quiz API is working',
                'timestamp': datetime.now(timezone.utc).isoformat(),
                'quizzesCount': len(catalog.list()),
            })

        if action == 'get' and quiz_id:
            quiz = catalog.get(quiz_id)
            return jsonify({'success': True, 'quiz': quiz.to_dict()})

        if action == 'questions' and quiz_id:
            questions = catalog.list_questions(quiz_id)
            return jsonify({'success': True, 'questions': [q.to_dict() for q in questions]})

        if action == 'list':
            host_fid = request.args.get('hostFid', type=int)
            quizzes = catalog.list(
                category=request.args.get('category'),
                status=request.args.get('status'),
                host_fid=host_fid,
            )
            return jsonify({
                'success': True,
                'quizzes': [q.to_dict() for q in quizzes],
                'total': len(quizzes),
            })

        if action == 'featured':
            return jsonify({'success': True, 'featuredQuizzes': [q.to_dict() for q in catalog.featured()]})

        if action == 'trending':
            return jsonify({'success': True, 'trendingQuizzes': [q.to_dict() for q in catalog.trending()]})

        return jsonify({'success': False, 'error': 'Invalid action', 'kind': ValidationError.kind}), 400

    except Exception as e:
        handled = error_payload(e)
        if handled:
            return jsonify(handled[0]), handled[1]
        logger.error(f"❌ Quiz API error: {e}")
        return jsonify({'success': False, 'error': 'Internal server error'}), 500


@quizzes_bp.route('', methods=['POST'])
def quiz_action():
    """Mutating quiz actions selected by the body's action field"""
    services = _services()

    try:
        payload = quiz_action_adapter.validate_python(request.get_json(silent=True) or {})
        action = payload.action
        logger.info(f"📨 Quiz API POST request: {action}")

        if action == 'create':
            quiz = services['catalog'].create(payload.model_dump(exclude={'action'}))
            return jsonify({'success': True, 'quiz': quiz.to_dict(), 'message': 'Quiz created successfully'})

        if action == 'join':
            participant = services['catalog'].join(
                payload.quiz_id, payload.fid, payload.username, payload.wallet_address
            )
            return jsonify({
                'success': True,
                'message': 'Successfully joined quiz',
                'participant': participant.to_dict(),
            })

        if action == 'submit-answer':
            result = services['session'].submit_answer(
                payload.quiz_id, payload.fid, payload.question_id,
                payload.selected_answer, payload.time_spent
            )
            return jsonify({'success': True, **result})

        if action == 'complete':
            final_score = services['session'].complete(payload.quiz_id, payload.fid)
            return jsonify({'success': True, 'message': 'Quiz completed', 'finalScore': final_score})

        if action == 'claim-reward':
            wallet = resolve_wallet_address(payload.wallet_address, payload.context, payload.fid)
            result = services['distributor'].distribute(payload.quiz_id, payload.fid, wallet)
            return jsonify({'success': True, **result})

        if action == 'activate':
            quiz = services['catalog'].activate(payload.quiz_id, payload.fid)
            return jsonify({'success': True, 'quiz': quiz.to_dict()})

        if action == 'close':
            quiz = services['catalog'].close(payload.quiz_id, payload.fid)
            return jsonify({'success': True, 'quiz': quiz.to_dict()})

        return jsonify({'success': False, 'error': 'Invalid action', 'kind': ValidationError.kind}), 400

    except Exception as e:
        handled = error_payload(e)
        if handled:
            if handled[1] >= 500:
                logger.error(f"❌ Quiz action failed: {e}")
            return jsonify(handled[0]), handled[1]
        logger.error(f"❌ Quiz API error: {e}")
        import traceback
        logger.error(f"🔍 Traceback: {traceback.format_exc()}")
        return jsonify({'success': False, 'error': 'Internal server error'}), 500
