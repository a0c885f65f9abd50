from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from ayurclinic.services.chat_service import ask_assistant
from ayurclinic.utils.decorators import require_role, get_current_user

chat_bp = Blueprint('chat', __name__, url_prefix='/api/chat')


@chat_bp.route('', methods=['POST'])
@jwt_required()
@require_role()
def chat():
    data = request.get_json(silent=True) or {}
    reply = ask_assistant(data.get('message'), user=get_current_user())
    return jsonify({'success': True, 'reply': reply}), 200
