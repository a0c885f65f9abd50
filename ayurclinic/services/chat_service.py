"""
Proxy to the external chat assistant.
"""
import logging

import requests
from flask import current_app

from ayurclinic.errors import UpstreamError, UpstreamNotConfigured, ValidationError

logger = logging.getLogger(__name__)


def ask_assistant(message: str, user=None) -> str:
    message = (message or '').strip()
    if not message:
        raise ValidationError('Field "message" is required')

    url = current_app.config.get('CHATBOT_API_URL')
    if not url:
        raise UpstreamNotConfigured('Chat assistant is not configured')

    payload = {'message': message}
    if user is not None:
        payload['role'] = user.role.value

    try:
        response = requests.post(
            url,
            json=payload,
            timeout=current_app.config.get('EXTERNAL_API_TIMEOUT', 10),
        )
        response.raise_for_status()
        data = response.json()
    except (requests.RequestException, ValueError) as e:
        logger.error("Chat assistant request failed: %s", e)
        raise UpstreamError('Chat assistant is unavailable') from e

    reply = data.get('reply') if isinstance(data, dict) else None
    if not reply:
        raise UpstreamError('Chat assistant returned an empty reply')
    return reply
