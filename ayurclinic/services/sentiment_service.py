"""
Sentiment tagging for patient feedback via the external sentiment API.
"""
import logging

import requests
from flask import current_app

from ayurclinic.models import Sentiment

logger = logging.getLogger(__name__)


def classify_sentiment(text: str) -> Sentiment:
    """
    POST the feedback text to SENTIMENT_API_URL and read back
    ``{"sentiment": "positive" | "negative" | "neutral"}``.

    Falls back to NEUTRAL when the service is not configured, fails, or
    answers with a label we do not know.
    """
    url = current_app.config.get('SENTIMENT_API_URL')
    if not url:
        logger.warning("SENTIMENT_API_URL not configured. Tagging feedback as neutral.")
        return Sentiment.NEUTRAL

    try:
        response = requests.post(
            url,
            json={'text': text},
            timeout=current_app.config.get('EXTERNAL_API_TIMEOUT', 10),
        )
        response.raise_for_status()
        label = (response.json().get('sentiment') or '').strip().lower()
    except (requests.RequestException, ValueError, AttributeError) as e:
        logger.warning("Sentiment request failed, tagging as neutral: %s", e)
        return Sentiment.NEUTRAL

    try:
        return Sentiment(label)
    except ValueError:
        logger.warning("Unknown sentiment label %r, tagging as neutral", label)
        return Sentiment.NEUTRAL


def summarize_by_doctor(feedback_items, doctors):
    """
    Count sentiments per doctor. Feedback for ids that are not in ``doctors``
    is skipped.

    Returns a list of {doctor_id, doctor_name, counts, percentages, total}.
    """
    names = {d.id: d.display_name for d in doctors}
    counts = {}
    for fb in feedback_items:
        if fb.doctor_id not in names:
            continue
        bucket = counts.setdefault(fb.doctor_id, {s.value: 0 for s in Sentiment})
        bucket[fb.sentiment.value] += 1

    summary = []
    for doctor_id, bucket in counts.items():
        total = sum(bucket.values())
        summary.append({
            'doctor_id': doctor_id,
            'doctor_name': names[doctor_id],
            'counts': bucket,
            'percentages': {
                label: round(value * 100 / total) if total else 0
                for label, value in bucket.items()
            },
            'total': total,
        })
    summary.sort(key=lambda row: row['doctor_name'])
    return summary
