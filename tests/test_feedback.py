import pytest
import requests

from ayurclinic.models import Feedback, Sentiment
from ayurclinic.services import sentiment_service
from ayurclinic.services.sentiment_service import classify_sentiment


class FakeResponse:
    def __init__(self, payload, status=200):
        self.payload = payload
        self.status = status

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f"{self.status} error")

    def json(self):
        return self.payload


@pytest.fixture
def sentiment_api(app, monkeypatch):
    app.config["SENTIMENT_API_URL"] = "http://sentiment.local/analyze"
    calls = []

    def install(payload=None, status=200, exc=None):
        def fake_post(url, json=None, timeout=None):
            calls.append({"url": url, "json": json, "timeout": timeout})
            if exc is not None:
                raise exc
            return FakeResponse(payload, status)

        monkeypatch.setattr(sentiment_service.requests, "post", fake_post)
        return calls

    return install


def test_classify_uses_api_label(app, sentiment_api):
    calls = sentiment_api({"sentiment": "Positive"})

    assert classify_sentiment("Very relaxing") == Sentiment.POSITIVE
    assert calls[0]["json"] == {"text": "Very relaxing"}


@pytest.mark.parametrize(
    "kwargs",
    [
        {"payload": {"sentiment": "ecstatic"}},
        {"payload": {}, "status": 503},
        {"exc": requests.ConnectionError("down")},
        {"payload": ["not", "a", "dict"]},
    ],
)
def test_classify_falls_back_to_neutral(app, sentiment_api, kwargs):
    sentiment_api(**kwargs)

    assert classify_sentiment("ok") == Sentiment.NEUTRAL


def test_classify_without_api_is_neutral(app):
    assert classify_sentiment("fine") == Sentiment.NEUTRAL


def test_patient_submits_feedback(client, clinic, auth_header, sentiment_api):
    sentiment_api({"sentiment": "negative"})

    resp = client.post(
        "/api/feedback",
        json={"doctor_id": clinic["doctor"].id, "text": "Waited an hour", "rating": 2},
        headers=auth_header(clinic["patient"]),
    )

    assert resp.status_code == 201
    assert resp.get_json()["data"]["sentiment"] == "negative"
    assert Feedback.query.one().rating == 2


def test_feedback_validation(client, clinic, auth_header):
    headers = auth_header(clinic["patient"])

    no_text = client.post("/api/feedback", json={"doctor_id": clinic["doctor"].id}, headers=headers)
    bad_rating = client.post(
        "/api/feedback", json={"doctor_id": clinic["doctor"].id, "text": "ok", "rating": 9}, headers=headers
    )
    not_doctor = client.post(
        "/api/feedback", json={"doctor_id": clinic["therapist"].id, "text": "ok"}, headers=headers
    )

    assert no_text.status_code == 400
    assert bad_rating.status_code == 400
    assert not_doctor.status_code == 404
    assert Feedback.query.count() == 0


def test_doctor_reads_only_own_feedback(client, clinic, make_user, auth_header):
    other = make_user("doctor")
    headers = auth_header(clinic["patient"])
    client.post("/api/feedback", json={"doctor_id": clinic["doctor"].id, "text": "Kind"}, headers=headers)
    client.post("/api/feedback", json={"doctor_id": other.id, "text": "Rushed"}, headers=headers)

    resp = client.get("/api/feedback", headers=auth_header(clinic["doctor"]))

    assert [f["text"] for f in resp.get_json()["data"]] == ["Kind"]


def test_feedback_links_own_appointment(client, clinic, auth_header):
    resp = client.post(
        "/api/feedback",
        json={"doctor_id": clinic["doctor"].id, "text": "Helpful", "appointment_id": str(clinic["appointment"].id)},
        headers=auth_header(clinic["patient"]),
    )

    assert resp.status_code == 201
    assert Feedback.query.one().appointment_id == clinic["appointment"].id


def test_feedback_rejects_malformed_appointment_id_and_text(client, clinic, auth_header):
    headers = auth_header(clinic["patient"])

    bad_id = client.post(
        "/api/feedback",
        json={"doctor_id": clinic["doctor"].id, "text": "ok", "appointment_id": "first"},
        headers=headers,
    )
    bad_text = client.post("/api/feedback", json={"doctor_id": clinic["doctor"].id, "text": 5}, headers=headers)

    assert bad_id.status_code == 400
    assert bad_text.status_code == 400
    assert Feedback.query.count() == 0
