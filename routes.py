# routes.py
from flask import Blueprint, current_app, jsonify, request

from config import FEEDBACK_VALUES, LIVENESS_TEXT, logger
from storage import NotFoundError, SessionNotFound
from utils import parse_timestamp

api = Blueprint("api", __name__)


def get_store():
    return current_app.extensions["session_store"]


def _json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


@api.route("/", methods=["GET"])
def home():
    return LIVENESS_TEXT, 200, {"Content-Type": "text/plain; charset=utf-8"}


@api.route("/healthz", methods=["GET"])
def healthz():
    return jsonify({"status": "ok"})


@api.route("/api/sessions", methods=["GET"])
def list_sessions():
    try:
        sessions = get_store().list_sessions()
        return jsonify([s.to_dict() for s in sessions])
    except Exception:
        logger.exception("❌ /api/sessions error:")
        return jsonify({"error": "Failed to read sessions"}), 500


@api.route("/api/new-chat", methods=["GET"])
def new_chat():
    try:
        session, history = get_store().create_session()
        out = session.to_dict()
        out["history"] = [m.to_dict() for m in history]
        return jsonify(out)
    except Exception:
        logger.exception("❌ /api/new-chat error:")
        return jsonify({"error": "Failed to create new chat"}), 500


@api.route("/api/session/<session_id>", methods=["GET"])
def session_history(session_id):
    try:
        history = get_store().get_or_create_history(session_id)
        return jsonify([m.to_dict() for m in history])
    except Exception:
        logger.exception("❌ /api/session/%s error:", session_id)
        return jsonify({"error": "Failed to read session history"}), 500


@api.route("/api/chat/<session_id>", methods=["POST"])
def chat(session_id):
    question = _json_body().get("question")

    if not question or not isinstance(question, str):
        return jsonify({"error": "Missing or invalid `question` in request body"}), 400

    try:
        message = get_store().append_message(session_id, question)
        return jsonify(message.to_dict())
    except Exception:
        logger.exception("❌ /api/chat/%s error:", session_id)
        return jsonify({"error": "Failed to append chat history"}), 500


@api.route("/api/session/<session_id>/feedback", methods=["POST"])
def feedback(session_id):
    data = _json_body()
    feedback_value = data.get("feedback")
    raw_id = data.get("id")
    message_id = raw_id if isinstance(raw_id, str) and raw_id else None
    timestamp = parse_timestamp(data.get("timestamp"))

    logger.info("Feedback request: session=%s id=%s timestamp=%s feedback=%s",
                session_id, message_id, data.get("timestamp"), feedback_value)

    if feedback_value not in FEEDBACK_VALUES or (message_id is None and timestamp is None):
        return jsonify({"error": "Missing or invalid timestamp/feedback"}), 400

    try:
        message = get_store().set_feedback(
            session_id, feedback_value, message_id=message_id, timestamp=timestamp
        )
        return jsonify(message.to_dict())
    except SessionNotFound:
        logger.warning("History file not found for session: %s", session_id)
        return jsonify({"error": "Session not found"}), 404
    except NotFoundError:
        logger.warning("Message not found: id=%s timestamp=%s", message_id, timestamp)
        return jsonify({"error": "Message not found"}), 404
    except Exception:
        logger.exception("❌ Error saving feedback:")
        return jsonify({"error": "Failed to save feedback"}), 500


@api.app_errorhandler(404)
def not_found(_error):
    return jsonify({"error": "Not found"}), 404


@api.app_errorhandler(405)
def method_not_allowed(_error):
    return jsonify({"error": "Method not allowed"}), 405
