import logging

from flask import Blueprint, jsonify, request

from ..errors import DocumentRootNotFoundError, MissingTaskError, UmpBotError
from ..umpbot_service import answer_payload

logger = logging.getLogger(__name__)

umpbot_bp = Blueprint("umpbot", __name__, url_prefix="/api/umpbot")


def _parse_payload():
    """Returns the JSON body as a dict; anything missing or malformed becomes {}."""
    payload = request.get_json(force=True, silent=True)
    return payload if isinstance(payload, dict) else {}


@umpbot_bp.route("", methods=["POST", "OPTIONS"])
def ask_umpbot():
    """Answers a rules question.

    Accepts either discrete fields (season, sport, age_range, teeball_level,
    question) or a free-text ``message``.

    Returns:
        A tuple containing a JSON response and the HTTP status code.
    """
    if request.method == "OPTIONS":
        return "", 204

    payload = _parse_payload()
    try:
        text = answer_payload(payload)
    except (MissingTaskError, DocumentRootNotFoundError) as e:
        logger.warning("Rejected UmpBot request: %s", e.message)
        return jsonify({"error": e.message}), e.status_code
    except UmpBotError as e:
        logger.error("UmpBot request failed: %s", e.message)
        return jsonify({"error": f"UmpBot error: {e.message}"}), e.status_code
    except Exception as e:
        logger.error("UmpBot request failed: %s", e, exc_info=True)
        return jsonify({"error": f"UmpBot error: {e}"}), 500

    return jsonify({"text": text}), 200
