import logging
import os

from flask import Flask, jsonify, request
from flask_cors import CORS

from .blueprints.index import index_bp
from .blueprints.umpbot import umpbot_bp
from .constants import (
    DEFAULT_GEMINI_API_BASE_URL,
    DEFAULT_GEMINI_MODEL,
    DEFAULT_GEMINI_TIMEOUT_SECONDS,
)
from .extensions import cache

# Set up logging configuration
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler()],
)
logger = logging.getLogger("umpbot")

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


def _get_timeout_seconds():
    raw = os.environ.get("GEMINI_TIMEOUT_SECONDS")
    if not raw:
        return DEFAULT_GEMINI_TIMEOUT_SECONDS
    try:
        return float(raw)
    except ValueError:
        logger.warning("Invalid GEMINI_TIMEOUT_SECONDS=%r, using %s",
                       raw, DEFAULT_GEMINI_TIMEOUT_SECONDS)
        return DEFAULT_GEMINI_TIMEOUT_SECONDS


app = Flask(__name__)

allowed_origins_str = os.environ.get("CORS_ALLOWED_ORIGINS", "*")
allowed_origins = [o.strip() for o in allowed_origins_str.split(",") if o.strip()]
CORS(app, origins=allowed_origins, resources={r"/api/*": {}})

app.config["UMPBOT_PDF_ROOT"] = os.environ.get(
    "UMPBOT_PDF_ROOT", os.path.join(PROJECT_ROOT, "files", "UmpBot"))
app.config["GEMINI_API_KEY"] = os.environ.get("GEMINI_API_KEY", "")
app.config["GEMINI_MODEL"] = os.environ.get("GEMINI_MODEL", DEFAULT_GEMINI_MODEL)
app.config["GEMINI_API_BASE_URL"] = os.environ.get(
    "GEMINI_API_BASE_URL", DEFAULT_GEMINI_API_BASE_URL)
app.config["GEMINI_TIMEOUT_SECONDS"] = _get_timeout_seconds()

# Extracted text is keyed by file mtime, so entries never need to expire.
app.config["CACHE_DEFAULT_TIMEOUT"] = 0
app.config["CACHE_KEY_PREFIX"] = ""

if app.config.get("TESTING") or os.environ.get("TESTING") == "true":
    app.config["TESTING"] = True
    app.config["CACHE_TYPE"] = "SimpleCache"  # No Redis needed for tests
    app.config["UMPBOT_TEXT_CACHE_ENABLED"] = True
    logger.info("TESTING mode: Using SimpleCache for extracted text.")
else:
    redis_url = os.environ.get("CACHE_REDIS_URL") or os.environ.get("REDIS_URL")
    if redis_url:
        app.config["CACHE_TYPE"] = "RedisCache"
        app.config["CACHE_REDIS_URL"] = redis_url
        app.config["UMPBOT_TEXT_CACHE_ENABLED"] = True
        logger.info("Caching extracted PDF text in Redis.")
    else:
        app.config["CACHE_TYPE"] = "NullCache"
        app.config["UMPBOT_TEXT_CACHE_ENABLED"] = False
        logger.info("No Redis URL configured, extracted PDF text will not be cached.")

logger.info("Using PDF root: %s", app.config["UMPBOT_PDF_ROOT"])

cache.init_app(app)

app.register_blueprint(index_bp)
app.register_blueprint(umpbot_bp)

# --- Error Handlers ---


@app.errorhandler(404)
def not_found_error(error):
    """Handles 404 Not Found errors with a JSON response."""
    logger.warning("404 Not Found: %s", request.path)
    return jsonify({"error": "Resource not found"}), 404


@app.errorhandler(405)
def method_not_allowed_error(error):
    """Handles 405 Method Not Allowed errors with a JSON response."""
    return jsonify({"error": "Method Not Allowed"}), 405


@app.errorhandler(500)
def internal_error(error):
    """Handles 500 Internal Server Errors with a JSON response and logs the error."""
    logger.error("500 Internal Server Error: %s", error, exc_info=True)
    return jsonify({"error": "An internal server error occurred"}), 500


if __name__ == "__main__":
    is_debug_mode = os.environ.get("FLASK_DEBUG", "0") == "1"
    logger.info("Starting Flask app (Debug mode: %s)", is_debug_mode)
    app.run(host="0.0.0.0", port=int(os.environ.get("PORT", "5001")), debug=is_debug_mode)
