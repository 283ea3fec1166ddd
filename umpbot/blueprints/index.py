from flask import Blueprint, jsonify, request

index_bp = Blueprint("index", __name__, url_prefix="/api")

ENDPOINTS = ["/api/ping", "/api/umpbot"]


@index_bp.route("", methods=["GET", "OPTIONS"])
def api_index():
    """Describes the available endpoints."""
    if request.method == "OPTIONS":
        return "", 204
    return jsonify({"message": "Hi, this is just an API.", "endpoints": ENDPOINTS})


@index_bp.route("/ping", methods=["GET"])
def ping():
    return jsonify({"message": "pong"})
