from flask import Blueprint, jsonify

from .. import firebase_service

bp = Blueprint("health", __name__)


@bp.route('/')
def home():
    return jsonify({"message": "Pantry Chef backend is live!"})


@bp.route('/health')
def health():
    results = firebase_service.check_firebase_health()
    return jsonify(results), 200 if results["success"] else 503
