import logging

import firebase_admin
from firebase_admin import auth, credentials, firestore
from flask import current_app, request

from .credentials import build_service_account

logger = logging.getLogger(__name__)

_db = None


def init_firebase(config):
    """Initialize the default firebase_admin app once per process."""
    if not firebase_admin._apps:
        cred = credentials.Certificate(build_service_account(config))
        firebase_admin.initialize_app(cred)
        logger.info("Firebase initialized successfully")


def get_db():
    global _db
    if _db is None:
        try:
            init_firebase(current_app.config)
            _db = firestore.client()
        except Exception as e:
            logger.error(f"Failed to initialize Firebase: {str(e)}")
            raise
    return _db


def verify_firebase_token():
    """Return the uid for the request's bearer ID token, or None."""
    auth_header = request.headers.get('Authorization')
    if not auth_header or not auth_header.startswith('Bearer '):
        logger.error("No Authorization header or invalid format")
        return None

    token = auth_header.split('Bearer ')[1].strip()
    if not token:
        return None
    try:
        decoded_token = auth.verify_id_token(token)
        return decoded_token['uid']
    except Exception as e:
        logger.error(f"Error verifying token: {str(e)}")
        return None


def check_firebase_health():
    results = {
        "success": False,
        "message": "",
        "services": {"firestore": "failed", "auth": "failed"},
        "error": None,
    }

    try:
        db = get_db()
        test_doc_ref = db.collection("health-check").document("test-connection")
        test_doc_ref.set({
            "timestamp": firestore.SERVER_TIMESTAMP,
            "message": "Connection test",
        })
        if test_doc_ref.get().exists:
            results["services"]["firestore"] = "connected"
            test_doc_ref.delete()

        auth.list_users(max_results=1)
        results["services"]["auth"] = "connected"

        results["success"] = results["services"]["firestore"] == "connected"
        results["message"] = "All Firebase services are healthy" if results["success"] else "Firestore connection failed"
    except Exception as e:
        logger.error(f"Firebase health check failed: {str(e)}")
        results["error"] = str(e)
        if results["services"]["firestore"] != "connected":
            results["message"] = "Firestore connection failed"
        else:
            results["message"] = "Auth service failed"

    return results
