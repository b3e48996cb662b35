from functools import wraps

import jsonschema
from flask import jsonify, request
from jsonschema import validate

from . import firebase_service


def token_required(f):
    @wraps(f)
    def decorated(*args, **kwargs):
        auth_header = request.headers.get('Authorization')
        if not auth_header:
            return jsonify({'error': 'Missing token'}), 401

        user_id = firebase_service.verify_firebase_token()
        if not user_id:
            return jsonify({'error': 'Invalid token'}), 401

        return f(user_id, *args, **kwargs)
    return decorated


def validate_json(schema):
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not request.is_json:
                return jsonify({"error": "Content-Type must be application/json"}), 400
            try:
                validate(instance=request.get_json(silent=True), schema=schema)
            except jsonschema.exceptions.ValidationError as e:
                return jsonify({"error": f"Invalid request data: {e.message}"}), 400
            return f(*args, **kwargs)
        return decorated_function
    return decorator
