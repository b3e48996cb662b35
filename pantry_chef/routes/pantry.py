import logging

from firebase_admin import firestore
from flask import Blueprint, jsonify, request

from .. import firebase_service
from ..auth import token_required, validate_json
from ..extensions import limiter
from ..schemas import PANTRY_LOCATIONS, pantry_item_schema, pantry_update_schema

logger = logging.getLogger(__name__)

bp = Blueprint("pantry", __name__, url_prefix="/api/pantry")


def get_collection_ref(user_id, location):
    return firebase_service.get_db().collection("pantry").document(user_id).collection(location.lower())


def find_item_ref(user_id, item_id):
    """Look an item up in every storage location; None when it is nowhere."""
    for location in PANTRY_LOCATIONS:
        item_ref = get_collection_ref(user_id, location).document(item_id)
        if item_ref.get().exists:
            return item_ref
    return None


def without_sentinels(data):
    return {key: value for key, value in data.items() if value is not firestore.SERVER_TIMESTAMP}


@bp.route('', methods=['POST'])
@limiter.limit("20 per minute")
@token_required
@validate_json(pantry_item_schema)
def add_item(user_id):
    try:
        data = request.get_json()
        new_item_ref = get_collection_ref(user_id, data['location']).document()
        item_data = {
            'id': new_item_ref.id,
            'title': data['title'],
            'description': data.get('description', ''),
            'imageUrl': data.get('imageUrl', ''),
            'expiryDate': data.get('expiryDate'),
            'quantity': data['quantity'],
            'category': data['category'],
            'location': data['location'].lower(),
            'addedAt': firestore.SERVER_TIMESTAMP,
            'last_updated': firestore.SERVER_TIMESTAMP,
        }
        new_item_ref.set(item_data)
        return jsonify({'message': 'Item added successfully', 'item': without_sentinels(item_data)}), 201
    except Exception as e:
        logger.error(f"Error adding pantry item: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to add pantry item'}), 500


@bp.route('', methods=['GET'])
@token_required
def get_all_items(user_id):
    try:
        results = {}
        for location in PANTRY_LOCATIONS:
            docs = (
                get_collection_ref(user_id, location)
                .order_by('addedAt', direction=firestore.Query.DESCENDING)
                .stream()
            )
            results[location] = [doc.to_dict() for doc in docs]
        return jsonify(results)
    except Exception as e:
        logger.error(f"Error fetching pantry items: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to fetch pantry items'}), 500


@bp.route('/<item_id>', methods=['GET'])
@token_required
def get_item(user_id, item_id):
    try:
        item_ref = find_item_ref(user_id, item_id)
        if item_ref is None:
            return jsonify({'error': 'Item not found'}), 404
        return jsonify(item_ref.get().to_dict())
    except Exception as e:
        logger.error(f"Error fetching pantry item: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to fetch item'}), 500


@bp.route('/<item_id>', methods=['PUT'])
@limiter.limit("20 per minute")
@token_required
@validate_json(pantry_update_schema)
def update_item(user_id, item_id):
    try:
        item_ref = find_item_ref(user_id, item_id)
        if item_ref is None:
            return jsonify({'error': 'Item not found'}), 404
        update_data = dict(request.get_json(), last_updated=firestore.SERVER_TIMESTAMP)
        item_ref.update(update_data)
        return jsonify({'message': 'Item updated successfully'})
    except Exception as e:
        logger.error(f"Error updating pantry item: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to update pantry item'}), 500


@bp.route('/<item_id>', methods=['DELETE'])
@token_required
def delete_item(user_id, item_id):
    try:
        item_ref = find_item_ref(user_id, item_id)
        if item_ref is None:
            return jsonify({'error': 'Item not found'}), 404
        item_ref.delete()
        return jsonify({'message': 'Item deleted successfully'})
    except Exception as e:
        logger.error(f"Error deleting pantry item: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to delete pantry item'}), 500


def list_pantry_items(user_id):
    items = []
    for location in PANTRY_LOCATIONS:
        items.extend(doc.to_dict() for doc in get_collection_ref(user_id, location).stream())
    return items
