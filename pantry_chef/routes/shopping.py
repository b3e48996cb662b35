import logging
from datetime import datetime, timezone

from firebase_admin import firestore
from flask import Blueprint, jsonify, request

from .. import firebase_service
from ..auth import token_required, validate_json
from ..extensions import limiter
from ..schemas import generate_list_schema, shopping_item_schema, shopping_update_schema
from ..shopping import needed_items
from .pantry import list_pantry_items, without_sentinels

logger = logging.getLogger(__name__)

bp = Blueprint("shopping", __name__, url_prefix="/api/shopping-list")


def user_ref(user_id):
    return firebase_service.get_db().collection("users").document(user_id)


def items_ref(user_id):
    return user_ref(user_id).collection("shoppingListItems")


def lists_ref(user_id):
    return user_ref(user_id).collection("shoppingLists")


@bp.route('', methods=['POST'])
@limiter.limit("20 per minute")
@token_required
@validate_json(shopping_item_schema)
def add_item(user_id):
    try:
        data = request.get_json()
        new_item_ref = items_ref(user_id).document()
        item_data = {
            'id': new_item_ref.id,
            'title': data['title'],
            'description': data.get('description', ''),
            'quantity': data['quantity'],
            'category': data.get('category', ''),
            'addedAt': firestore.SERVER_TIMESTAMP,
            'lastUpdated': firestore.SERVER_TIMESTAMP,
        }
        new_item_ref.set(item_data)
        return jsonify({'message': 'Item added successfully', 'item': without_sentinels(item_data)}), 201
    except Exception as e:
        logger.error(f"Error adding shopping list item: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to add item'}), 500


@bp.route('', methods=['GET'])
@token_required
def get_all_lists(user_id):
    try:
        docs = lists_ref(user_id).order_by('createdAt', direction=firestore.Query.DESCENDING).stream()
        return jsonify([doc.to_dict() for doc in docs])
    except Exception as e:
        logger.error(f"Error fetching shopping lists: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to fetch shopping lists'}), 500


@bp.route('/<item_id>', methods=['GET'])
@token_required
def get_item(user_id, item_id):
    try:
        doc = items_ref(user_id).document(item_id).get()
        if not doc.exists:
            return jsonify({'error': 'Item not found'}), 404
        return jsonify(doc.to_dict())
    except Exception as e:
        logger.error(f"Error fetching shopping list item: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to fetch item'}), 500


@bp.route('/<item_id>', methods=['PUT'])
@limiter.limit("20 per minute")
@token_required
@validate_json(shopping_update_schema)
def update_item(user_id, item_id):
    try:
        doc_ref = items_ref(user_id).document(item_id)
        doc = doc_ref.get()
        if not doc.exists:
            return jsonify({'error': 'Item not found'}), 404

        current = doc.to_dict()
        data = request.get_json()
        updated_data = {
            'title': data.get('title') or current.get('title'),
            'description': data.get('description') or current.get('description'),
            'quantity': data['quantity'] if 'quantity' in data else current.get('quantity'),
            'category': data.get('category') or current.get('category'),
            'lastUpdated': firestore.SERVER_TIMESTAMP,
        }
        doc_ref.update(updated_data)
        return jsonify({'message': 'Item updated successfully', 'item': without_sentinels(updated_data)})
    except Exception as e:
        logger.error(f"Error updating shopping list item: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to update item'}), 500


@bp.route('/<item_id>', methods=['DELETE'])
@token_required
def delete_item(user_id, item_id):
    try:
        doc_ref = items_ref(user_id).document(item_id)
        if not doc_ref.get().exists:
            return jsonify({'error': 'Item not found'}), 404
        doc_ref.delete()
        return jsonify({'message': 'Item deleted successfully'})
    except Exception as e:
        logger.error(f"Error deleting shopping list item: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to delete item'}), 500


@bp.route('/generate', methods=['POST'])
@limiter.limit("20 per minute")
@token_required
@validate_json(generate_list_schema)
def generate_list(user_id):
    try:
        data = request.get_json()
        recipe_name = data['recipeName']

        needed = needed_items(data['ingredients'], list_pantry_items(user_id))
        if not needed:
            return jsonify({'message': 'You have all the ingredients!', 'list': None})

        now = datetime.now(timezone.utc)
        for item in needed:
            item['itemId'] = items_ref(user_id).document().id
            item['addedAt'] = now

        shopping_list_ref = lists_ref(user_id).document()
        new_list_data = {
            'listId': shopping_list_ref.id,
            'listName': recipe_name,
            'description': f"Shopping list for {recipe_name}",
            'createdAt': now,
            'updatedAt': now,
            'isSmartGenerated': True,
            'recipeId': data['recipeId'],
            'recipeName': recipe_name,
            'items': needed,
            'totalItems': len(needed),
            'checkedItems': 0,
            'isCompleted': False,
        }
        shopping_list_ref.set(new_list_data)

        return jsonify({'message': 'Shopping list created successfully', 'list': new_list_data}), 201
    except Exception as e:
        logger.error(f"Error generating shopping list from recipe: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to generate shopping list.'}), 500
