import logging

from flask import Blueprint, current_app, jsonify, request

from .. import firebase_service
from ..auth import token_required, validate_json
from ..errors import InvalidQuery, PreferencesMissing, UpstreamFetchFailed, UserNotFound
from ..extensions import limiter
from ..preferences import extract_preferences, read_onboarding
from ..recipe_search import discover_recipes, get_recipe_details, search_recipes
from ..schemas import preferences_schema
from ..spoonacular_client import get_spoonacular_client

logger = logging.getLogger(__name__)

bp = Blueprint("discovery", __name__, url_prefix="/api/discovery")


def _recipes_response(message, recipes, **extra):
    body = {
        "message": message,
        "count": len(recipes),
        "recipes": [recipe.to_dict() for recipe in recipes],
    }
    body.update(extra)
    return jsonify(body)


def _error_response(e):
    if isinstance(e, InvalidQuery):
        return jsonify({"error": str(e)}), 400
    if isinstance(e, UserNotFound):
        return jsonify({"error": "User not found"}), 404
    if isinstance(e, PreferencesMissing):
        return jsonify({"error": "User onboarding data not found"}), 400
    return jsonify({
        "error": "Failed to fetch recipes from Spoonacular",
        "details": e.detail,
        "upstream_status": e.status_code,
    }), 502


@bp.route('/random', methods=['GET'])
@limiter.limit("30 per minute")
@token_required
def get_random_recipes(user_id):
    logger.info(f"Fetching recipes for user: {user_id}")
    try:
        result = discover_recipes(
            user_id,
            firebase_service.get_db(),
            get_spoonacular_client(),
            number=current_app.config.get("RECIPE_RESULTS_PER_REQUEST", 10),
        )
        return _recipes_response("Random recipes retrieved successfully", result["recipes"])
    except (PreferencesMissing, UpstreamFetchFailed) as e:
        logger.warning(f"Random recipes failed for user {user_id}: {str(e)}")
        return _error_response(e)
    except Exception as e:
        logger.error(f"Unexpected error in get_random_recipes: {str(e)}", exc_info=True)
        return jsonify({"error": "Failed to fetch random recipes"}), 500


@bp.route('/search', methods=['GET'])
@limiter.limit("30 per minute")
@token_required
def search(user_id):
    query = request.args.get('query')
    try:
        result = search_recipes(
            user_id,
            query,
            firebase_service.get_db(),
            get_spoonacular_client(),
            number=current_app.config.get("RECIPE_RESULTS_PER_REQUEST", 10),
        )
        return _recipes_response("Recipes retrieved successfully", result["recipes"], query=result["query"])
    except (InvalidQuery, PreferencesMissing, UpstreamFetchFailed) as e:
        logger.warning(f"Recipe search failed for user {user_id}: {str(e)}")
        return _error_response(e)
    except Exception as e:
        logger.error(f"Unexpected error in search: {str(e)}", exc_info=True)
        return jsonify({"error": "Failed to search recipes"}), 500


@bp.route('/recipes/<int:recipe_id>', methods=['GET'])
@limiter.limit("30 per minute")
@token_required
def get_recipe(user_id, recipe_id):
    try:
        recipe = get_recipe_details(recipe_id, get_spoonacular_client())
        return jsonify({"message": "Recipe retrieved successfully", "recipe": recipe.to_dict()})
    except UpstreamFetchFailed as e:
        if e.status_code == 404:
            return jsonify({"error": "Recipe not found"}), 404
        return _error_response(e)
    except Exception as e:
        logger.error(f"Unexpected error in get_recipe: {str(e)}", exc_info=True)
        return jsonify({"error": "Failed to fetch recipe details"}), 500


@bp.route('/preferences', methods=['GET'])
@token_required
def get_preferences(user_id):
    try:
        onboarding = read_onboarding(firebase_service.get_db(), user_id)
        extracted = extract_preferences(onboarding) if onboarding is not None else None
        return jsonify({
            "message": "User preferences retrieved successfully",
            "preferences": onboarding,
            "resolved": extracted.to_dict() if extracted else None,
        })
    except UserNotFound as e:
        return _error_response(e)
    except Exception as e:
        logger.error(f"Error fetching user preferences: {str(e)}", exc_info=True)
        return jsonify({"error": "Failed to fetch user preferences"}), 500


@bp.route('/preferences', methods=['PUT'])
@limiter.limit("20 per minute")
@token_required
@validate_json(preferences_schema)
def update_preferences(user_id):
    try:
        onboarding = request.get_json()["onboarding"]
        firebase_service.get_db().collection('users').document(user_id).set({'onboarding': onboarding}, merge=True)
        return jsonify({
            "message": "Preferences updated successfully",
            "resolved": extract_preferences(onboarding).to_dict(),
        })
    except Exception as e:
        logger.error(f"Error updating user preferences: {str(e)}", exc_info=True)
        return jsonify({"error": "Failed to update preferences"}), 500
