import logging

from .errors import InvalidQuery, UpstreamFetchFailed
from .filters import DEFAULT_RESULTS, DISCOVERY, SEARCH, build_filter_tiers
from .preferences import load_user_preferences
from .recipe_models import normalize_recipe

logger = logging.getLogger(__name__)


def run_fallback_search(tiers, fetch):
    """Fetch tier by tier and return the first non-empty result list.

    Tiers run strictly one after another. An empty list moves on to the next,
    looser tier; any error from ``fetch`` aborts the whole chain as
    UpstreamFetchFailed. Returns an empty list when every tier comes back empty.
    """
    for position, tier in enumerate(tiers, start=1):
        params = tier.params
        logger.info(f"Trying tier {position} ({tier.name}): {params}")
        try:
            results = fetch(params) or []
        except UpstreamFetchFailed:
            raise
        except Exception as e:
            logger.error(f"Tier {position} ({tier.name}) fetch failed: {str(e)}")
            raise UpstreamFetchFailed(f"Spoonacular API error: {str(e)}") from e
        if results:
            logger.info(f"Tier {position} ({tier.name}) returned {len(results)} recipes")
            return list(results)
        logger.info(f"No recipes found for tier {position} ({tier.name})")

    logger.info("All filter tiers exhausted without results")
    return []


def validate_query(query):
    if query is None or not isinstance(query, str) or not query.strip():
        raise InvalidQuery("Search query must not be empty")
    return query.strip()


def discover_recipes(user_id, db, client, number=DEFAULT_RESULTS):
    preferences = load_user_preferences(db, user_id)
    tiers = build_filter_tiers(preferences, DISCOVERY, number)
    payloads = run_fallback_search(tiers, client.get_random_recipes)
    recipes = [normalize_recipe(payload) for payload in payloads]
    logger.info(f"Successfully fetched {len(recipes)} recipes for user {user_id}")
    return {"recipes": recipes}


def search_recipes(user_id, query, db, client, number=DEFAULT_RESULTS):
    query = validate_query(query)
    preferences = load_user_preferences(db, user_id)
    tiers = build_filter_tiers(preferences, SEARCH, number)
    payloads = run_fallback_search(tiers, lambda params: client.search_recipes(query, params))
    recipes = [normalize_recipe(payload) for payload in payloads]
    logger.info(f"Search for '{query}' returned {len(recipes)} recipes for user {user_id}")
    return {"recipes": recipes, "query": query}


def get_recipe_details(recipe_id, client):
    return normalize_recipe(client.get_recipe_information(recipe_id))
