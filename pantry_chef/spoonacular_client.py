import logging

import requests
from flask import current_app

from .errors import UpstreamFetchFailed

logger = logging.getLogger(__name__)

EXTENSION_KEY = "spoonacular_client"


def encode_params(params):
    """Spoonacular expects lower-case booleans in the query string."""
    encoded = {}
    for key, value in params.items():
        if isinstance(value, bool):
            value = "true" if value else "false"
        encoded[key] = value
    return encoded


def result_list(data, key):
    """Pull a list of recipe payloads out of a response body, or nothing."""
    value = data.get(key) if isinstance(data, dict) else None
    return value if isinstance(value, list) else []


class SpoonacularClient:
    """Transport adapter for the Spoonacular recipe endpoints.

    Each call is one request/response exchange. Failures of any kind surface as
    UpstreamFetchFailed; nothing is retried here.
    """

    def __init__(self, api_key, base_url="https://api.spoonacular.com", timeout=10, session=None):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _get(self, path, params):
        if not self.api_key:
            raise UpstreamFetchFailed("Spoonacular API key is not configured")

        query = encode_params(params)
        query["apiKey"] = self.api_key
        try:
            response = self.session.get(f"{self.base_url}{path}", params=query, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            detail = e.response.text if e.response is not None else str(e)
            logger.error(f"Spoonacular API error on {path}: {status_code} {detail}")
            raise UpstreamFetchFailed(f"Spoonacular API error: {str(e)}", detail=detail, status_code=status_code) from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Spoonacular request to {path} failed: {str(e)}")
            raise UpstreamFetchFailed(f"Spoonacular request failed: {str(e)}") from e
        except ValueError as e:
            logger.error(f"Spoonacular returned an unreadable body for {path}: {str(e)}")
            raise UpstreamFetchFailed(f"Spoonacular returned invalid JSON: {str(e)}") from e

    def get_random_recipes(self, params):
        data = self._get("/recipes/random", params)
        recipes = result_list(data, "recipes")
        logger.info(f"Random recipes call successful: {len(recipes)} recipes found")
        return recipes

    def search_recipes(self, query, params):
        data = self._get("/recipes/complexSearch", dict(params, query=query))
        results = result_list(data, "results")
        logger.info(f"Search call for '{query}' successful: {len(results)} results found")
        return results

    def get_recipe_information(self, recipe_id):
        logger.info(f"Fetching recipe information for ID: {recipe_id}")
        return self._get(
            f"/recipes/{recipe_id}/information",
            {"includeNutrition": False, "addWinePairing": False, "addTasteData": False},
        ) or {}


def create_client(config):
    return SpoonacularClient(
        api_key=config.get("SPOONACULAR_API_KEY"),
        base_url=config.get("SPOONACULAR_BASE_URL", "https://api.spoonacular.com"),
        timeout=config.get("SPOONACULAR_TIMEOUT", 10),
    )


def get_spoonacular_client():
    client = current_app.extensions.get(EXTENSION_KEY)
    if client is None:
        client = create_client(current_app.config)
        current_app.extensions[EXTENSION_KEY] = client
    return client
