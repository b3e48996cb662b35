"""Translate user preferences into Spoonacular query parameters.

Spoonacular's random endpoint and its complex-search endpoint filter on the
same things but name them differently, so each mode gets a vocabulary. The
semantic rules are shared:

* vegan wins over vegetarian, the two are never combined;
* gluten free is an exclusion of its own, independent of the diet;
* every allergy flag maps to one or more exclusion terms.

Searches run in three tiers, from most to least restrictive, and each tier's
constraints are a subset of the previous one's.
"""
from dataclasses import dataclass, field

DISCOVERY = "discovery"
SEARCH = "search"

TIER_DIETARY_AND_ALLERGIES = "dietary_and_allergies"
TIER_DIETARY_ONLY = "dietary_only"
TIER_UNFILTERED = "unfiltered"

DEFAULT_RESULTS = 10


@dataclass(frozen=True)
class FilterVocabulary:
    diet_param: str
    gluten_param: str
    gluten_term: str
    allergy_param: str
    allergy_terms: dict


VOCABULARIES = {
    DISCOVERY: FilterVocabulary(
        diet_param="includeTags",
        gluten_param="includeTags",
        gluten_term="gluten free",
        allergy_param="excludeTags",
        allergy_terms={
            "dairy": ("dairy",),
            "eggs": ("egg",),
            "nuts": ("tree nuts", "peanuts"),
            "shellfish": ("shellfish",),
            "soy": ("soy",),
            "wheat": ("wheat",),
        },
    ),
    SEARCH: FilterVocabulary(
        diet_param="diet",
        gluten_param="intolerances",
        gluten_term="gluten",
        allergy_param="intolerances",
        allergy_terms={
            "dairy": ("dairy",),
            "eggs": ("egg",),
            "nuts": ("tree nut", "peanut"),
            "shellfish": ("shellfish",),
            "soy": ("soy",),
            "wheat": ("wheat",),
        },
    ),
}


def base_params(mode, number=DEFAULT_RESULTS):
    if mode == DISCOVERY:
        return {"includeNutrition": False, "number": number}
    if mode == SEARCH:
        return {
            "addRecipeInformation": True,
            "addRecipeNutrition": False,
            "instructionsRequired": True,
            "fillIngredients": False,
            "number": number,
            "offset": 0,
            "sort": "popularity",
            "sortDirection": "desc",
        }
    raise ValueError(f"Unknown search mode: {mode}")


@dataclass(frozen=True)
class SearchFilterTier:
    """One fallback level: fixed base parameters plus (param, term) constraints."""

    name: str
    constraints: tuple = ()
    base: dict = field(default_factory=dict)

    @property
    def params(self):
        params = dict(self.base)
        grouped = {}
        for param, term in self.constraints:
            grouped.setdefault(param, []).append(term)
        for param, terms in grouped.items():
            params[param] = ",".join(terms)
        return params


def dietary_constraints(preferences, vocabulary):
    diet = preferences.dietary_preferences
    constraints = []
    if diet["vegan"]:
        constraints.append((vocabulary.diet_param, "vegan"))
    elif diet["vegetarian"]:
        constraints.append((vocabulary.diet_param, "vegetarian"))
    if diet["glutenFree"]:
        constraints.append((vocabulary.gluten_param, vocabulary.gluten_term))
    return constraints


def allergy_constraints(preferences, vocabulary):
    constraints = []
    for allergy in preferences.active_allergies():
        for term in vocabulary.allergy_terms[allergy]:
            constraints.append((vocabulary.allergy_param, term))
    return constraints


def build_filter_tiers(preferences, mode, number=DEFAULT_RESULTS):
    """Return the three tiers for ``mode``, most restrictive first.

    Identical tiers (a user with no flags set) are not collapsed.
    """
    vocabulary = VOCABULARIES[mode]
    base = base_params(mode, number)
    dietary = dietary_constraints(preferences, vocabulary)
    allergies = allergy_constraints(preferences, vocabulary)
    return [
        SearchFilterTier(TIER_DIETARY_AND_ALLERGIES, tuple(dietary + allergies), base),
        SearchFilterTier(TIER_DIETARY_ONLY, tuple(dietary), base),
        SearchFilterTier(TIER_UNFILTERED, (), base),
    ]
