"""Recipe models and the mapping from Spoonacular payloads onto them.

Spoonacular returns slightly different shapes from its random, search and
information endpoints, and any field may be missing. normalize_recipe is the
one place that fills in defaults; it never raises.
"""
import re
from collections.abc import Mapping
from dataclasses import dataclass

SOURCE = "Spoonacular API"
MISSING_INSTRUCTIONS = "Instructions not available for this recipe."

HTML_TAG_RE = re.compile(r"<[^>]*>")
HTML_ENTITY_RE = re.compile(r"&[^;]+;")
STEP_SPLIT_RE = re.compile(r"\d+\.|\n")


@dataclass(frozen=True)
class RecipeIngredient:
    name: str = ""
    quantity: float = 0
    unit: str = ""

    def to_dict(self):
        return {"name": self.name, "quantity": self.quantity, "unit": self.unit}


@dataclass(frozen=True)
class RecipeInstruction:
    step_number: int
    instruction: str

    def to_dict(self):
        return {"stepNumber": self.step_number, "instruction": self.instruction}


@dataclass(frozen=True)
class Recipe:
    recipe_id: object
    title: str = ""
    description: str = ""
    image_url: str = ""
    servings: float = 1
    source: str = SOURCE
    ingredients: tuple = ()
    instructions: tuple = ()

    def to_dict(self):
        return {
            "recipeId": self.recipe_id,
            "title": self.title,
            "description": self.description,
            "imageUrl": self.image_url,
            "servings": self.servings,
            "source": self.source,
            "ingredients": [ingredient.to_dict() for ingredient in self.ingredients],
            "instructions": [instruction.to_dict() for instruction in self.instructions],
        }


def _text(value):
    return value if isinstance(value, str) else ""


def _number(value):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def strip_html(html):
    """Remove tags, turn each entity into a single space, then trim."""
    text = HTML_TAG_RE.sub("", html)
    text = HTML_ENTITY_RE.sub(" ", text)
    return text.strip()


def map_ingredient(data):
    if not isinstance(data, Mapping):
        data = {}
    return RecipeIngredient(
        name=_text(data.get("name")) or _text(data.get("originalName")),
        quantity=_number(data.get("amount")) or 0,
        unit=_text(data.get("unit")),
    )


def _structured_steps(payload):
    groups = payload.get("analyzedInstructions")
    if not isinstance(groups, list) or not groups or not isinstance(groups[0], Mapping):
        return []
    steps = groups[0].get("steps")
    return steps if isinstance(steps, list) else []


def map_instructions(payload):
    steps = _structured_steps(payload)
    if steps:
        instructions = []
        for index, step in enumerate(steps, start=1):
            if not isinstance(step, Mapping):
                step = {}
            number = step.get("number")
            if isinstance(number, bool) or not isinstance(number, int) or number < 1:
                number = index
            instructions.append(RecipeInstruction(number, _text(step.get("step"))))
        return tuple(instructions)

    text = _text(payload.get("instructions"))
    if text.strip():
        fragments = [fragment.strip() for fragment in STEP_SPLIT_RE.split(text)]
        fragments = [fragment for fragment in fragments if fragment]
        if fragments:
            return tuple(
                RecipeInstruction(index, fragment) for index, fragment in enumerate(fragments, start=1)
            )

    return (RecipeInstruction(1, MISSING_INSTRUCTIONS),)


def normalize_recipe(payload):
    """Map one upstream recipe payload onto a Recipe."""
    if not isinstance(payload, Mapping):
        payload = {}

    summary = _text(payload.get("summary"))
    servings = _number(payload.get("servings"))
    ingredients = payload.get("extendedIngredients")
    if not isinstance(ingredients, list):
        ingredients = []

    return Recipe(
        recipe_id=payload.get("id"),
        title=_text(payload.get("title")),
        description=strip_html(summary) if summary else "",
        image_url=_text(payload.get("image")),
        servings=servings if servings and servings > 0 else 1,
        source=SOURCE,
        ingredients=tuple(map_ingredient(item) for item in ingredients),
        instructions=map_instructions(payload),
    )
