# JSON Schemas for request validation

PANTRY_LOCATIONS = ["pantry", "fridge", "freezer"]

preferences_schema = {
    "type": "object",
    "properties": {
        "onboarding": {
            "type": "object",
            "properties": {
                "allergies": {
                    "type": "object",
                    "properties": {
                        "dairy": {"type": "boolean"},
                        "eggs": {"type": "boolean"},
                        "nuts": {"type": "boolean"},
                        "shellfish": {"type": "boolean"},
                        "soy": {"type": "boolean"},
                        "wheat": {"type": "boolean"}
                    },
                    "additionalProperties": {"type": "boolean"}
                },
                "dietaryPreferences": {
                    "type": "object",
                    "properties": {
                        "glutenFree": {"type": "boolean"},
                        "vegan": {"type": "boolean"},
                        "vegetarian": {"type": "boolean"}
                    },
                    "additionalProperties": {"type": "boolean"}
                },
                "preferences": {
                    "type": "object",
                    "properties": {
                        "language": {"type": "string", "minLength": 2, "maxLength": 10}
                    }
                }
            }
        }
    },
    "required": ["onboarding"]
}

pantry_item_schema = {
    "type": "object",
    "properties": {
        "title": {"type": "string", "minLength": 1},
        "description": {"type": "string"},
        "imageUrl": {"type": "string"},
        "expiryDate": {"type": ["string", "null"]},
        "quantity": {"type": "number", "exclusiveMinimum": 0},
        "category": {"type": "string", "minLength": 1},
        "location": {"type": "string", "enum": PANTRY_LOCATIONS}
    },
    "required": ["title", "quantity", "category", "location"]
}

pantry_update_schema = {
    "type": "object",
    "properties": {
        "title": {"type": "string", "minLength": 1},
        "description": {"type": "string"},
        "imageUrl": {"type": "string"},
        "expiryDate": {"type": ["string", "null"]},
        "quantity": {"type": "number", "exclusiveMinimum": 0},
        "category": {"type": "string", "minLength": 1}
    },
    "additionalProperties": False,
    "minProperties": 1
}

shopping_item_schema = {
    "type": "object",
    "properties": {
        "title": {"type": "string", "minLength": 1},
        "description": {"type": "string"},
        "quantity": {"type": "number", "exclusiveMinimum": 0},
        "category": {"type": "string"}
    },
    "required": ["title", "quantity"]
}

shopping_update_schema = {
    "type": "object",
    "properties": {
        "title": {"type": "string", "minLength": 1},
        "description": {"type": "string"},
        "quantity": {"type": "number", "minimum": 0},
        "category": {"type": "string"}
    }
}

generate_list_schema = {
    "type": "object",
    "properties": {
        "recipeId": {"type": ["integer", "string"]},
        "recipeName": {"type": "string", "minLength": 1},
        "ingredients": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string", "minLength": 1},
                    "quantity": {"type": "number", "minimum": 0},
                    "unit": {"type": "string"}
                },
                "required": ["name"]
            }
        }
    },
    "required": ["recipeId", "recipeName", "ingredients"]
}
