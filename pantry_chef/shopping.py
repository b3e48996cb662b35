def _quantity(value):
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def pantry_totals(pantry_items):
    """Sum pantry quantities by lower-cased title across all locations."""
    totals = {}
    for item in pantry_items:
        title = item.get("title")
        if not isinstance(title, str) or not title.strip():
            continue
        key = title.strip().lower()
        totals[key] = totals.get(key, 0.0) + _quantity(item.get("quantity"))
    return totals


def needed_items(ingredients, pantry_items):
    """Return the shortfall of each recipe ingredient against the pantry."""
    on_hand = pantry_totals(pantry_items)
    needed = []
    for ingredient in ingredients:
        name = (ingredient.get("name") or "").strip()
        if not name:
            continue
        required = _quantity(ingredient.get("quantity"))
        to_buy = required - on_hand.get(name.lower(), 0.0)
        if to_buy > 0:
            needed.append({
                "name": name,
                "quantity": to_buy,
                "unit": ingredient.get("unit") or "",
                "checked": False,
            })
    return needed
