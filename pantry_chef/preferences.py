import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from .errors import PreferencesMissing, UserNotFound

logger = logging.getLogger(__name__)

ALLERGY_KEYS = ("dairy", "eggs", "nuts", "shellfish", "soy", "wheat")
DIETARY_KEYS = ("glutenFree", "vegan", "vegetarian")
DEFAULT_LANGUAGE = "en"


@dataclass(frozen=True)
class UserPreferences:
    allergies: dict = field(default_factory=lambda: dict.fromkeys(ALLERGY_KEYS, False))
    dietary_preferences: dict = field(default_factory=lambda: dict.fromkeys(DIETARY_KEYS, False))
    language: str = DEFAULT_LANGUAGE

    def active_allergies(self):
        return [key for key in ALLERGY_KEYS if self.allergies[key]]

    def to_dict(self):
        return {
            "allergies": dict(self.allergies),
            "dietaryPreferences": dict(self.dietary_preferences),
            "language": self.language,
        }


def _flags(raw, keys):
    # Anything other than a real boolean True counts as unset.
    if not isinstance(raw, Mapping):
        raw = {}
    return {key: raw.get(key) is True for key in keys}


def extract_preferences(raw):
    """Build a fully populated UserPreferences from a stored onboarding record.

    The record comes straight from Firestore, so any key may be missing or hold
    an unexpected type. Only a record that is absent altogether is an error.
    """
    if raw is None:
        raise PreferencesMissing("User onboarding data not found")
    if not isinstance(raw, Mapping):
        raw = {}

    settings = raw.get("preferences")
    language = settings.get("language") if isinstance(settings, Mapping) else None
    if not isinstance(language, str) or not language.strip():
        language = DEFAULT_LANGUAGE

    return UserPreferences(
        allergies=_flags(raw.get("allergies"), ALLERGY_KEYS),
        dietary_preferences=_flags(raw.get("dietaryPreferences"), DIETARY_KEYS),
        language=language.strip(),
    )


def read_onboarding(db, user_id):
    """Return the raw onboarding record of a user, or None when it is absent."""
    user_doc = db.collection("users").document(user_id).get()
    if not user_doc.exists:
        raise UserNotFound(f"User not found: {user_id}")
    return (user_doc.to_dict() or {}).get("onboarding")


def load_user_preferences(db, user_id):
    preferences = extract_preferences(read_onboarding(db, user_id))
    logger.info(
        f"User preferences for {user_id}: dietary={preferences.dietary_preferences}, "
        f"allergies={preferences.active_allergies()}"
    )
    return preferences
