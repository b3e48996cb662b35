from unittest.mock import MagicMock

import pytest

from pantry_chef import firebase_service
from pantry_chef.app import create_app
from pantry_chef.config import TestingConfig
from pantry_chef.spoonacular_client import EXTENSION_KEY, SpoonacularClient

from fakes import USER_ID, FakeFirestore


@pytest.fixture
def fake_db(monkeypatch):
    db = FakeFirestore()
    monkeypatch.setattr(firebase_service, "get_db", lambda: db)
    return db


@pytest.fixture
def spoonacular():
    return MagicMock(spec=SpoonacularClient)


@pytest.fixture
def app(fake_db, spoonacular, monkeypatch):
    def verify_id_token(token):
        if token != "valid-token":
            raise ValueError("Token rejected")
        return {"uid": USER_ID}

    monkeypatch.setattr(firebase_service.auth, "verify_id_token", verify_id_token)

    app = create_app(TestingConfig)
    app.extensions[EXTENSION_KEY] = spoonacular
    return app


@pytest.fixture
def client(app):
    return app.test_client()
