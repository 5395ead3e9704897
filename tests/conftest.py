# tests/conftest.py

"""Shared pytest fixtures: an app on in-memory SQLite and request helpers."""

import pytest

from catalog_service import create_app
from catalog_service.config import TestingConfig
from catalog_service.model import db


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store(app):
    return app.extensions['catalog_store']


@pytest.fixture
def make_product(client):
    def _make(name="Widget", price=9.99):
        resp = client.post("/products", json={"name": name, "price": price})
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()
    return _make


@pytest.fixture
def make_review(client):
    def _make(product_id, content="Great"):
        resp = client.post("/reviews", json={"content": content, "product_id": product_id})
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()
    return _make
