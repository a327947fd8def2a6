"""Fixtures compartidas de la suite."""

import pytest
from fastapi.testclient import TestClient

from workspace_service.main import create_app
from workspace_service.services.fragment_parser import FragmentParser


@pytest.fixture
def fragment_parser() -> FragmentParser:
    return FragmentParser()


@pytest.fixture
def app():
    app = create_app()
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)
