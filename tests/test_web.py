from fastapi import FastAPI
from fastapi.testclient import TestClient

from web_config_combiner.models import ConfigNode
from web_config_combiner.sources import InitParameterConfiguration
from web_config_combiner.web import AppParameterSource, create_config_router

TREE = ConfigNode(
    "config",
    attributes=[ConfigNode("version", "2")],
    children=[ConfigNode("theme", "dark")],
)


def create_client(tree=TREE, parameters=None):
    app = FastAPI()
    app.state.init_parameters = (
        {"locales": "en, fr", "theme": "dark"} if parameters is None else parameters
    )
    config = InitParameterConfiguration(AppParameterSource(app))
    app.include_router(create_config_router(config, tree))
    return TestClient(app)


def test_keys_endpoint_lists_parameters():
    response = create_client().get("/config/keys")
    assert response.status_code == 200
    assert response.json() == {"keys": ["locales", "theme"]}


def test_property_endpoint_splits_lists():
    client = create_client()

    response = client.get("/config/properties/locales")
    assert response.status_code == 200
    assert response.json() == {"key": "locales", "value": ["en", "fr"]}

    response = client.get("/config/properties/theme")
    assert response.json() == {"key": "theme", "value": "dark"}


def test_missing_property_returns_404():
    response = create_client().get("/config/properties/missing")
    assert response.status_code == 404
    assert "missing" in response.json()["detail"]


def test_tree_endpoint_returns_tree():
    response = create_client().get("/config/tree")
    assert response.status_code == 200
    node = response.json()["node"]
    assert node["name"] == "config"
    assert node["attributes"] == [{"name": "version", "value": "2"}]
    assert node["children"][0]["value"] == "dark"


def test_tree_endpoint_without_tree_returns_404():
    response = create_client(tree=None).get("/config/tree")
    assert response.status_code == 404


def test_properties_cannot_be_modified_over_http():
    response = create_client().post("/config/properties/theme", json={"value": "light"})
    assert response.status_code == 405


def test_app_parameter_source_without_parameters():
    app = FastAPI()
    source = AppParameterSource(app)
    assert list(source.parameter_names()) == []
    assert source.get_parameter("anything") is None

    app.state.init_parameters = {"late": "value"}
    assert source.get_parameter("late") == "value"
