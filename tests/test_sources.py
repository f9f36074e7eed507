import pytest

from web_config_combiner.exceptions import ConfigurationError, UnsupportedOperationError
from web_config_combiner.settings import ReaderSettings
from web_config_combiner.sources import InitParameterConfiguration, MappingParameterSource

PARAMETERS = {
    "hosts": "a.example, b.example",
    "port": "8080",
    "escaped": r"one\, two",
    "paths": "/a;/b",
}


def _config(parameters=None, **settings):
    source = MappingParameterSource(dict(PARAMETERS if parameters is None else parameters))
    return InitParameterConfiguration(source, ReaderSettings(**settings))


def test_single_values_are_returned_as_strings():
    config = _config()
    assert config.get_property("port") == "8080"
    assert config.get_property("paths") == "/a;/b"


def test_delimited_values_are_split():
    assert _config().get_property("hosts") == ["a.example", "b.example"]


def test_escaped_delimiter_keeps_raw_value():
    assert _config().get_property("escaped") == r"one\, two"


def test_missing_key_returns_none():
    assert _config().get_property("missing") is None


def test_delimiter_parsing_can_be_disabled():
    config = _config(delimiter_parsing_disabled=True)
    assert config.get_property("hosts") == "a.example, b.example"


def test_custom_list_delimiter():
    config = _config(list_delimiter=";")
    assert config.get_property("paths") == ["/a", "/b"]
    assert config.get_property("hosts") == "a.example, b.example"


def test_invalid_delimiter_is_rejected():
    with pytest.raises(ValueError):
        ReaderSettings(list_delimiter=", ")


def test_keys_follow_source_order():
    assert list(_config().get_keys()) == ["hosts", "port", "escaped", "paths"]


def test_convenience_accessors():
    config = _config()
    assert config.contains_key("port")
    assert not config.contains_key("missing")
    assert config.get_string("hosts") == "a.example"
    assert config.get_string("missing", "default") == "default"
    assert config.get_list("port") == ["8080"]
    assert config.get_list("hosts") == ["a.example", "b.example"]
    assert config.get_list("missing") == []
    assert not config.is_empty()
    assert _config({}).is_empty()


def test_mapping_protocol():
    config = _config()
    assert config["port"] == "8080"
    assert config.get("hosts") == ["a.example", "b.example"]
    assert config.get("missing", "x") == "x"
    assert "port" in config
    assert "missing" not in config
    assert len(config) == 4
    assert list(config.keys()) == ["hosts", "port", "escaped", "paths"]
    with pytest.raises(KeyError):
        config["missing"]


def test_reads_are_live():
    parameters = {"port": "80"}
    config = InitParameterConfiguration(MappingParameterSource(parameters))
    parameters["port"] = "81"
    assert config.get_property("port") == "81"


@pytest.mark.parametrize(
    "mutate",
    [
        lambda c: c.set_property("port", "9090"),
        lambda c: c.add_property("new", "value"),
        lambda c: c.clear_property("port"),
        lambda c: c.clear(),
        lambda c: c.__setitem__("port", "9090"),
        lambda c: c.__delitem__("port"),
    ],
)
def test_mutation_is_unsupported(mutate):
    parameters = dict(PARAMETERS)
    config = _config(parameters)

    with pytest.raises(UnsupportedOperationError):
        mutate(config)

    assert dict(config.source._parameters) == PARAMETERS


def test_unsupported_operation_error_hierarchy():
    assert issubclass(UnsupportedOperationError, ConfigurationError)
    assert issubclass(UnsupportedOperationError, NotImplementedError)


def test_non_string_values_are_converted():
    config = _config({"port": 8080, "ratio": 0.5})
    assert config.get_property("port") == "8080"
    assert config.get_list("ratio") == ["0.5"]
    assert config["port"] == "8080"
