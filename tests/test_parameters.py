"""Tests for internalize/fsrs/parameters.py -- parameter validation and env config."""

import math

import pytest

from internalize.fsrs import DEFAULT_PARAMETERS, DEFAULT_WEIGHTS, FSRSParameters, InvalidArgumentError
from internalize.fsrs import parameters


def test_defaults():
    params = FSRSParameters()
    assert params.request_retention == 0.9
    assert params.maximum_interval == 36500
    assert len(params.w) == 19
    assert params.w[2] == 3.1262


def test_module_default_is_built_on_import():
    assert parameters.DEFAULT_PARAMETERS is DEFAULT_PARAMETERS
    assert DEFAULT_PARAMETERS == FSRSParameters()
    assert DEFAULT_PARAMETERS.w == DEFAULT_WEIGHTS


def test_weights_are_stored_as_tuple():
    params = FSRSParameters(w=list(DEFAULT_WEIGHTS))
    assert isinstance(params.w, tuple)
    assert params.w == DEFAULT_WEIGHTS


def test_parameters_are_immutable():
    params = FSRSParameters()
    with pytest.raises(Exception):
        params.request_retention = 0.5


@pytest.mark.parametrize("retention", [0, -0.1, 1.01, math.nan, math.inf, True, "0.9"])
def test_invalid_retention_raises(retention):
    with pytest.raises(InvalidArgumentError):
        FSRSParameters(request_retention=retention)


def test_retention_of_one_is_allowed():
    assert FSRSParameters(request_retention=1).request_retention == 1.0


@pytest.mark.parametrize("maximum_interval", [0, -5, 1.5, True, None])
def test_invalid_maximum_interval_raises(maximum_interval):
    with pytest.raises(InvalidArgumentError):
        FSRSParameters(maximum_interval=maximum_interval)


def test_wrong_weight_count_raises():
    with pytest.raises(InvalidArgumentError):
        FSRSParameters(w=DEFAULT_WEIGHTS[:18])
    with pytest.raises(InvalidArgumentError):
        FSRSParameters(w=DEFAULT_WEIGHTS + (1.0,))


@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
def test_non_finite_weight_raises(bad):
    weights = list(DEFAULT_WEIGHTS)
    weights[8] = bad
    with pytest.raises(InvalidArgumentError):
        FSRSParameters(w=weights)


def test_non_numeric_weight_raises():
    weights = list(DEFAULT_WEIGHTS)
    weights[0] = "0.4"
    with pytest.raises(InvalidArgumentError):
        FSRSParameters(w=weights)


def test_invalid_argument_error_is_value_error():
    with pytest.raises(ValueError):
        FSRSParameters(request_retention=2)


def test_with_overrides_returns_new_validated_set():
    base = FSRSParameters()
    custom = base.with_overrides(request_retention=0.8)
    assert custom.request_retention == 0.8
    assert custom.w == base.w
    assert base.request_retention == 0.9
    with pytest.raises(InvalidArgumentError):
        base.with_overrides(maximum_interval=0)


def test_from_env_defaults(monkeypatch):
    for name in ("FSRS_REQUEST_RETENTION", "FSRS_MAXIMUM_INTERVAL", "FSRS_WEIGHTS"):
        monkeypatch.delenv(name, raising=False)
    assert FSRSParameters.from_env() == FSRSParameters()


def test_from_env_reads_values(monkeypatch):
    weights = [round(w + 0.1, 4) for w in DEFAULT_WEIGHTS]
    monkeypatch.setenv("FSRS_REQUEST_RETENTION", "0.85")
    monkeypatch.setenv("FSRS_MAXIMUM_INTERVAL", "365")
    monkeypatch.setenv("FSRS_WEIGHTS", ", ".join(str(w) for w in weights))

    params = FSRSParameters.from_env()
    assert params.request_retention == 0.85
    assert params.maximum_interval == 365
    assert params.w == tuple(weights)


@pytest.mark.parametrize("name,value", [
    ("FSRS_REQUEST_RETENTION", "high"),
    ("FSRS_MAXIMUM_INTERVAL", "ten"),
    ("FSRS_WEIGHTS", "1,2,3"),
    ("FSRS_WEIGHTS", ",".join(["nan"] * 19)),
])
def test_from_env_malformed_raises(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(InvalidArgumentError):
        FSRSParameters.from_env()
