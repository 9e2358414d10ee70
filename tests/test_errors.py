import requests

from puncher.errors import (
    ApiError,
    ConfigError,
    ErrorCategory,
    MissingFieldError,
    PuncherException,
    classify_exception,
    classify_status,
)


def test_classify_status():
    assert classify_status(401) is ErrorCategory.AUTHENTICATION
    assert classify_status(403) is ErrorCategory.AUTHENTICATION
    assert classify_status(422) is ErrorCategory.VALIDATION
    assert classify_status(504) is ErrorCategory.TIMEOUT
    assert classify_status(500) is ErrorCategory.UNKNOWN


def test_classify_api_error_with_status():
    error = classify_exception(ApiError("HTTP GET returned 403: Forbidden", status_code=403))
    assert error.category is ErrorCategory.AUTHENTICATION
    assert "api_key" in error.hint


def test_classify_transport_errors():
    assert classify_exception(requests.Timeout("Read timed out.")).category is ErrorCategory.TIMEOUT
    assert classify_exception(requests.ConnectionError("Connection refused")).category is ErrorCategory.NETWORK


def test_classify_config_error():
    error = classify_exception(ConfigError("Loading configuration from 'x' failed"))
    assert error.category is ErrorCategory.CONFIGURATION
    assert error.to_dict() == {
        "category": "config",
        "message": "Loading configuration from 'x' failed",
        "hint": "",
    }


def test_missing_field_is_value_error():
    error = MissingFieldError("description", "LOGIN")
    assert isinstance(error, ValueError)
    assert isinstance(error, PuncherException)
    assert str(error) == "LOGIN punch has to have 'description'"
