"""Tests for the exception hierarchy."""

from training_insights.exceptions import (
    ActivityValidationError,
    ConfigurationError,
    ErrorCode,
    TrainingInsightsError,
    ValidationError,
    ZonesValidationError,
)


class TestTrainingInsightsError:
    """Tests for the base exception."""

    def test_defaults(self):
        error = TrainingInsightsError("boom")
        assert error.code == ErrorCode.INTERNAL_ERROR
        assert error.details == {}
        assert str(error) == "boom"

    def test_to_dict_without_details(self):
        assert TrainingInsightsError("boom").to_dict() == {
            "error": {"code": "INTERNAL_ERROR", "message": "boom"}
        }

    def test_to_dict_with_details(self):
        error = ValidationError("bad value", field="distance")
        assert error.to_dict()["error"]["details"] == {"field": "distance"}

    def test_repr(self):
        assert repr(ConfigurationError("bad")) == (
            "ConfigurationError(code=CONFIGURATION_ERROR, message='bad')"
        )


class TestSubclasses:
    """Tests for specialised errors."""

    def test_hierarchy(self):
        assert issubclass(ActivityValidationError, ValidationError)
        assert issubclass(ZonesValidationError, ValidationError)
        assert issubclass(ConfigurationError, TrainingInsightsError)

    def test_activity_error_carries_index(self):
        error = ActivityValidationError("invalid", index=3)
        assert error.index == 3
        assert error.details == {"index": 3}
        assert error.code == ErrorCode.ACTIVITY_VALIDATION_ERROR

    def test_zones_error_field(self):
        error = ZonesValidationError("invalid")
        assert error.details == {"field": "zones"}
        assert error.code == ErrorCode.ZONES_VALIDATION_ERROR
