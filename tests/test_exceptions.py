"""
Tests for the exception hierarchy.
"""

import pytest

from meshwork.exceptions import ConfigError, LaunchSettingsError, MeshworkError, NotFoundError, ParseError


class TestHierarchy:
    """Verify all exceptions inherit from MeshworkError."""

    @pytest.mark.parametrize("exc_class", [ParseError, ConfigError, LaunchSettingsError, NotFoundError])
    def test_inherits_from_meshwork_error(self, exc_class):
        assert issubclass(exc_class, MeshworkError)

    def test_launch_settings_error_is_parse_and_config_error(self):
        assert issubclass(LaunchSettingsError, ParseError)
        assert issubclass(LaunchSettingsError, ConfigError)


class TestExceptionMessages:
    """Test exception constructors and details."""

    def test_meshwork_error(self):
        e = MeshworkError("boom", details={"key": "val"})
        assert str(e) == "boom"
        assert e.message == "boom"
        assert e.details == {"key": "val"}

    def test_parse_error_with_location(self):
        e = ParseError("bad indent", path="/tmp/app.yaml", line=3)
        assert str(e) == "/tmp/app.yaml:3: bad indent"
        assert e.line == 3
        assert e.details["path"] == "/tmp/app.yaml"

    def test_parse_error_without_location(self):
        e = ParseError("bad")
        assert str(e) == "bad"
        assert e.path is None

    def test_launch_settings_error_keeps_location(self):
        e = LaunchSettingsError("Invalid JSON", path="/p/launchSettings.json", line=1)
        assert "launchSettings.json:1" in str(e)
        assert e.message == str(e)

    def test_not_found_error(self):
        e = NotFoundError("missing", path="/x/y.sln")
        assert e.path.name == "y.sln"

    def test_catchable_with_base(self):
        with pytest.raises(MeshworkError):
            raise ConfigError("bad url")
