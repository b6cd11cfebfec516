"""Tests for configuration and scoped overrides."""

import errno

import pytest

import fs_err
from fs_err import (
    FsErrConfig,
    configure,
    current_config,
    expose_original_error,
    get_config,
    load_config,
)
from fs_err.config import ENV_EXPOSE_ORIGINAL_ERROR


class TestLoadConfig:
    def test_default_is_off(self):
        assert load_config({}) == FsErrConfig(expose_original_error=False)

    @pytest.mark.parametrize("value", ["1", "true", "TRUE", "yes", "on", " On "])
    def test_truthy_values(self, value):
        assert load_config({ENV_EXPOSE_ORIGINAL_ERROR: value}).expose_original_error

    @pytest.mark.parametrize("value", ["", "0", "false", "no", "off", "maybe"])
    def test_other_values_are_off(self, value):
        assert not load_config({ENV_EXPOSE_ORIGINAL_ERROR: value}).expose_original_error

    def test_reads_os_environ_by_default(self, monkeypatch):
        monkeypatch.setenv(ENV_EXPOSE_ORIGINAL_ERROR, "1")
        assert load_config().expose_original_error


class TestConfigure:
    def test_configure_updates_process_config(self):
        result = configure(expose_original_error=True)
        assert result.expose_original_error is True
        assert get_config() is result

    def test_configure_without_arguments_keeps_config(self):
        configure(expose_original_error=True)
        assert configure().expose_original_error is True

    def test_unknown_option(self):
        with pytest.raises(ValueError, match="Unexpected configuration options"):
            configure(colour=True)

    def test_config_is_frozen(self):
        with pytest.raises(AttributeError):
            get_config().expose_original_error = True

    def test_process_config_applies_to_new_errors(self, tmp_path):
        configure(expose_original_error=True)
        with pytest.raises(FileNotFoundError) as exc_info:
            fs_err.remove(tmp_path / "missing.txt")
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)
        assert exc_info.value.__cause__.errno == errno.ENOENT


class TestContextOverride:
    def test_override_wins_over_process_config(self):
        configure(expose_original_error=False)
        with expose_original_error():
            assert current_config().expose_original_error is True
        assert current_config().expose_original_error is False

    def test_override_can_disable(self):
        configure(expose_original_error=True)
        with expose_original_error(False):
            assert current_config().expose_original_error is False
        assert current_config().expose_original_error is True

    def test_nested_overrides(self):
        with expose_original_error():
            with expose_original_error(False):
                assert current_config().expose_original_error is False
            assert current_config().expose_original_error is True

    def test_override_reset_after_exception(self):
        with pytest.raises(RuntimeError):
            with expose_original_error():
                raise RuntimeError("boom")
        assert current_config().expose_original_error is False

    def test_errors_built_in_scope_chain_source(self, tmp_path):
        with expose_original_error():
            with pytest.raises(FileNotFoundError) as exc_info:
                fs_err.stat(tmp_path / "missing")
        err = exc_info.value
        assert isinstance(err.__cause__, FileNotFoundError)
        assert str(err) == f"failed to query metadata of file '{tmp_path / 'missing'}'"
