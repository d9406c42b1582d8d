"""Tests for the ``slashhook-serve`` CLI (slashhook.cli.serve)."""

from __future__ import annotations

import logging
import sys
import types
from unittest.mock import patch

import pytest

from slashhook.cli.serve import _apply_overrides, _build_parser, load_registry, main
from slashhook.config.settings import Settings
from slashhook.messaging.models import in_channel_response
from slashhook.registries.commands import CommandRegistry


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def parser():
    return _build_parser()


@pytest.fixture()
def commands_module(monkeypatch):
    """Install an importable ``fake_commands`` module."""
    module = types.ModuleType("fake_commands")
    registry = CommandRegistry()
    registry.register("/weather", "secret123", lambda req: in_channel_response("Sunny"))
    module.registry = registry

    def build_registry() -> CommandRegistry:
        return registry

    module.build_registry = build_registry
    module.not_a_registry = 42
    module.nested = types.SimpleNamespace(registry=registry)
    monkeypatch.setitem(sys.modules, "fake_commands", module)
    return module


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


class TestBuildParser:
    def test_target_only(self, parser):
        args = parser.parse_args(["mybot.commands:registry"])
        assert args.target == "mybot.commands:registry"
        assert args.host is None
        assert args.port is None
        assert args.cert_file is None
        assert args.key_file is None
        assert args.verbose is False

    def test_all_flags(self, parser):
        args = parser.parse_args([
            "m:r", "--host", "127.0.0.1", "--port", "9000",
            "--cert-file", "c.pem", "--key-file", "k.pem", "-v",
        ])
        assert args.port == 9000
        assert args.cert_file == "c.pem"
        assert args.key_file == "k.pem"
        assert args.verbose is True

    def test_target_required(self, parser):
        with pytest.raises(SystemExit):
            parser.parse_args([])

    def test_overrides_applied(self, parser):
        args = parser.parse_args(["m:r", "--port", "9000", "--cert-file", "c", "--key-file", "k"])
        settings = _apply_overrides(Settings(), args)
        assert settings.port == 9000
        assert settings.host == "0.0.0.0"
        assert settings.tls_enabled is True


# ---------------------------------------------------------------------------
# Target loading
# ---------------------------------------------------------------------------


class TestLoadRegistry:
    def test_attribute(self, commands_module):
        assert load_registry("fake_commands:registry") is commands_module.registry

    def test_factory(self, commands_module):
        assert load_registry("fake_commands:build_registry") is commands_module.registry

    def test_dotted_attribute(self, commands_module):
        assert load_registry("fake_commands:nested.registry") is commands_module.registry

    def test_missing_colon(self, commands_module):
        with pytest.raises(ValueError):
            load_registry("fake_commands")

    def test_missing_attribute(self, commands_module):
        with pytest.raises(ValueError, match="no attribute"):
            load_registry("fake_commands:missing")

    def test_wrong_type(self, commands_module):
        with pytest.raises(ValueError, match="not a CommandRegistry"):
            load_registry("fake_commands:not_a_registry")

    def test_missing_module(self):
        with pytest.raises(ImportError):
            load_registry("definitely_not_a_real_module_xyz:registry")


# ---------------------------------------------------------------------------
# main()
# ---------------------------------------------------------------------------


class TestMain:
    @patch("slashhook.cli.serve.logging.basicConfig")
    @patch("slashhook.cli.serve.serve")
    def test_serves_loaded_registry(self, mock_serve, _mock_logging, commands_module):
        main(["fake_commands:registry", "--port", "9001"])
        registry, settings = mock_serve.call_args[0]
        assert registry is commands_module.registry
        assert settings.port == 9001

    @patch("slashhook.cli.serve.logging.basicConfig")
    @patch("slashhook.cli.serve.serve")
    def test_bad_target_exits(self, mock_serve, _mock_logging):
        with pytest.raises(SystemExit) as exc:
            main(["definitely_not_a_real_module_xyz:registry"])
        assert exc.value.code == 1
        mock_serve.assert_not_called()

    @patch("slashhook.cli.serve.logging.basicConfig")
    @patch("slashhook.cli.serve.serve")
    def test_bad_port_setting_exits(self, mock_serve, _mock_logging, monkeypatch, commands_module):
        monkeypatch.setenv("SLASHHOOK_PORT", "not-a-port")
        with pytest.raises(SystemExit) as exc:
            main(["fake_commands:registry"])
        assert exc.value.code == 1
        mock_serve.assert_not_called()

    @patch("slashhook.cli.serve.logging.basicConfig")
    @patch("slashhook.cli.serve.serve", side_effect=ValueError("TLS needs both a certificate file and a key file"))
    def test_serve_error_exits(self, _mock_serve, _mock_logging, commands_module):
        with pytest.raises(SystemExit) as exc:
            main(["fake_commands:registry", "--cert-file", "c.pem"])
        assert exc.value.code == 1

    @patch("slashhook.cli.serve.logging.basicConfig")
    @patch("slashhook.cli.serve.serve")
    def test_verbose_sets_debug(self, _mock_serve, mock_logging, commands_module):
        main(["fake_commands:registry", "-v"])
        assert mock_logging.call_args.kwargs["level"] == logging.DEBUG
