"""Unit tests for Config and related Pydantic models (create_geo_app.config).

Tests cover:
- ToolchainConfig and TimeoutConfig defaults and validation
- Config defaults, derived paths (properties), save/load, from_env
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from create_geo_app.config import Config, TimeoutConfig, ToolchainConfig


# ---------------------------------------------------------------------------
# ToolchainConfig / TimeoutConfig
# ---------------------------------------------------------------------------


class TestToolchainConfig:
    @pytest.mark.unit
    def test_defaults(self):
        tools = ToolchainConfig()
        assert tools.npx == "npx"
        assert tools.npm == "npm"
        assert tools.scaffolder_package == "create-next-app@latest"
        assert tools.ui_package == "shadcn@latest"
        assert tools.base_color == "neutral"
        assert tools.import_alias == "@/*"


class TestTimeoutConfig:
    @pytest.mark.unit
    def test_defaults(self):
        timeouts = TimeoutConfig()
        assert timeouts.scaffold == 900
        assert timeouts.ui_init == 600
        assert timeouts.ui_add == 900
        assert timeouts.install == 600

    @pytest.mark.unit
    def test_rejects_tiny_timeout(self):
        with pytest.raises(ValidationError):
            TimeoutConfig(scaffold=1)


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


class TestConfigDefaults:
    @pytest.mark.unit
    def test_defaults(self):
        config = Config()
        assert config.project_name == ""
        assert config.output_dir == Path(".")
        assert config.docs is False
        assert config.settle_delay == 2.0
        assert config.preflight is True
        assert config.registry_url == "https://registry.npmjs.org/"
        assert isinstance(config.toolchain, ToolchainConfig)
        assert isinstance(config.timeouts, TimeoutConfig)

    @pytest.mark.unit
    def test_negative_settle_delay_rejected(self):
        with pytest.raises(ValidationError):
            Config(settle_delay=-1)


class TestConfigPaths:
    @pytest.mark.unit
    def test_project_dir(self, tmp_path: Path):
        config = Config(project_name="my-app", output_dir=tmp_path)
        assert config.project_dir == tmp_path / "my-app"

    @pytest.mark.unit
    def test_layout_path(self, tmp_path: Path):
        config = Config(project_name="my-app", output_dir=tmp_path)
        assert config.layout_path == tmp_path / "my-app" / "app" / "layout.tsx"

    @pytest.mark.unit
    def test_env_path(self, tmp_path: Path):
        config = Config(project_name="my-app", output_dir=tmp_path)
        assert config.env_path == tmp_path / "my-app" / ".env"

    @pytest.mark.unit
    def test_default_output_dir_is_relative(self):
        config = Config(project_name="my-app")
        assert config.project_dir == Path("my-app")


class TestConfigSaveLoad:
    @pytest.mark.unit
    def test_save_writes_json(self, tmp_path: Path):
        config = Config(project_name="my-app", docs=True)
        path = config.save(tmp_path / "nested" / "config.json")
        assert path.exists()
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["project_name"] == "my-app"
        assert data["docs"] is True

    @pytest.mark.unit
    def test_load_restores_values(self, tmp_path: Path):
        original = Config(
            project_name="saved-app",
            output_dir=tmp_path,
            settle_delay=0.5,
            toolchain=ToolchainConfig(npm="pnpm"),
        )
        loaded = Config.load(original.save(tmp_path / "config.json"))
        assert loaded.project_name == "saved-app"
        assert loaded.output_dir == tmp_path
        assert loaded.settle_delay == 0.5
        assert loaded.toolchain.npm == "pnpm"


class TestConfigFromEnv:
    @pytest.mark.unit
    def test_empty_env_gives_defaults(self):
        with patch.dict("os.environ", {}, clear=True):
            config = Config.from_env()
        assert config.docs is False
        assert config.preflight is True
        assert config.output_dir == Path(".")
        assert config.toolchain.npx == "npx"

    @pytest.mark.unit
    def test_reads_variables(self, tmp_path: Path):
        env = {
            "CREATE_GEO_APP_OUTPUT_DIR": str(tmp_path),
            "CREATE_GEO_APP_DOCS": "yes",
            "CREATE_GEO_APP_SETTLE_DELAY": "0.25",
            "CREATE_GEO_APP_SKIP_PREFLIGHT": "true",
            "CREATE_GEO_APP_REGISTRY_URL": "https://npm.example.com/",
            "CREATE_GEO_APP_NPX": "/opt/node/bin/npx",
            "CREATE_GEO_APP_NPM": "/opt/node/bin/npm",
        }
        with patch.dict("os.environ", env, clear=True):
            config = Config.from_env()
        assert config.output_dir == tmp_path
        assert config.docs is True
        assert config.settle_delay == 0.25
        assert config.preflight is False
        assert config.registry_url == "https://npm.example.com/"
        assert config.toolchain.npx == "/opt/node/bin/npx"
        assert config.toolchain.npm == "/opt/node/bin/npm"

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["0", "false", "no", ""])
    def test_false_flags(self, value: str):
        with patch.dict("os.environ", {"CREATE_GEO_APP_DOCS": value}, clear=True):
            config = Config.from_env()
        assert config.docs is False
