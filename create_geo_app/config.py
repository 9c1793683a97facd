"""create-geo-app configuration.

Centralised, typed configuration for a setup run. All settings use Pydantic v2
models so they can be validated at construction time and serialised to/from
JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class ToolchainConfig(BaseModel):
    """External tools invoked during setup.

    The package specifiers are passed to ``npx`` verbatim, so pinning a
    version (``create-next-app@16.0.0``) works the same way it does on the
    command line.
    """

    npx: str = Field(default="npx")
    npm: str = Field(default="npm")
    scaffolder_package: str = Field(default="create-next-app@latest")
    ui_package: str = Field(default="shadcn@latest")
    base_color: str = Field(default="neutral")
    import_alias: str = Field(default="@/*")


class TimeoutConfig(BaseModel):
    """Per-command timeouts in seconds."""

    scaffold: int = Field(default=900, ge=10)
    ui_init: int = Field(default=600, ge=10)
    ui_add: int = Field(default=900, ge=10)
    install: int = Field(default=600, ge=10)


class Config(BaseModel):
    """Global create-geo-app configuration.

    Holds every tuneable parameter and derived path used by the orchestrator.
    Instances are created once by the CLI entry point and then passed through
    the rest of the system.
    """

    project_name: str = Field(default="")
    output_dir: Path = Field(default=Path("."))
    docs: bool = Field(default=False, description="Generate the MDX documentation section")
    settle_delay: float = Field(
        default=2.0, ge=0, description="Pause between shadcn init and add, in seconds"
    )
    preflight: bool = Field(default=True, description="Probe the npm registry before setup")
    registry_url: str = Field(default="https://registry.npmjs.org/")
    registry_timeout: float = Field(default=5.0, gt=0)
    toolchain: ToolchainConfig = Field(default_factory=ToolchainConfig)
    timeouts: TimeoutConfig = Field(default_factory=TimeoutConfig)

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def project_dir(self) -> Path:
        """Directory the scaffolder creates for the project."""
        return self.output_dir / self.project_name

    @property
    def layout_path(self) -> Path:
        """Root layout generated by ``create-next-app``."""
        return self.project_dir / "app" / "layout.tsx"

    @property
    def env_path(self) -> Path:
        return self.project_dir / ".env"

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file.

        Returns:
            The path where the file was written.
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return path

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            CREATE_GEO_APP_OUTPUT_DIR, CREATE_GEO_APP_DOCS,
            CREATE_GEO_APP_SETTLE_DELAY, CREATE_GEO_APP_SKIP_PREFLIGHT,
            CREATE_GEO_APP_REGISTRY_URL, CREATE_GEO_APP_NPX,
            CREATE_GEO_APP_NPM.
        """
        toolchain_kwargs: dict[str, Any] = {}
        if os.environ.get("CREATE_GEO_APP_NPX"):
            toolchain_kwargs["npx"] = os.environ["CREATE_GEO_APP_NPX"]
        if os.environ.get("CREATE_GEO_APP_NPM"):
            toolchain_kwargs["npm"] = os.environ["CREATE_GEO_APP_NPM"]

        kwargs: dict[str, Any] = {}
        if os.environ.get("CREATE_GEO_APP_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["CREATE_GEO_APP_OUTPUT_DIR"])
        if os.environ.get("CREATE_GEO_APP_SETTLE_DELAY"):
            kwargs["settle_delay"] = float(os.environ["CREATE_GEO_APP_SETTLE_DELAY"])
        if os.environ.get("CREATE_GEO_APP_REGISTRY_URL"):
            kwargs["registry_url"] = os.environ["CREATE_GEO_APP_REGISTRY_URL"]

        return cls(
            docs=_env_flag("CREATE_GEO_APP_DOCS"),
            preflight=not _env_flag("CREATE_GEO_APP_SKIP_PREFLIGHT"),
            toolchain=ToolchainConfig(**toolchain_kwargs),
            **kwargs,
        )


def _env_flag(name: str) -> bool:
    """Interpret an environment variable as a boolean switch."""
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes", "on")
