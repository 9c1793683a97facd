"""Shared pytest fixtures for the create-geo-app test suite.

Provides reusable fixtures for:
- A test ``Config`` rooted in a temporary directory
- The root layout ``create-next-app`` generates
- A fake ``run_command`` that imitates the external tools
- Environment variables that make CLI runs fast and offline
"""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock

import pytest

from create_geo_app.config import Config


# ---------------------------------------------------------------------------
# Layout fixtures
# ---------------------------------------------------------------------------

NEXTJS_LAYOUT = textwrap.dedent(
    """\
    import type { Metadata } from "next";
    import { Geist, Geist_Mono } from "next/font/google";
    import "./globals.css";

    const geistSans = Geist({
      variable: "--font-geist-sans",
      subsets: ["latin"],
    });

    const geistMono = Geist_Mono({
      variable: "--font-geist-mono",
      subsets: ["latin"],
    });

    export const metadata: Metadata = {
      title: "Create Next App",
      description: "Generated by create next app",
    };

    export default function RootLayout({
      children,
    }: Readonly<{
      children: React.ReactNode;
    }>) {
      return (
        <html lang="en">
          <body
            className={`${geistSans.variable} ${geistMono.variable} antialiased`}
          >
            {children}
          </body>
        </html>
      );
    }
    """
)


@pytest.fixture
def nextjs_layout() -> str:
    """Root layout as generated by ``create-next-app``."""
    return NEXTJS_LAYOUT


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

@pytest.fixture
def project_config(tmp_path: Path) -> Config:
    """Config for ``my-app`` inside tmp_path, with no pause and no preflight."""
    return Config(
        project_name="my-app",
        output_dir=tmp_path,
        settle_delay=0,
        preflight=False,
    )


@pytest.fixture
def docs_config(tmp_path: Path) -> Config:
    """Same as ``project_config`` with the documentation section enabled."""
    return Config(
        project_name="my-docs",
        output_dir=tmp_path,
        docs=True,
        settle_delay=0,
        preflight=False,
    )


@pytest.fixture
def scaffolded_project(project_config: Config) -> Path:
    """A project directory that looks like create-next-app just ran."""
    layout = project_config.layout_path
    layout.parent.mkdir(parents=True)
    layout.write_text(NEXTJS_LAYOUT, encoding="utf-8")
    return project_config.project_dir


# ---------------------------------------------------------------------------
# Fake external tools
# ---------------------------------------------------------------------------

def make_fake_run_command(fail_on: str | None = None) -> AsyncMock:
    """Build an ``AsyncMock`` standing in for ``run_command``.

    The ``create-next-app`` call creates ``<cwd>/<name>/app/layout.tsx`` the
    way the real scaffolder would.  Any call whose argv contains *fail_on*
    returns exit status 1.
    """

    async def fake(cmd: list[str], cwd: Any = None, **kwargs: Any) -> tuple[int, str, str]:
        if fail_on is not None and fail_on in cmd:
            return (1, "", "")
        if any(part.startswith("create-next-app") for part in cmd):
            name = cmd[2]
            layout = Path(cwd) / name / "app" / "layout.tsx"
            layout.parent.mkdir(parents=True, exist_ok=True)
            layout.write_text(NEXTJS_LAYOUT, encoding="utf-8")
        return (0, "", "")

    return AsyncMock(side_effect=fake)


@pytest.fixture
def fake_run_command() -> AsyncMock:
    """A ``run_command`` replacement where every tool succeeds."""
    return make_fake_run_command()


@pytest.fixture
def fast_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Environment for CLI runs: no settle pause, no registry probe."""
    for name in (
        "CREATE_GEO_APP_OUTPUT_DIR",
        "CREATE_GEO_APP_DOCS",
        "CREATE_GEO_APP_REGISTRY_URL",
        "CREATE_GEO_APP_NPX",
        "CREATE_GEO_APP_NPM",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("CREATE_GEO_APP_SETTLE_DELAY", "0")
    monkeypatch.setenv("CREATE_GEO_APP_SKIP_PREFLIGHT", "1")


@pytest.fixture
def failing_run_command():
    """Factory for a ``run_command`` replacement that fails on one argument."""
    return make_fake_run_command
