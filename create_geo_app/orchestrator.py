"""Setup orchestrator.

Turns a validated ``Config`` into an ordered list of named setup steps and
runs them one after another:

    scaffold      -- npx create-next-app <name> ...
    ui-init       -- npx shadcn init ...
    settle        -- fixed pause while shadcn finishes its own initialisation
    ui-add        -- npx shadcn add --all
    dependencies  -- npm install next-themes, @next/third-parties, sharp (+ MDX)
    <templates>   -- one step per template group (see scaffolder.generator)
    patch-layout  -- wire the theme provider, header and footer into app/layout.tsx

Every step after ``scaffold`` receives the project directory explicitly; the
process working directory is never changed.  The runner stops at the first
failing step and raises ``SetupError`` naming it.  Nothing is rolled back.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Awaitable, Callable, Optional

from rich.markup import escape
from rich.panel import Panel

from create_geo_app.config import Config
from create_geo_app.scaffolder import LayoutPatcher, ProjectFileGenerator, TemplateGroup
from create_geo_app.utils import (
    check_registry,
    console,
    format_command,
    format_duration,
    print_step_header,
    print_success,
    print_summary_table,
    print_warning,
    run_command,
)

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class CommandError(Exception):
    """Raised when an external command exits with a non-zero status."""

    def __init__(self, cmd: list[str], returncode: int, stderr: str = "") -> None:
        self.cmd = cmd
        self.returncode = returncode
        self.stderr = stderr
        message = f"`{format_command(cmd)}` exited with status {returncode}"
        if stderr:
            message = f"{message}: {stderr}"
        super().__init__(message)


class SetupError(Exception):
    """Raised when a setup step fails.  Carries the failing step's name."""

    def __init__(self, step: str, message: str) -> None:
        self.step = step
        super().__init__(f"Step '{step}' failed: {message}")


# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------

StepAction = Callable[[], Awaitable[Optional[list[Path]]]]


@dataclass
class SetupStep:
    """A named unit of work in the setup sequence."""

    name: str
    description: str
    action: StepAction


@dataclass
class StepResult:
    """Outcome of a single step."""

    name: str
    success: bool
    duration: float = 0.0
    error: str | None = None
    written: list[Path] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Command builders
# ---------------------------------------------------------------------------

RUNTIME_PACKAGES: list[list[str]] = [
    ["next-themes"],
    ["@next/third-parties@latest", "sharp"],
]

DOCS_PACKAGES: list[str] = ["@next/mdx", "@mdx-js/loader", "@mdx-js/react", "@types/mdx"]


def scaffold_command(config: Config) -> list[str]:
    """``create-next-app`` invocation producing a typed, styled, linted App Router project."""
    tools = config.toolchain
    return [
        tools.npx,
        tools.scaffolder_package,
        config.project_name,
        "--yes",
        "--typescript",
        "--tailwind",
        "--eslint",
        "--biome",
        "--app",
        "--turbopack",
        "--import-alias",
        tools.import_alias,
    ]


def ui_init_command(config: Config) -> list[str]:
    tools = config.toolchain
    return [
        tools.npx,
        tools.ui_package,
        "init",
        "--yes",
        "--css-variables",
        "--base-color",
        tools.base_color,
    ]


def ui_add_command(config: Config) -> list[str]:
    tools = config.toolchain
    return [tools.npx, tools.ui_package, "add", "--all", "--yes"]


def install_commands(config: Config) -> list[list[str]]:
    """One ``npm install`` per package batch, in install order."""
    batches = [list(batch) for batch in RUNTIME_PACKAGES]
    if config.docs:
        batches.append(list(DOCS_PACKAGES))
    return [[config.toolchain.npm, "install", *batch] for batch in batches]


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------


class SetupOrchestrator:
    """Builds and runs the ordered setup sequence for one project.

    Attributes:
        config: Validated configuration; ``project_name`` must be set.
        results: ``StepResult`` for every step that ran, in order.
    """

    def __init__(
        self,
        config: Config,
        generator: ProjectFileGenerator | None = None,
        patcher: LayoutPatcher | None = None,
    ) -> None:
        self.config = config
        self.generator = generator or ProjectFileGenerator(config)
        self.patcher = patcher or LayoutPatcher()
        self.results: list[StepResult] = []

    @property
    def project_dir(self) -> Path:
        return self.config.project_dir

    # ------------------------------------------------------------------
    # Step construction
    # ------------------------------------------------------------------

    def build_steps(self) -> list[SetupStep]:
        """Return the full, ordered step list for this config."""
        steps = [
            SetupStep("scaffold", "Setting up Next.js 16 project", self._scaffold),
            SetupStep("ui-init", "Installing shadcn/ui", self._ui_init),
            SetupStep("settle", "Waiting for shadcn/ui to settle", self._settle),
            SetupStep("ui-add", "Installing shadcn/ui components", self._ui_add),
            SetupStep("dependencies", "Installing runtime dependencies", self._install),
        ]
        for group in self.generator.groups():
            steps.append(SetupStep(group.name, group.description, self._writer(group)))
        steps.append(SetupStep("patch-layout", "Updating root layout", self._patch_layout))
        return steps

    def _writer(self, group: TemplateGroup) -> StepAction:
        async def write() -> list[Path]:
            return await self.generator.write_group(group, self.project_dir)

        return write

    # ------------------------------------------------------------------
    # Step actions
    # ------------------------------------------------------------------

    async def _exec(self, cmd: list[str], cwd: Path, timeout: int) -> None:
        console.print(f"  [dim]$ {escape(format_command(cmd))}[/dim]")
        returncode, _, stderr = await run_command(cmd, cwd=cwd, timeout=timeout, capture=False)
        if returncode != 0:
            raise CommandError(cmd, returncode, stderr)

    async def _scaffold(self) -> None:
        self.config.output_dir.mkdir(parents=True, exist_ok=True)
        await self._exec(
            scaffold_command(self.config), self.config.output_dir, self.config.timeouts.scaffold
        )
        if not self.project_dir.is_dir():
            raise FileNotFoundError(f"Scaffolder did not create {self.project_dir}")

    async def _ui_init(self) -> None:
        await self._exec(ui_init_command(self.config), self.project_dir, self.config.timeouts.ui_init)

    async def _settle(self) -> None:
        await asyncio.sleep(self.config.settle_delay)

    async def _ui_add(self) -> None:
        await self._exec(ui_add_command(self.config), self.project_dir, self.config.timeouts.ui_add)

    async def _install(self) -> None:
        for cmd in install_commands(self.config):
            await self._exec(cmd, self.project_dir, self.config.timeouts.install)

    async def _patch_layout(self) -> list[Path]:
        changed = await self.patcher.apply(self.config.layout_path)
        if not changed:
            console.print("  [dim]Layout already patched[/dim]")
            return []
        return [self.config.layout_path]

    # ------------------------------------------------------------------
    # Preflight
    # ------------------------------------------------------------------

    async def preflight(self) -> bool:
        """Probe the package registry.  Never fatal: returns reachability."""
        reachable = await check_registry(self.config.registry_url, self.config.registry_timeout)
        if reachable:
            console.print(f"  [green]+[/green] Registry reachable ({self.config.registry_url})")
        else:
            print_warning(
                f"  Could not reach {self.config.registry_url}. "
                "Package downloads may fail."
            )
        return reachable

    # ------------------------------------------------------------------
    # Runner
    # ------------------------------------------------------------------

    async def run_steps(self, steps: list[SetupStep]) -> list[StepResult]:
        """Run *steps* in order, stopping at the first failure.

        Raises:
            SetupError: naming the step that failed.  ``self.results`` holds
                every result up to and including the failed one.
        """
        total = len(steps)
        for index, step in enumerate(steps, start=1):
            print_step_header(index, total, step.description)
            started = time.monotonic()
            try:
                written = await step.action()
            except Exception as exc:
                elapsed = time.monotonic() - started
                self.results.append(
                    StepResult(step.name, False, elapsed, error=str(exc) or type(exc).__name__)
                )
                raise SetupError(step.name, str(exc) or type(exc).__name__) from exc

            elapsed = time.monotonic() - started
            result = StepResult(step.name, True, elapsed, written=list(written or []))
            self.results.append(result)
            for path in result.written:
                console.print(f"  [green]+[/green] {escape(_display_path(path, self.project_dir))}")

        return self.results

    async def run(self) -> list[StepResult]:
        """Run the complete setup sequence for the configured project."""
        setup_start = time.monotonic()
        console.print(
            Panel(
                f"[bold bright_cyan]create-geo-app[/bold bright_cyan]\n"
                f"Project : {self.config.project_name}\n"
                f"Target  : {self.project_dir.resolve()}\n"
                f"Docs    : {'yes' if self.config.docs else 'no'}",
                title="[bold]Setup Start[/bold]",
                border_style="bright_cyan",
            )
        )

        if self.config.preflight:
            await self.preflight()

        results = await self.run_steps(self.build_steps())

        print_summary_table(
            {r.name: format_duration(r.duration) for r in results},
            title=f"Setup finished in {format_duration(time.monotonic() - setup_start)}",
        )
        print_success("Setup complete!")
        return results


def _display_path(path: Path, root: Path) -> str:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return str(path)
