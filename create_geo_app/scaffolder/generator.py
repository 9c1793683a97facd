"""Template file generation for a freshly scaffolded Next.js project.

Holds the registry of template files, grouped into the named write steps the
orchestrator runs, and the ``ProjectFileGenerator`` that renders a group into
the project directory.  Every group is independent: rendering the same
config twice produces byte-identical files.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from create_geo_app.config import Config
from create_geo_app.utils import title_from_name

from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Registry types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TemplateFile:
    """A template and the project-relative path it renders to."""

    template: str
    output: str


@dataclass(frozen=True)
class TemplateGroup:
    """Files written together as one named setup step."""

    name: str
    description: str
    files: tuple[TemplateFile, ...]
    docs_only: bool = False

    @property
    def outputs(self) -> list[str]:
        return [f.output for f in self.files]


def _files(*pairs: tuple[str, str]) -> tuple[TemplateFile, ...]:
    return tuple(TemplateFile(template, output) for template, output in pairs)


# ---------------------------------------------------------------------------
# Template registry (write order)
# ---------------------------------------------------------------------------

TEMPLATE_GROUPS: tuple[TemplateGroup, ...] = (
    TemplateGroup(
        "theme-provider",
        "Setting up theme provider",
        _files(("components/theme-provider.tsx.j2", "components/theme-provider.tsx")),
    ),
    TemplateGroup(
        "mode-toggle",
        "Creating mode toggle component",
        _files(("components/mode-toggle.tsx.j2", "components/mode-toggle.tsx")),
    ),
    TemplateGroup(
        "mobile-menu",
        "Creating mobile menu component",
        _files(("components/mobile-menu.tsx.j2", "components/mobile-menu.tsx")),
    ),
    TemplateGroup(
        "header",
        "Creating header component",
        _files(("components/header.tsx.j2", "components/header.tsx")),
    ),
    TemplateGroup(
        "footer",
        "Creating footer component",
        _files(("components/footer.tsx.j2", "components/footer.tsx")),
    ),
    TemplateGroup(
        "hover-prefetch-link",
        "Creating hover prefetch link component",
        _files(("components/hover-prefetch-link.tsx.j2", "components/hover-prefetch-link.tsx")),
    ),
    TemplateGroup(
        "environment",
        "Setting up environment variables",
        _files(("env.j2", ".env")),
    ),
    TemplateGroup(
        "pages",
        "Creating additional pages",
        _files(
            ("app/about/page.tsx.j2", "app/about/page.tsx"),
            ("app/contact/page.tsx.j2", "app/contact/page.tsx"),
            ("app/privacy/page.tsx.j2", "app/privacy/page.tsx"),
            ("app/terms/page.tsx.j2", "app/terms/page.tsx"),
            ("app/get-started/page.tsx.j2", "app/get-started/page.tsx"),
        ),
    ),
    TemplateGroup(
        "nextjs-pages",
        "Creating essential Next.js pages",
        _files(
            ("app/not-found.tsx.j2", "app/not-found.tsx"),
            ("app/error.tsx.j2", "app/error.tsx"),
            ("app/loading.tsx.j2", "app/loading.tsx"),
            ("app/sitemap.ts.j2", "app/sitemap.ts"),
            ("app/robots.ts.j2", "app/robots.ts"),
        ),
    ),
    TemplateGroup(
        "performance",
        "Setting up performance optimizations",
        _files(
            ("next.config.ts.j2", "next.config.ts"),
            ("app/instrumentation.ts.j2", "app/instrumentation.ts"),
            ("components/suspense-wrapper.tsx.j2", "components/suspense-wrapper.tsx"),
        ),
    ),
    TemplateGroup(
        "render-optimizations",
        "Creating render optimization components",
        _files(
            ("components/streaming-layout.tsx.j2", "components/streaming-layout.tsx"),
            ("lib/fonts.ts.j2", "lib/fonts.ts"),
        ),
    ),
    TemplateGroup(
        "main-page",
        "Updating main page",
        _files(("app/page.tsx.j2", "app/page.tsx")),
    ),
    TemplateGroup(
        "proxy",
        "Setting up proxy",
        _files(("proxy.ts.j2", "proxy.ts")),
    ),
    TemplateGroup(
        "docs",
        "Creating documentation section",
        _files(
            ("mdx-components.tsx.j2", "mdx-components.tsx"),
            ("lib/docs.ts.j2", "lib/docs.ts"),
            ("components/docs-sidebar.tsx.j2", "components/docs-sidebar.tsx"),
            ("app/docs/layout.tsx.j2", "app/docs/layout.tsx"),
            ("app/docs/page.tsx.j2", "app/docs/page.tsx"),
            ("app/docs/slug/page.tsx.j2", "app/docs/[slug]/page.tsx"),
            ("content/docs/introduction.mdx.j2", "content/docs/introduction.mdx"),
            ("content/docs/installation.mdx.j2", "content/docs/installation.mdx"),
            ("content/docs/configuration.mdx.j2", "content/docs/configuration.mdx"),
            ("content/docs/deployment.mdx.j2", "content/docs/deployment.mdx"),
        ),
        docs_only=True,
    ),
)


# ---------------------------------------------------------------------------
# Context data
# ---------------------------------------------------------------------------

NAV_LINKS: list[dict[str, str]] = [
    {"href": "/", "label": "Home"},
    {"href": "/about", "label": "About"},
    {"href": "/contact", "label": "Contact"},
    {"href": "/get-started", "label": "Get Started"},
]

FOOTER_LINKS: list[dict[str, str]] = [
    {"href": "/about", "label": "About"},
    {"href": "/contact", "label": "Contact"},
    {"href": "/privacy", "label": "Privacy"},
    {"href": "/terms", "label": "Terms"},
]

CONTACT_FIELDS: list[dict[str, Any]] = [
    {"name": "name", "label": "Name", "placeholder": "Your name", "type": "", "multiline": False},
    {
        "name": "email",
        "label": "Email",
        "placeholder": "your.email@example.com",
        "type": "email",
        "multiline": False,
    },
    {"name": "message", "label": "Message", "placeholder": "Your message...", "type": "", "multiline": True},
]

SITEMAP_ENTRIES: list[dict[str, Any]] = [
    {"path": "/", "change_frequency": "yearly", "priority": 1},
    {"path": "/about", "change_frequency": "monthly", "priority": 0.8},
    {"path": "/contact", "change_frequency": "monthly", "priority": 0.8},
    {"path": "/privacy", "change_frequency": "yearly", "priority": 0.5},
    {"path": "/terms", "change_frequency": "yearly", "priority": 0.5},
]

DOCS_PAGES: list[dict[str, str]] = [
    {
        "slug": "introduction",
        "title": "Introduction",
        "description": "What this project is and what ships with it.",
    },
    {
        "slug": "installation",
        "title": "Installation",
        "description": "Install dependencies and run the development server.",
    },
    {
        "slug": "configuration",
        "title": "Configuration",
        "description": "Environment variables and adding new documents.",
    },
    {
        "slug": "deployment",
        "title": "Deployment",
        "description": "Build for production and host the app.",
    },
]


def build_context(project_name: str, docs: bool = False) -> dict[str, Any]:
    """Build the Jinja2 template context for a project.

    The docs switch adds a Docs entry to the navigation and the sitemap, and
    turns on the MDX sections of ``next.config.ts``.
    """
    nav_links = list(NAV_LINKS)
    sitemap_entries = list(SITEMAP_ENTRIES)
    if docs:
        nav_links.insert(3, {"href": "/docs", "label": "Docs"})
        sitemap_entries.append({"path": "/docs", "change_frequency": "weekly", "priority": 0.7})
        sitemap_entries.extend(
            {"path": f"/docs/{page['slug']}", "change_frequency": "weekly", "priority": 0.6}
            for page in DOCS_PAGES
        )

    return {
        "project_name": project_name,
        "app_title": title_from_name(project_name),
        "docs": docs,
        "nav_links": nav_links,
        "footer_links": FOOTER_LINKS,
        "contact_fields": CONTACT_FIELDS,
        "sitemap_entries": sitemap_entries,
        "docs_pages": DOCS_PAGES if docs else [],
    }


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------


class ProjectFileGenerator:
    """Renders the registered template groups into a project directory.

    The target directory is passed explicitly to every write; nothing here
    depends on the process working directory.
    """

    def __init__(self, config: Config, renderer: TemplateRenderer | None = None) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()
        self.context = build_context(config.project_name, config.docs)

    def groups(self) -> list[TemplateGroup]:
        """Return the groups that apply to this config, in write order."""
        return [g for g in TEMPLATE_GROUPS if self.config.docs or not g.docs_only]

    def get_group(self, name: str) -> TemplateGroup:
        for group in TEMPLATE_GROUPS:
            if group.name == name:
                return group
        raise KeyError(f"Unknown template group: {name}")

    async def write_group(
        self, group: TemplateGroup, project_dir: str | Path | None = None
    ) -> list[Path]:
        """Render every file of *group* into *project_dir*.

        Existing files are overwritten unconditionally.

        Returns:
            The written file paths, in registry order.
        """
        root = Path(project_dir) if project_dir is not None else self.config.project_dir
        written: list[Path] = []
        for entry in group.files:
            path = await self.renderer.render_to_file(
                entry.template, root / entry.output, self.context
            )
            written.append(path)
        return written

    async def generate(self, project_dir: str | Path | None = None) -> list[Path]:
        """Write every applicable group.  Mainly useful for tests and previews."""
        written: list[Path] = []
        for group in self.groups():
            written.extend(await self.write_group(group, project_dir))
        return written
