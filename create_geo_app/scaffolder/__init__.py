"""create-geo-app scaffolder -- writes template files into a generated project.

The external ``create-next-app`` and ``shadcn`` tools produce the project
skeleton; this package renders the Jinja2 templates on top of it and patches
the generated root layout.

Quick usage::

    from create_geo_app.config import Config
    from create_geo_app.scaffolder import ProjectFileGenerator

    config = Config(project_name="my-app", output_dir=Path("/tmp"))
    generator = ProjectFileGenerator(config)
    written = await generator.generate()
"""

from create_geo_app.scaffolder.generator import (
    TEMPLATE_GROUPS,
    ProjectFileGenerator,
    TemplateFile,
    TemplateGroup,
    build_context,
)
from create_geo_app.scaffolder.layout import LayoutPatcher, LayoutPatchError
from create_geo_app.scaffolder.templates import TemplateRenderer

__all__ = [
    "TEMPLATE_GROUPS",
    "LayoutPatchError",
    "LayoutPatcher",
    "ProjectFileGenerator",
    "TemplateFile",
    "TemplateGroup",
    "TemplateRenderer",
    "build_context",
]
