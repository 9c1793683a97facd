"""Root layout patching.

``create-next-app`` generates ``app/layout.tsx`` in a shape this package does
not control.  The patcher wires the theme provider, header, footer and font
into it with three regex substitutions.  Each substitution has a guard
marker: when the marker is already present the substitution is skipped, so
re-running the patch is a no-op.  When the marker is absent and the anchor
cannot be found, ``LayoutPatchError`` is raised instead of silently leaving
the layout untouched.
"""

from __future__ import annotations

import asyncio
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable


class LayoutPatchError(Exception):
    """Raised when the layout does not have the shape a patch expects."""

    def __init__(self, patch: str, anchor: str) -> None:
        self.patch = patch
        self.anchor = anchor
        super().__init__(
            f"Layout patch '{patch}' could not find {anchor} in the root layout"
        )


@dataclass(frozen=True)
class LayoutPatch:
    """One guarded regex substitution."""

    name: str
    guard: str
    pattern: re.Pattern[str]
    anchor: str
    replace: Callable[[re.Match[str]], str]

    def apply(self, text: str) -> str:
        if self.guard in text:
            return text
        patched, count = self.pattern.subn(self.replace, text, count=1)
        if count == 0:
            raise LayoutPatchError(self.name, self.anchor)
        return patched


# ---------------------------------------------------------------------------
# Replacements
# ---------------------------------------------------------------------------

_IMPORTS = (
    'import "./globals.css";\n'
    'import { inter } from "@/lib/fonts";\n'
    'import { ThemeProvider } from "@/components/theme-provider";\n'
    'import { Header } from "@/components/header";\n'
    'import { Footer } from "@/components/footer";'
)

_HTML_TAG = '<html lang="en" suppressHydrationWarning className={`${inter.variable} antialiased`}>'


def _replace_imports(match: re.Match[str]) -> str:
    return _IMPORTS


def _wrap_body(match: re.Match[str]) -> str:
    opening, content, closing = match.group(1), match.group(2), match.group(3)
    return (
        f"{opening}\n"
        "          <ThemeProvider\n"
        '            attribute="class"\n'
        '            defaultTheme="system"\n'
        "            enableSystem\n"
        "            disableTransitionOnChange\n"
        "          >\n"
        '            <div className="min-h-screen flex flex-col">\n'
        "              <Header />\n"
        '              <main className="flex-1 bg-white dark:bg-black">\n'
        f"                {content.strip()}\n"
        "              </main>\n"
        "              <Footer />\n"
        "            </div>\n"
        f"          </ThemeProvider>{closing}"
    )


def _replace_html(match: re.Match[str]) -> str:
    return _HTML_TAG


LAYOUT_PATCHES: tuple[LayoutPatch, ...] = (
    LayoutPatch(
        name="imports",
        guard='from "@/components/theme-provider"',
        pattern=re.compile(r'import "\./globals\.css";'),
        anchor='the globals.css import',
        replace=_replace_imports,
    ),
    LayoutPatch(
        name="body",
        guard="<ThemeProvider",
        pattern=re.compile(r"(<body[^>]*>)([\s\S]*?)(</body>)"),
        anchor="a <body>...</body> element",
        replace=_wrap_body,
    ),
    LayoutPatch(
        name="html",
        guard="suppressHydrationWarning",
        pattern=re.compile(r"<html[^>]*>"),
        anchor="an opening <html> tag",
        replace=_replace_html,
    ),
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


class LayoutPatcher:
    """Applies the guarded layout patches in order."""

    def __init__(self, patches: tuple[LayoutPatch, ...] = LAYOUT_PATCHES) -> None:
        self.patches = patches

    def is_patched(self, text: str) -> bool:
        """Return ``True`` if every guard marker is already present."""
        return all(p.guard in text for p in self.patches)

    def patch(self, text: str) -> str:
        """Return *text* with every pending patch applied.

        Raises:
            LayoutPatchError: A patch whose guard is missing found no anchor.
        """
        for layout_patch in self.patches:
            text = layout_patch.apply(text)
        return text

    async def apply(self, path: str | Path) -> bool:
        """Patch the layout file at *path* in place.

        Returns:
            ``True`` if the file changed, ``False`` if it was already patched.

        Raises:
            FileNotFoundError: The layout file does not exist.
            LayoutPatchError: The layout does not have the expected shape.
        """
        layout_path = Path(path)
        original = await asyncio.to_thread(layout_path.read_text, encoding="utf-8")
        patched = self.patch(original)
        if patched == original:
            return False
        await asyncio.to_thread(layout_path.write_text, patched, encoding="utf-8")
        return True
