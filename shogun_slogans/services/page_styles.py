"""Per-page accumulator for dynamically generated CSS."""
from __future__ import annotations

from typing import Dict


class PageStyleCollector:
    """Collects CSS by unique id while a page renders, then emits one <style> block."""

    def __init__(self) -> None:
        self._css: Dict[str, str] = {}

    def add(self, unique_id: str, css: str) -> None:
        if css:
            self._css[unique_id] = css

    def __len__(self) -> int:
        return len(self._css)

    def render(self) -> str:
        """Return the style block and reset, so a second call emits nothing."""
        if not self._css:
            return ""
        lines = ['<style id="shogun-slogans-dynamic-css">', "/* Shogun Slogans Dynamic CSS */"]
        for unique_id, css in self._css.items():
            lines.append(f"/* Animation ID: {unique_id} */")
            lines.append(css)
        lines.append("</style>")
        self._css = {}
        return "\n".join(lines) + "\n"
