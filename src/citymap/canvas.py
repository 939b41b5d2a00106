"""
SVG drawing surface for one rendered frame.

A Canvas collects svg.py elements in paint order. The renderer clears it at
the start of every redraw, so a canvas only ever holds a single frame.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import List

import svg

from .geometry import Number

ET.register_namespace("", "http://www.w3.org/2000/svg")

__all__ = ["Canvas"]


class Canvas:
    """Fixed-size command buffer backed by an svg.SVG root."""

    def __init__(self, width: Number, height: Number) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}.")
        self.width = width
        self.height = height
        self.elements: List[svg.Element] = []

    def clear(self) -> None:
        self.elements = []

    def add(self, element: svg.Element) -> None:
        self.elements.append(element)

    def to_svg_element(self) -> svg.SVG:
        return svg.SVG(
            width=self.width,
            height=self.height,
            viewBox=svg.ViewBoxSpec(0, 0, self.width, self.height),
            elements=list(self.elements),
        )

    # ------------------------------------------------------------------ #
    # Serialization
    # ------------------------------------------------------------------ #
    def _indent_style_blocks(
        self, elem: ET.Element, *, indent: str = "  ", level: int = 0
    ) -> None:
        """Start CSS on a new line, indented one level below <style>."""
        tag = elem.tag.rsplit("}", 1)[-1]
        if tag == "style":
            css_text = (elem.text or "").strip()
            if css_text:
                child_prefix = indent * (level + 1)
                lines = [f"{child_prefix}{line}" if line else "" for line in css_text.splitlines()]
                elem.text = "\n" + "\n".join(lines) + "\n" + indent * level

        for child in list(elem):
            self._indent_style_blocks(child, indent=indent, level=level + 1)

    def _pretty_xml(self, xml_text: str, *, indent: str = "  ") -> str:
        try:
            root = ET.fromstring(xml_text)
        except ET.ParseError:
            return xml_text
        ET.indent(root, space=indent)
        self._indent_style_blocks(root, indent=indent)
        return ET.tostring(root, encoding="unicode", short_empty_elements=True) + "\n"

    def to_string(self, *, pretty: bool = True, indent: str = "  ") -> str:
        """Return the frame as SVG markup."""
        xml_text = self.to_svg_element().as_str()
        if not pretty:
            return xml_text
        return self._pretty_xml(xml_text, indent=indent)

    def write(self, path: str | Path, *, pretty: bool = True, indent: str = "  ") -> None:
        Path(path).write_text(
            self.to_string(pretty=pretty, indent=indent),
            encoding="utf-8",
        )
