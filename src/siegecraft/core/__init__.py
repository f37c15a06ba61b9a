"""Core generation pipeline for siegecraft.

This module contains the pipeline stages:

- Parsing (template text to a grid of cells)
- Topology extraction (anchors, segments, outlines)
- Resizing (topology-preserving layout at a new size)
- Geometry emission (vector outlines, SVG)

Every stage is a pure function of an immutable input, safe to run in
worker processes. Batch orchestration lives in ``siegecraft.core.processor``.

Key functions:
- parse_template: Parse template text into a Grid
- extract_topology: Build a Template from a Grid
- resize: Lay a Template out at a new size
- diffuse: Error-diffusion split used by the resizer
- to_svg: Render outlines as an SVG document

Key classes:
- TopologyExtractor: Builds templates from grids
- TemplateResizer: Resizes templates
- GeometryEmitter: Emits vector outlines
"""

from siegecraft.core.emitter import GeometryEmitter, to_svg
from siegecraft.core.extractor import TopologyExtractor, extract_topology
from siegecraft.core.parser import classify, disambiguate, parse_template, scan
from siegecraft.core.resizer import TemplateResizer, diffuse, plan_axis, resize

__all__ = [
    # Emitter
    "GeometryEmitter",
    # Resizer
    "TemplateResizer",
    # Extractor
    "TopologyExtractor",
    # Functions
    "classify",
    "diffuse",
    "disambiguate",
    "extract_topology",
    "parse_template",
    "plan_axis",
    "resize",
    "scan",
    "to_svg",
]
