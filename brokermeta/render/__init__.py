"""Rendering of cluster metadata as text tables."""

from brokermeta.render.brokers import render_brokers
from brokermeta.render.sections import SectionPrinter, SectionSelection, select_sections
from brokermeta.render.topics import render_topic_details, render_topic_summary

__all__ = [
    # Sections
    "SectionPrinter",
    "SectionSelection",
    "select_sections",
    # Renderers
    "render_brokers",
    "render_topic_details",
    "render_topic_summary",
]
