"""
Core package - DANFE assembly, rendering and batch processing.
"""
from .assembler import assemble
from .nfe_xml import parse, NFeXml
from .renderer import Danfe, render_html
from .orchestrator import ProcessingOrchestrator

__all__ = [
    "assemble",
    "parse",
    "NFeXml",
    "Danfe",
    "render_html",
    "ProcessingOrchestrator",
]
