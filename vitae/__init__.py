"""
VITAE - Visual Inline Templates for Accurate Export

A résumé rendering system that maps a normalized résumé data model through
pluggable visual templates and exports print-faithful PDFs.

Architecture:
- Templating Context: Résumé data model, template registry, section rendering and composition
- Rendering Context: PDF export (server-rendered and capture-based strategies)
- Delivery Context: HTTP interface for preview and export
"""

__version__ = "0.1.0"
