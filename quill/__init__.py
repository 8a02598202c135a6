"""
QUILL - Quick Unified Interactive Layout for Letters of qualification

An in-memory resume editor core: a live document model, three visual
templates projected from it, and a PDF export pipeline.

Architecture:
- Editing Context: Document model, section reordering, photo handles
- Templating Context: Template projection, content scaling, HTML rendering
- Rendering Context: View state, preview surface, PDF export pipeline
"""

__version__ = "0.1.0"
