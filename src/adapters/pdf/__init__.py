"""Backends PDF concretos.

Cada módulo implementa `core.interfaces.pdf_backend.PdfBackend`.
"""

from adapters.pdf.pypdf_backend import PypdfBackend

__all__ = ["PypdfBackend"]
