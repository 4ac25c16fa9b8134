"""Errores del dominio.

Dos niveles:
- Fatales (arranque): sintaxis de stamps, rangos de páginas, imagen ilegible.
  La CLI los convierte en diagnóstico + uso y termina sin procesar archivos.
- Por archivo: `DocumentError` y cualquier fallo de I/O; el batch los registra
  y continúa con el siguiente archivo.
"""

from __future__ import annotations


class PdfStampError(Exception):
    """Base de los errores propios de pdfstamp."""


class StampSpecError(PdfStampError):
    """Tupla de stamp mal formada (`-l` / `-t`)."""


class PageRangeError(PdfStampError):
    """Rango de páginas mal formado (`-pp`)."""


class ImageLoadError(PdfStampError):
    """La imagen del stamp no se pudo abrir o decodificar."""


class DocumentError(PdfStampError):
    """Error acotado a un único documento (p.ej. página inexistente)."""
