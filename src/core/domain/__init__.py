"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras y estrictas (Pydantic v2).
- El dominio no conoce pypdf, reportlab ni la CLI: solo conceptos del problema.
"""
