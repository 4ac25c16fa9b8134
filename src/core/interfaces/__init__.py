"""Contratos que el Core exige a los backends de PDF e imagen.

El batch y el motor de colocación solo hablan con estos Protocol
(`pdf_backend`): abrir un documento, pedir la capa de una página y cargar
la imagen del stamp. pypdf, reportlab y Pillow quedan en `adapters/`.
"""
