"""Resolución de páginas.

- `-p N` son páginas literales (1-based); negativas cuentan desde el final.
- `-pp A-B` se expande a A..B inclusive antes de resolver.
- Si tras unir ambas listas no queda nada, se usa la página 1.
"""

from __future__ import annotations

from typing import Iterable

from core.errors import PageRangeError

DEFAULT_PAGE = 1


def expand_page_range(value: str) -> list[int]:
    """Expande `A-B` a `[A, A+1, ..., B]`.

    Un rango invertido (A > B) no produce páginas.
    """

    parts = value.strip().split("-")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise PageRangeError("Invalid format for page range. Should be e.g. 5-10 .")
    try:
        start, end = int(parts[0]), int(parts[1])
    except ValueError:
        raise PageRangeError("Invalid format for page range. Should be e.g. 5-10 .") from None
    return list(range(start, end + 1))


def build_page_set(pages: Iterable[int] = (), ranges: Iterable[str] = ()) -> tuple[int, ...]:
    """Une páginas explícitas y rangos expandidos, en ese orden."""

    out = list(pages)
    for value in ranges:
        out.extend(expand_page_range(value))
    if not out:
        out.append(DEFAULT_PAGE)
    return tuple(out)


def resolve_page(requested: int, page_count: int) -> int:
    """Convierte una página pedida en una página 1-based concreta.

    El resultado puede quedar fuera de [1, page_count]; quien pida el lienzo
    de esa página recibe None y reporta el error para ese documento.
    """

    if requested < 0:
        return page_count + 1 + requested
    return requested
