"""Orquestación del batch de stamping.

Este módulo concentra el flujo por archivo: expandir rutas de entrada,
detectar PDFs por número mágico, calcular el nombre de salida y aplicar
los stamps. La CLI solo construye `RunConfig` y delega aquí, así que los
efectos visibles (tablas, colores) quedan fuera de la lógica del core.

Aislamiento de fallos: cualquier error en un archivo se registra con la
ruta y la causa, y el batch continúa con el siguiente.
"""

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from typing import Callable, Iterable, Iterator

from core.domain.models import (
    BatchResult,
    FileOutcome,
    FileResult,
    NamingPolicy,
    RunConfig,
    StampImage,
)
from core.interfaces.pdf_backend import PdfBackend
from core.pages import resolve_page
from core.placement import stamp_image, stamp_text

logger = logging.getLogger(__name__)

PDF_MAGIC = b"%PDF"


def iter_input_paths(
    paths: Iterable[Path],
    *,
    recursive: bool = False,
    on_error: Callable[[Path, OSError], None] | None = None,
) -> Iterator[Path]:
    """Expande archivos y directorios de entrada.

    Los subdirectorios solo se recorren con `recursive`; si no, se ignoran
    sin diagnóstico. Las rutas que no son directorio se devuelven tal cual
    (si no existen, el sniffing reportará el error).

    Un directorio que no se puede listar se registra y se salta; `on_error`
    recibe la ruta y la causa para que el llamador lo cuente como fallo.
    """

    for path in paths:
        if _is_dir(path):
            yield from _iter_directory(path, recursive=recursive, on_error=on_error)
        else:
            yield path


def _is_dir(path: Path) -> bool:
    # Si no se puede consultar, se trata como archivo y el sniffing reporta el error.
    try:
        return path.is_dir()
    except OSError:
        return False


def _iter_directory(
    directory: Path,
    *,
    recursive: bool,
    on_error: Callable[[Path, OSError], None] | None,
) -> Iterator[Path]:
    try:
        entries = sorted(directory.iterdir())
    except OSError as exc:
        logger.error("Couldn't list %s because of: %s", directory, exc)
        if on_error is not None:
            on_error(directory, exc)
        return

    for entry in entries:
        if _is_dir(entry):
            if recursive:
                yield from _iter_directory(entry, recursive=recursive, on_error=on_error)
            continue
        yield entry


def is_pdf_file(path: Path) -> bool:
    """True si los 4 primeros bytes son `%PDF`. Propaga `OSError`."""

    with path.open("rb") as fh:
        return fh.read(len(PDF_MAGIC)) == PDF_MAGIC


def output_path_for(input_path: Path, config: RunConfig) -> Path:
    """Ruta de salida según `config.naming`.

    - suffix: `report.pdf` -> `report_stamped.pdf` (el sufijo va tras el
      primer segmento del nombre), en `output_dir` o junto a la entrada.
    - append: con `output_dir`, el mismo nombre dentro de ese directorio;
      sin él, `report.pdf.out` junto a la entrada.
    """

    name = input_path.name
    parent = config.output_dir or input_path.absolute().parent

    if config.naming is NamingPolicy.APPEND:
        if config.output_dir is not None:
            return config.output_dir / name
        return parent / f"{name}.{config.append_suffix}"

    head, sep, rest = name.partition(".")
    return parent / f"{head}_{config.output_suffix}{sep}{rest}"


def _close_quietly(resource) -> None:
    if resource is None:
        return
    try:
        resource.close()
    except Exception:
        # Best-effort: un fallo al liberar no debe tapar el error original.
        pass


def stamp_file(
    input_path: Path,
    output_path: Path,
    *,
    config: RunConfig,
    backend: PdfBackend,
    image: StampImage | None = None,
) -> None:
    """Aplica todos los stamps de `config` a un PDF y escribe la salida.

    La salida se escribe solo si la finalización termina bien, así un fallo
    nunca deja un archivo a medias.
    """

    sink = BytesIO()
    document = None
    stamper = None
    try:
        document = backend.open_document(input_path.read_bytes())
        stamper = backend.open_stamper(document, sink)
        page_count = document.page_count

        placements = config.placements()
        if placements and image is None:
            raise ValueError("an image is required for location stamps")
        for placement in placements:
            stamp_image(
                stamper,
                image,
                page=resolve_page(placement.page, page_count),
                x=placement.x,
                y=placement.y,
                target_dpi=config.target_dpi,
                url=config.url,
            )

        for page in config.pages:
            for text in config.text_stamps:
                stamp_text(
                    stamper,
                    text,
                    page=resolve_page(page, page_count),
                    font=config.text_font,
                    size=config.text_font_size,
                )

        stamper.close()
    finally:
        _close_quietly(stamper)
        _close_quietly(document)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(sink.getvalue())


def process_path(
    input_path: Path,
    *,
    config: RunConfig,
    backend: PdfBackend,
    image: StampImage | None = None,
) -> FileResult:
    """Procesa un único candidato sin propagar excepciones."""

    try:
        if not is_pdf_file(input_path):
            if config.verbose:
                logger.info("Skipping %s because it doesn't look like a PDF file.", input_path)
            return FileResult(input_path=input_path, outcome=FileOutcome.SKIPPED)
    except OSError as exc:
        logger.error("Couldn't determine if %s is a PDF because of: %s", input_path, exc)
        return FileResult(input_path=input_path, outcome=FileOutcome.FAILED, detail=str(exc))

    output_path = output_path_for(input_path, config)
    try:
        stamp_file(input_path, output_path, config=config, backend=backend, image=image)
    except Exception as exc:
        logger.error("Failed on %s because of: %s", input_path, exc)
        return FileResult(input_path=input_path, outcome=FileOutcome.FAILED, detail=str(exc))

    logger.info("Stamped %s -> %s", input_path, output_path)
    return FileResult(input_path=input_path, outcome=FileOutcome.STAMPED, output_path=output_path)


def run_batch(
    paths: Iterable[Path],
    *,
    config: RunConfig,
    backend: PdfBackend,
    image: StampImage | None = None,
) -> BatchResult:
    """Procesa secuencialmente todas las entradas.

    Las rutas se materializan antes de empezar para que las salidas escritas
    dentro de los directorios de entrada no se vuelvan a procesar. Los
    directorios que no se pueden listar quedan como FAILED al principio.
    """

    result = BatchResult()

    def _unlistable(directory: Path, exc: OSError) -> None:
        result.files.append(
            FileResult(input_path=directory, outcome=FileOutcome.FAILED, detail=str(exc))
        )

    candidates = list(
        iter_input_paths(paths, recursive=config.recursive, on_error=_unlistable)
    )
    for path in candidates:
        result.files.append(
            process_path(path, config=config, backend=backend, image=image)
        )
    return result
