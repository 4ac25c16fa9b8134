"""CLI de pdfstamp (Typer).

Ejemplos:

    pdfstamp -u "https://example.org" -i stamp.png -l 44.5,22.3 some/dir
    pdfstamp -i stamp.png -l 1,44.5,22.3,-1,22.2,22.2 some.pdf
    pdfstamp -i stamp.png -l 1,44.5,22.3 -l 3,22.2,22.2 -r some/dir
    pdfstamp -t 36,36,Received_2026-10-19 -p -1 some.pdf

Convención: en `-t X,Y,TEXT` el carácter `_` se escribe como espacio, ya
que la línea de comandos separa argumentos por espacios.

Los errores de argumentos imprimen el diagnóstico y el uso por stderr y
terminan con estado 0; los fallos por archivo no afectan al estado.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Sequence

import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.image_loader import PillowImageLoader
from adapters.pdf import PypdfBackend
from cli.ui_components import print_summary
from core.config import AppSettings
from core.domain.models import NamingPolicy, RunConfig, StampImage
from core.errors import ImageLoadError, PageRangeError, StampSpecError
from core.interfaces.pdf_backend import ImageLoader
from core.pages import build_page_set
from core.services.stamp_pipeline import run_batch
from core.stamp_spec import parse_locations, parse_text_stamp

PROG_NAME = "pdfstamp"

app = typer.Typer(
    add_completion=False,
    rich_markup_mode=None,
    help="Stamp an image (and optional link) onto pages of PDF files.",
)

_err_console = Console(stderr=True)

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_err_console, show_path=False, markup=False)],
    )
    logging.getLogger().setLevel(logging.INFO if verbose else logging.WARNING)


@app.command()
def stamp(
    paths: list[Path] = typer.Argument(
        ...,
        metavar="<PDF-FILEs> | <DIR>",
        help="Input PDF files and/or directories.",
        show_default=False,
    ),
    locations: list[str] = typer.Option(
        [],
        "-l",
        "--location",
        metavar="X,Y | PAGE,X,Y[,PAGE,X,Y...]",
        help="Location on page to apply the stamp. Repeatable.",
        show_default=False,
    ),
    pages: list[int] = typer.Option(
        [],
        "-p",
        "--page",
        metavar="N",
        help="Page number to stamp. -1 is the last page. Repeatable.",
        show_default=False,
    ),
    page_ranges: list[str] = typer.Option(
        [],
        "-pp",
        "--page-range",
        metavar="N-N",
        help="Page range to stamp, inclusive of start and end. e.g. 2-5.",
        show_default=False,
    ),
    text_stamps: list[str] = typer.Option(
        [],
        "-t",
        "--text",
        metavar="X,Y,TEXT",
        help="Text stamp; '_' in TEXT stands for a space. Repeatable.",
        show_default=False,
    ),
    image: Path | None = typer.Option(
        None,
        "-i",
        "--image",
        metavar="FILE",
        help="Image file containing the stamp. Required with -l.",
    ),
    url: str = typer.Option("", "-u", "--url", metavar="URL", help="Target URL of the stamp."),
    extension: str | None = typer.Option(
        None,
        "-e",
        "--extension",
        metavar="EXT",
        help="Suffix added to the output filename. Defaults to 'stamped'.",
    ),
    output_dir: Path | None = typer.Option(
        None,
        "-o",
        "--output-dir",
        metavar="DIR",
        file_okay=False,
        help="Output directory. Defaults to alongside each input.",
    ),
    naming: NamingPolicy | None = typer.Option(
        None,
        "--naming",
        case_sensitive=False,
        help="Output naming: 'suffix' (report_stamped.pdf) or 'append' (report.pdf.out).",
    ),
    dpi: float | None = typer.Option(
        None, "-d", "--dpi", min=1, metavar="N", help="Target DPI. Defaults to 300."
    ),
    recursive: bool = typer.Option(False, "-r", "--recursive", help="Descend recursively into directories."),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose output."),
) -> None:
    """Stamp PDF files, writing stamped copies next to them or into -o DIR."""

    _configure_logging(verbose)
    settings = AppSettings()

    if not locations and not text_stamps:
        raise typer.BadParameter(
            "Must specify a location (-l) or a text stamp (-t).", param_hint="'-l' / '--location'"
        )
    if locations and image is None:
        raise typer.BadParameter("An image file is required with -l.", param_hint="'-i' / '--image'")

    try:
        specs = parse_locations(locations)
    except StampSpecError as exc:
        raise typer.BadParameter(str(exc), param_hint="'-l' / '--location'") from exc
    try:
        texts = [parse_text_stamp(value) for value in text_stamps]
    except StampSpecError as exc:
        raise typer.BadParameter(str(exc), param_hint="'-t' / '--text'") from exc
    try:
        page_set = build_page_set(pages, page_ranges)
    except PageRangeError as exc:
        raise typer.BadParameter(str(exc), param_hint="'-pp' / '--page-range'") from exc

    config = RunConfig(
        image_path=image,
        url=url,
        target_dpi=dpi if dpi is not None else settings.target_dpi,
        output_suffix=extension or settings.output_suffix,
        append_suffix=settings.append_suffix,
        output_dir=output_dir,
        naming=naming or settings.naming_policy,
        recursive=recursive,
        verbose=verbose,
        pages=page_set,
        locations=tuple(specs),
        text_stamps=tuple(texts),
        text_font=settings.text_font,
        text_font_size=settings.text_font_size,
    )

    loaded: StampImage | None = None
    if config.image_path is not None:
        loader: ImageLoader = PillowImageLoader()
        try:
            loaded = loader.load(config.image_path)
        except ImageLoadError as exc:
            logger.error("Couldn't open image file because of: %s", exc)
            raise typer.Exit(code=0) from exc

    result = run_batch(paths, config=config, backend=PypdfBackend(), image=loaded)

    if verbose:
        print_summary(_err_console, result)


# Typer puede traer su propia copia de click: las clases de error se toman
# de la jerarquía de `typer.BadParameter`, no del paquete `click`.
_ClickException = next(
    cls for cls in typer.BadParameter.__mro__ if cls.__name__ == "ClickException"
)


def _print_usage(command, *, full: bool) -> None:
    ctx = command.context_class(command, info_name=PROG_NAME)
    if full:
        typer.echo(command.get_help(ctx), err=True)
        return
    typer.echo(command.get_usage(ctx), err=True)
    typer.echo(f"Try '{PROG_NAME} --help' for help.", err=True)


def run(argv: Sequence[str] | None = None) -> None:
    """Entry point del script `pdfstamp`."""

    args = list(sys.argv[1:] if argv is None else argv)
    command = typer.main.get_command(app)

    if not args:
        _print_usage(command, full=True)
        raise SystemExit(0)

    try:
        command.main(args=args, prog_name=PROG_NAME, standalone_mode=False)
    except _ClickException as exc:
        typer.echo(f"Error: {exc.format_message()}", err=True)
        _print_usage(command, full=False)
        raise SystemExit(0) from exc
    except typer.Abort:
        raise SystemExit(0) from None
