"""`python -m main` desde `src/`: misma CLI que el script `pdfstamp`."""

from __future__ import annotations

import sys

# Rutas con acentos en los logs: la consola de Windows no es UTF-8 por defecto.
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
