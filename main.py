"""Lanza `pdfstamp` desde un checkout sin instalar el paquete.

    python main.py -i stamp.png -l 10,20 report.pdf

Añade `src/` a `sys.path` para que se resuelvan `cli`, `core` y `adapters`.
"""

from __future__ import annotations

import sys
from pathlib import Path


def main() -> None:
    project_root = Path(__file__).resolve().parent
    src = project_root / "src"
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))

    from cli.main import run  # noqa: PLC0415

    run()


if __name__ == "__main__":
    main()
