"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de PDF o imagen.
- Los modelos son inmutables (`frozen`): se crean una vez al parsear la CLI y
  se consumen en cada archivo de salida.

Nota:
- Estos modelos describen *qué* se estampa y *dónde*, no *cómo* se dibuja.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class NamingPolicy(str, Enum):
    """Esquema de nombres para los archivos de salida."""

    SUFFIX = "suffix"
    APPEND = "append"


class StampSpec(BaseModel):
    """Una petición de colocación del stamp.

    `page` es None cuando la ubicación se comparte entre todas las páginas
    del PageSet (`-l X,Y`); un entero negativo cuenta desde la última página.
    """

    model_config = ConfigDict(frozen=True)

    page: int | None = Field(
        default=None,
        description="Página 1-based; negativa = desde el final; None = PageSet.",
    )
    x: float = Field(..., description="Coordenada X en puntos PDF (origen abajo-izquierda).")
    y: float = Field(..., description="Coordenada Y en puntos PDF (origen abajo-izquierda).")


class TextStamp(BaseModel):
    """Stamp de texto (`-t X,Y,TEXT`), dibujado en cada página del PageSet."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    text: str = Field(..., min_length=1)


class Placement(BaseModel):
    """Unidad de trabajo: una imagen en una página y un ancla."""

    model_config = ConfigDict(frozen=True)

    page: int
    x: float
    y: float


class StampImage(BaseModel):
    """Imagen del stamp ya decodificada.

    Se carga una sola vez y se reutiliza en modo lectura para todos los
    archivos y páginas. `handle` es el objeto opaco del adaptador de imagen.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    path: Path
    width: int = Field(..., gt=0, description="Ancho en píxeles.")
    height: int = Field(..., gt=0, description="Alto en píxeles.")
    dpi_x: float = Field(default=0.0, ge=0.0, description="DPI horizontal embebido (0 = desconocido).")
    dpi_y: float = Field(default=0.0, ge=0.0, description="DPI vertical embebido (0 = desconocido).")
    handle: Any = Field(default=None, repr=False, exclude=True)


class RunConfig(BaseModel):
    """Configuración inmutable de una ejecución, construida por la CLI."""

    model_config = ConfigDict(frozen=True)

    image_path: Path | None = None
    url: str = Field(default="", description="URL del link; vacío = sin link.")
    target_dpi: float = Field(default=300.0, gt=0)
    output_suffix: str = Field(default="stamped", min_length=1)
    append_suffix: str = Field(default="out", min_length=1)
    output_dir: Path | None = None
    naming: NamingPolicy = NamingPolicy.SUFFIX
    recursive: bool = False
    verbose: bool = False
    pages: tuple[int, ...] = Field(default=(1,))
    locations: tuple[StampSpec, ...] = ()
    text_stamps: tuple[TextStamp, ...] = ()
    text_font: str = "Helvetica"
    text_font_size: float = Field(default=12.0, gt=0)

    def placements(self) -> list[Placement]:
        """Une las dos variantes de `-l` en una lista de (page, x, y).

        Las ubicaciones sin página se combinan con cada página del PageSet;
        las ubicaciones con página se añaden una vez, en orden.
        """

        shared = [spec for spec in self.locations if spec.page is None]
        out = [
            Placement(page=page, x=spec.x, y=spec.y)
            for page in self.pages
            for spec in shared
        ]
        out.extend(
            Placement(page=spec.page, x=spec.x, y=spec.y)
            for spec in self.locations
            if spec.page is not None
        )
        return out


class FileOutcome(str, Enum):
    STAMPED = "stamped"
    SKIPPED = "skipped"
    FAILED = "failed"


class FileResult(BaseModel):
    """Resultado del procesamiento de un archivo de entrada."""

    input_path: Path
    outcome: FileOutcome
    output_path: Path | None = None
    detail: str | None = None


class BatchResult(BaseModel):
    """Agregado de una ejecución completa del batch."""

    files: list[FileResult] = Field(default_factory=list)

    def count(self, outcome: FileOutcome) -> int:
        return sum(1 for f in self.files if f.outcome is outcome)

