# lasbounds/errors.py

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class LasBoundsError(Exception):
    """
    Felles baseklasse for alle feil som stopper en kjøring.

    kind:  kategori som skrives ut av CLI-en (IOError, FormatError, ...)
    stage: hvor i løpet feilen oppsto: "setup", "scan", "read" eller "write"
    path:  filen/mappen feilen gjelder, eller None
    """

    kind = "LasBoundsError"

    def __init__(
        self,
        message: str,
        stage: str,
        path: Optional[Union[str, Path]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.stage = stage
        self.path = Path(path) if path is not None else None

    def __str__(self) -> str:
        if self.path is None:
            return f"[{self.stage}] {self.message}"
        return f"[{self.stage}] {self.path}: {self.message}"


class LasBoundsIOError(LasBoundsError):
    kind = "IOError"


class LasFormatError(LasBoundsError):
    kind = "FormatError"


class OutputDriverError(LasBoundsError):
    kind = "OutputDriverError"


class ValidationError(LasBoundsError):
    kind = "ValidationError"
