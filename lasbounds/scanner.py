# lasbounds/scanner.py

from __future__ import annotations

from pathlib import Path
from typing import List, Union

from .config import LAS_SUFFIX
from .errors import LasBoundsIOError


def list_las(directory: Union[str, Path], suffix: str = LAS_SUFFIX) -> List[Path]:
    """
    Finner alle filer direkte i 'directory' med endelse 'suffix'.

    - Ingen rekursjon, undermapper tas ikke med.
    - Endelsen sammenlignes nøyaktig (".LAS" matcher ikke ".las").
    - Oppføringer som ikke kan leses (rettigheter, slettet underveis)
      hoppes over.
    - Resultatet er sortert, uavhengig av rekkefølgen OS-et gir.
    """
    directory = Path(directory)

    try:
        entries = list(directory.iterdir())
    except OSError as e:
        raise LasBoundsIOError(
            f"Kunne ikke lese mappe: {e.strerror or e}", stage="scan", path=directory
        ) from e

    files = []
    for path in entries:
        # name.endswith, ikke path.suffix, så flerleddede endelser (".las.gz") virker
        if len(path.name) <= len(suffix) or not path.name.endswith(suffix):
            continue
        try:
            if not path.is_file():
                continue
        except OSError:
            continue
        files.append(path)

    return sorted(files)
