"""
Output writers for the WKT export pipeline.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Union

import pandas as pd

from .config import WriterOptions
from .geometry import Geometry
from .writer import write_wkt

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def save_rows_to_csv(rows: Iterable[Dict[str, Any]], path: PathLike) -> Path:
    """
    Save processed feature rows as a CSV file.

    Parameters:
        rows: Row dictionaries as produced by process_feature.
        path: Destination file; parent directories are created.

    Returns:
        Path: The written file.
    """
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    df = pd.DataFrame(list(rows))
    df.to_csv(output_path, index=False, encoding="utf-8")
    logger.info(f"{len(df)} rows saved to {output_path}")
    return output_path


def write_wkt_lines(
    geometries: Iterable[Geometry],
    path: PathLike,
    options: Optional[WriterOptions] = None,
) -> int:
    """
    Stream one WKT string per line into ``path``.

    Each geometry is written straight to a temporary file next to ``path``, so
    the whole output is never held in memory. The temporary file replaces
    ``path`` only once every geometry was written; on error it is removed and
    ``path`` is left untouched.

    Returns:
        int: Number of geometries written.
    """
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    temp_file = tempfile.NamedTemporaryFile(
        "w",
        delete=False,
        dir=output_path.parent,
        prefix=f".{output_path.name}.",
        suffix=".tmp",
        encoding="utf-8",
        newline="\n",
    )
    count = 0
    try:
        with temp_file as f:
            for geometry in geometries:
                write_wkt(geometry, f, options)
                f.write("\n")
                count += 1
        os.replace(temp_file.name, output_path)
    except BaseException:
        os.remove(temp_file.name)
        raise

    logger.info(f"{count} geometries written to {output_path}")
    return count
