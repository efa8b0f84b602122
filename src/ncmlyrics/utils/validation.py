"""Validation utilities."""

import logging
from pathlib import Path
from typing import Iterable, List

from ..exceptions import ValidationError

logger = logging.getLogger(__name__)


def validate_roots(paths: Iterable[str]) -> List[Path]:
    """Keep the paths that exist; fail if none do."""
    roots: List[Path] = []
    for raw in paths:
        if not raw:
            continue
        path = Path(raw).expanduser()
        if path.exists():
            roots.append(path)
        else:
            logger.warning(f"Path does not exist, skipping: {raw}")

    if not roots:
        raise ValidationError("No valid file or directory path given")
    return roots
