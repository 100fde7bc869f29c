"""Output file helpers"""

import shutil
from pathlib import Path
from typing import Iterable

from mdsite.errors import ConfigurationError


def write_text(path: Path, text: str) -> Path:
    """Write text as UTF-8, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def check_clean_target(output_dir: Path, protected: Iterable[Path] = ()) -> None:
    """Refuse to clean the working directory, a protected path, or any parent of one."""
    output_resolved = output_dir.resolve()
    for path in [Path.cwd(), *protected]:
        if path.resolve().is_relative_to(output_resolved):
            raise ConfigurationError(f"Refusing to clean {output_dir}: it contains {path}")


def clean_dir(path: Path, protected: Iterable[Path] = ()) -> None:
    """Remove everything inside path, keeping the directory itself."""
    if not path.exists():
        return
    check_clean_target(path, protected)
    for item in path.iterdir():
        if item.is_dir() and not item.is_symlink():
            shutil.rmtree(item)
        else:
            item.unlink()
