# valid_path.py
from __future__ import annotations

from os import fspath
from pathlib import Path
from typing import Callable, Optional, Union

Predicate = Callable[[Path], bool]


class ValidPath:
    """Path checks composed from simple flags. Failures return ``None``."""

    @staticmethod
    def _to_path(pathlike: Union[str, Path]) -> Optional[Path]:
        try:
            return pathlike if isinstance(pathlike, Path) else Path(fspath(pathlike))
        except TypeError:
            return None

    @staticmethod
    def _normalize(p: Path) -> Path:
        """Expand '~' and resolve to absolute path (non-strict)."""
        return p.expanduser().resolve()

    exists: Predicate  = staticmethod(lambda p: p.exists())
    is_file: Predicate = staticmethod(lambda p: p.is_file())
    is_dir: Predicate  = staticmethod(lambda p: p.is_dir())

    @staticmethod
    def has_ext(ext: str) -> Predicate:
        want = (ext if ext.startswith(".") else "." + ext).lower()
        return lambda p: p.suffix.lower() == want

    @classmethod
    def check(
        cls,
        pathlike: Union[str, Path],
        *,
        must_exist: bool = False,
        require_file: bool = False,
        require_dir: bool = False,
        has_ext: Optional[str] = None,
        normalize: bool = False,
    ) -> Optional[Path]:
        """
        Validate and optionally normalize a path-like input.

        - must_exist: require that the path exists
        - require_file / require_dir: require a file or a directory
        - has_ext: '.pdf' or 'pdf'
        - normalize: expand ~ and resolve() (non-strict)
        """
        p = cls._to_path(pathlike)
        if p is None:
            return None
        if normalize:
            p = cls._normalize(p)

        preds: list[Predicate] = []
        if must_exist:
            preds.append(cls.exists)
        if require_file:
            preds.append(cls.is_file)
        if require_dir:
            preds.append(cls.is_dir)
        if has_ext is not None:
            preds.append(cls.has_ext(has_ext))

        return p if all(pred(p) for pred in preds) else None

    @classmethod
    def output_dir(cls, pathlike: Union[str, Path]) -> Optional[Path]:
        """An existing directory, or a path that can become one."""
        p = cls.check(pathlike, normalize=True)
        if p is None or (p.exists() and not p.is_dir()):
            return None
        p.mkdir(parents=True, exist_ok=True)
        return p
