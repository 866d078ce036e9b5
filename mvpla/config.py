"""
Configuration for the espresso solver backends.

:class:`SolverConfig` is a small dataclass snapshot describing which
backend to use and where to find it. Build it directly or from the
environment and pass it to :func:`mvpla.solver.make_solver`; avoid
mutating it mid-run.

Examples
--------
>>> from mvpla.config import SolverConfig
>>> cfg = SolverConfig(backend="executable", executable="/usr/local/bin/espresso")
>>> cfg.backend
'executable'
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

__all__ = [
    'BACKENDS',
    'SolverConfig',
]

BACKENDS = ("native", "executable")


@dataclass(frozen=True)
class SolverConfig:
    """
    Where and how to run espresso.

    Parameters
    ----------
    backend : {"native", "executable"}, default="native"
        ``"native"`` loads a shared library exposing
        ``run_espresso_from_data``/``run_d1merge_from_data`` through ctypes.
        ``"executable"`` pipes the PLA text through an ``espresso`` binary.
    library_path : str or None, default=None
        Path of the shared library. ``None`` searches the system loader
        path for ``espresso``.
    executable : str, default="espresso"
        Program name or path for the executable backend.
    log_level : str, default="WARNING"
        Level handed to :func:`mvpla.logging_config.setup_logging`.

    Environment
    -----------
    ``MVPLA_SOLVER``, ``MVPLA_ESPRESSO_LIB``, ``MVPLA_ESPRESSO_BIN`` and
    ``MVPLA_LOG_LEVEL`` override the matching fields in :meth:`from_env`.
    """
    backend: str = "native"
    library_path: Optional[str] = None
    executable: str = "espresso"
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.backend not in BACKENDS:
            raise ValueError(
                f"Unknown solver backend {self.backend!r}; expected one of {', '.join(BACKENDS)}."
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SolverConfig":
        """Defaults overridden by ``MVPLA_*`` environment variables."""
        env = os.environ if environ is None else environ
        cfg = cls(
            backend=env.get("MVPLA_SOLVER", cls.backend),
            library_path=env.get("MVPLA_ESPRESSO_LIB") or None,
            executable=env.get("MVPLA_ESPRESSO_BIN", cls.executable),
            log_level=env.get("MVPLA_LOG_LEVEL", cls.log_level).upper(),
        )
        return cfg

    def with_backend(self, backend: str) -> "SolverConfig":
        return replace(self, backend=backend)
