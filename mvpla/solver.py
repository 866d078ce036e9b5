"""Adapters that hand PLA text to espresso and return its answer."""

from __future__ import annotations

import ctypes
import ctypes.util
import logging
import subprocess
from typing import Callable, Optional

from .config import SolverConfig
from .errors import SolverError

logger = logging.getLogger(__name__)


class NativeEspresso:
    """ctypes binding to an espresso shared library.

    The library allocates the result with ``malloc`` and hands back the
    pointer through an out-parameter:

        void run_espresso_from_data(const char *data, unsigned length, char **out);
        void run_d1merge_from_data(const char *data, unsigned length, char **out);

    Each call copies the buffer into a Python string and releases it with
    ``free`` exactly once, on success and on failure alike.
    """

    def __init__(self, library_path: Optional[str] = None, library=None):
        if library is None:
            library = self._load_library(library_path)
            self._setup_function_signatures(library)
        self.lib = library

    @staticmethod
    def _load_library(library_path: Optional[str]):
        path = library_path or ctypes.util.find_library("espresso")
        if not path:
            raise SolverError(
                "Could not find the espresso library; set MVPLA_ESPRESSO_LIB to its path."
            )
        try:
            return ctypes.CDLL(path)
        except OSError as exc:
            raise SolverError(f"Could not load espresso library {path!r}: {exc}") from exc

    @staticmethod
    def _setup_function_signatures(lib) -> None:
        try:
            fns = [getattr(lib, name) for name in ("run_espresso_from_data", "run_d1merge_from_data")]
            release = lib.free
        except AttributeError as exc:
            raise SolverError(f"Library is not an espresso build: {exc}") from exc
        for fn in fns:
            fn.argtypes = [
                ctypes.c_char_p,                   # PLA text
                ctypes.c_uint,                     # length in bytes
                ctypes.POINTER(ctypes.c_void_p),   # receives the malloc'd result
            ]
            fn.restype = None
        release.argtypes = [ctypes.c_void_p]
        release.restype = None

    def _transfer(self, fn: Callable, text: str) -> str:
        data = text.encode("utf-8")
        if not data:
            raise SolverError("Refusing to send an empty PLA document to espresso.")

        out = ctypes.c_void_p()
        fn(data, len(data), ctypes.pointer(out))
        if not out.value:
            raise SolverError("espresso returned no output buffer.")
        try:
            raw = ctypes.string_at(out.value)
        finally:
            self.lib.free(out)
        logger.debug("espresso returned %d bytes", len(raw))
        return raw.decode("utf-8")

    def minimize(self, text: str) -> str:
        return self._transfer(self.lib.run_espresso_from_data, text)

    def merge(self, text: str) -> str:
        return self._transfer(self.lib.run_d1merge_from_data, text)


class EspressoExecutable:
    """Runs an ``espresso`` program, feeding the PLA text on stdin."""

    def __init__(self, executable: str = "espresso"):
        self.executable = executable

    def _run(self, *args: str, text: str) -> str:
        cmd = [self.executable, *args]
        try:
            proc = subprocess.run(cmd, input=text, capture_output=True, text=True, check=True)
        except FileNotFoundError as exc:
            raise SolverError(f"espresso executable not found: {self.executable!r}") from exc
        except subprocess.CalledProcessError as exc:
            raise SolverError(
                f"{' '.join(cmd)} exited with status {exc.returncode}: {exc.stderr.strip()}"
            ) from exc
        logger.debug("%s returned %d characters", " ".join(cmd), len(proc.stdout))
        return proc.stdout

    def minimize(self, text: str) -> str:
        return self._run(text=text)

    def merge(self, text: str) -> str:
        return self._run("-Dd1merge", text=text)


class CallableSolver:
    """Wraps plain ``str -> str`` functions as a solver."""

    def __init__(self, minimize: Callable[[str], str], merge: Optional[Callable[[str], str]] = None):
        self._minimize = minimize
        self._merge = merge

    def minimize(self, text: str) -> str:
        return self._minimize(text)

    def merge(self, text: str) -> str:
        if self._merge is None:
            raise SolverError("This solver has no merge function.")
        return self._merge(text)


def make_solver(config: Optional[SolverConfig] = None):
    """Instantiate the backend named by the configuration."""
    cfg = config or SolverConfig.from_env()
    logger.info("Using %s espresso backend", cfg.backend)
    if cfg.backend == "executable":
        return EspressoExecutable(cfg.executable)
    return NativeEspresso(cfg.library_path)


__all__ = [
    "NativeEspresso",
    "EspressoExecutable",
    "CallableSolver",
    "make_solver",
]
