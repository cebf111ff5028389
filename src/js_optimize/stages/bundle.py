"""Bundle stage: esbuild.

The current code is fed to the esbuild executable on stdin as a virtual
entry module. esbuild resolves relative imports of stdin input against
its working directory, so the process is started in the directory of the
original input file. The single emitted artifact is read from stdout.
"""

from __future__ import annotations

import os
import shutil
import subprocess
from pathlib import Path

import structlog

from js_optimize.config import StageName
from js_optimize.errors import BundleError
from js_optimize.stages.base import Transformer

logger = structlog.get_logger(__name__)

ESBUILD_EXECUTABLE = "esbuild"
NODE_BIN_DIR = Path("node_modules") / ".bin"


def locate_esbuild(start_dir: Path) -> str | None:
    """Find the esbuild executable for a project.

    Looks for ``node_modules/.bin/esbuild`` in start_dir and each of its
    ancestors, then falls back to PATH.

    Args:
        start_dir: Directory to start searching from.

    Returns:
        Path to the executable, or None if it cannot be found.
    """
    for directory in (start_dir.resolve(), *start_dir.resolve().parents):
        candidate = directory / NODE_BIN_DIR / ESBUILD_EXECUTABLE
        if candidate.is_file() and os.access(candidate, os.X_OK):
            return str(candidate)
    return shutil.which(ESBUILD_EXECUTABLE)


class EsbuildBundler(Transformer):
    """Bundle code with esbuild.

    Attributes:
        resolve_dir: Directory that imports in the entry code resolve against.
        minify: Ask esbuild for a second minification pass.
        executable: Explicit esbuild path; located on first use when None.
    """

    stage = StageName.BUNDLE

    def __init__(
        self,
        resolve_dir: Path,
        *,
        minify: bool,
        executable: str | None = None,
        sourcefile: str | None = None,
    ) -> None:
        self.resolve_dir = resolve_dir
        self.minify = minify
        self.executable = executable
        self.sourcefile = sourcefile

    def build_command(self, executable: str) -> list[str]:
        """Return the esbuild command line for this bundler."""
        command = [executable, "--bundle", "--log-level=error"]
        if self.minify:
            command.append("--minify")
        if self.sourcefile:
            command.append(f"--sourcefile={self.sourcefile}")
        return command

    def transform(self, code: str) -> str:
        executable = self.executable or locate_esbuild(self.resolve_dir)
        if executable is None:
            raise BundleError(
                "esbuild executable not found",
                cause="install esbuild (npm install esbuild) or add it to PATH",
            )

        command = self.build_command(executable)
        logger.debug("esbuild_invoked", command=command, cwd=str(self.resolve_dir))
        try:
            completed = subprocess.run(
                command,
                input=code,
                capture_output=True,
                text=True,
                encoding="utf-8",
                cwd=self.resolve_dir,
                check=False,
            )
        except OSError as exc:
            raise BundleError("Could not start esbuild", cause=str(exc)) from exc

        if completed.returncode != 0:
            raise BundleError(
                f"esbuild exited with status {completed.returncode}",
                cause=completed.stderr.strip() or None,
            )
        return completed.stdout
