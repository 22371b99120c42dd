from __future__ import annotations

import logging
import shutil
import subprocess
from typing import Optional

log = logging.getLogger("better_vmaf")


_INSTALL_HINTS = {
    "ffmpeg": "install an ffmpeg build configured with --enable-libvmaf",
}


def ensure_tool(name: str) -> str:
    """Resolve *name* on PATH; RuntimeError when it is missing."""
    path = shutil.which(name)
    if path is None:
        hint = _INSTALL_HINTS.get(name, "install it")
        raise RuntimeError(f"{name} not found on PATH; {hint}")
    return path


def run_cmd(cmd: list[str], timeout: Optional[int] = 120) -> subprocess.CompletedProcess[str]:
    """Run a command, log it, and return the completed process.

    Raises ``subprocess.CalledProcessError`` on a non-zero exit; the captured
    stderr tail is logged first since ffmpeg reports filter errors there.
    """
    log.debug("Running: %s", " ".join(cmd))
    try:
        return subprocess.run(cmd, check=True, capture_output=True, text=True, timeout=timeout)
    except subprocess.CalledProcessError as exc:
        tail = (exc.stderr or "").strip().splitlines()[-5:]
        log.error("%s exited with status %d", cmd[0], exc.returncode)
        for line in tail:
            log.error("  %s", line)
        raise
