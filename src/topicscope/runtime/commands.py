"""
Subprocess wrapper for ROS command line tools.

Introspection commands are best effort: a failing or missing tool yields
whatever output it produced (often nothing) and the caller carries on.
"""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Mapping, Sequence

logger = logging.getLogger(__name__)


def _decode(output: bytes | str | None) -> str:
    if output is None:
        return ""
    if isinstance(output, bytes):
        return output.decode("utf-8", errors="replace")
    return output


class CommandRunner:
    """Runs commands inside a fixed environment and returns their stdout."""

    def __init__(self, env: Mapping[str, str] | None = None):
        self.env = dict(env) if env is not None else None

    def run(
        self,
        args: Sequence[str],
        timeout: float | None = None,
        merge_stderr: bool = False,
        extra_env: Mapping[str, str] | None = None,
    ) -> str:
        """
        Run ``args`` and return its output as text.

        Args:
            args: Command and arguments
            timeout: Seconds before the process is killed
            merge_stderr: Capture stderr into the returned text
            extra_env: Variables added on top of the runner's environment

        Returns:
            Captured stdout; on timeout, the output read before the kill;
            "" when the command could not be started
        """
        env = self.env
        if extra_env:
            base = self.env if self.env is not None else os.environ
            env = {**base, **extra_env}

        try:
            result = subprocess.run(
                list(args),
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT if merge_stderr else subprocess.DEVNULL,
                env=env,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired as e:
            logger.debug("%s timed out after %ss", args[0], timeout)
            # Captured as bytes; tools may print non-UTF-8 text.
            return _decode(e.stdout)
        except OSError as e:
            logger.debug("Could not run %s: %s", args[0], e)
            return ""

        if result.returncode != 0:
            logger.debug("%s exited with code %d", " ".join(args), result.returncode)
        return _decode(result.stdout)
