from __future__ import annotations

"""Subprocess helpers with config-driven timeouts.

No shell=True; commands are always argv lists.
"""

import logging
import shlex
import subprocess
from typing import Any, List, Optional, Sequence

logger = logging.getLogger(__name__)


def _flatten_cmd(cmd: Sequence[Any]) -> List[str]:
    return [str(p) for p in cmd]


def configured_timeout(timeout_type: Optional[str] = None) -> float:
    """Return the configured timeout (seconds) for ``timeout_type``.

    Only ``git_operations`` is configurable; it is also the default bucket.
    """
    from resumer.core.config.domains.timeouts import TimeoutsConfig

    cfg = TimeoutsConfig()
    if timeout_type not in (None, "git_operations"):
        raise ValueError(f"Unknown timeout type: {timeout_type}")
    return cfg.git_operations_seconds


def run_with_timeout(cmd: Sequence[Any], timeout_type: Optional[str] = None, **kwargs: Any) -> subprocess.CompletedProcess:
    """Run a subprocess using the configured timeout bucket.

    Args:
        cmd: argv list passed through to ``subprocess.run``.
        timeout_type: Timeout bucket name (e.g., ``git_operations``).
        **kwargs: Additional arguments forwarded to ``subprocess.run``;
            an explicit ``timeout`` wins over the configured one.

    Raises:
        subprocess.TimeoutExpired: When the command exceeds its timeout.
        subprocess.CalledProcessError: When ``check=True`` and it fails.
        FileNotFoundError: When the executable does not exist.
    """
    explicit_timeout = kwargs.pop("timeout", None)
    timeout = explicit_timeout if explicit_timeout is not None else configured_timeout(timeout_type)

    argv = _flatten_cmd(cmd)
    logger.debug("run %s (cwd=%s, timeout=%ss)", shlex.join(argv), kwargs.get("cwd"), timeout)
    return subprocess.run(argv, timeout=timeout, **kwargs)


__all__ = ["configured_timeout", "run_with_timeout"]
