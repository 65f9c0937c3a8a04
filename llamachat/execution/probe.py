"""Liveness probe for the inference binary."""

from __future__ import annotations

import asyncio
import logging

from ..config import PROBE_ARGS, PROBE_BANNER, PROBE_TIMEOUT_S
from .process import ProcessSpawner, signal_process

logger = logging.getLogger(__name__)


async def probe_binary(
    spawner: ProcessSpawner,
    program: str,
    *,
    timeout_s: float = PROBE_TIMEOUT_S,
    banner: str = PROBE_BANNER,
) -> bool:
    """Run the binary with its help flag and look for the usage banner.

    Returns False (never raises) when the binary is missing, exits non-zero,
    prints no recognizable banner, or does not finish within ``timeout_s``.
    """
    try:
        process = await spawner.spawn(program, PROBE_ARGS)
    except (OSError, ValueError) as exc:
        logger.warning("probe: spawn failed program=%s err=%s", program, exc)
        return False

    try:
        async with asyncio.timeout(timeout_s):
            stdout, stderr = await asyncio.gather(process.stdout.read(), process.stderr.read())
            code = await process.wait()
    except TimeoutError:
        logger.warning("probe: timed out program=%s timeout_s=%.1f", program, timeout_s)
        signal_process(process, kill=True)
        await process.wait()
        return False

    output = (stdout + stderr).decode("utf-8", errors="replace").lower()
    ok = code == 0 and banner.lower() in output
    logger.info("probe: finished program=%s code=%s ok=%s", program, code, ok)
    return ok


__all__ = ["probe_binary"]
