"""Apply a randomly chosen image with the external display command."""

from __future__ import annotations

import logging
import random
import shlex
import subprocess
from collections.abc import Callable, Sequence
from pathlib import Path

from sfwallpaper.config import PATH_PLACEHOLDER, DisplayPolicy
from sfwallpaper.errors import SpawnError
from sfwallpaper.models import DisplayAttempt, DisplayOutcome

logger = logging.getLogger(__name__)

# Exit codes the shell uses when it cannot find or execute the command.
_SHELL_LAUNCH_FAILURES = {126, 127}

Runner = Callable[[str], int]


def render_command(template: str, path: Path) -> str:
    """Substitute the shell-quoted path into the command template."""

    quoted = shlex.quote(str(path))
    if PATH_PLACEHOLDER not in template:
        return f"{template} {quoted}"
    return template.replace(PATH_PLACEHOLDER, quoted)


def run_shell(command: str) -> int:
    """Run command through the shell, wait for it, and return its exit status."""

    process = subprocess.run(command, shell=True, check=False)
    return process.returncode


def set_wallpaper(
    pool: Sequence[Path],
    command: str,
    *,
    policy: DisplayPolicy | None = None,
    rng: random.Random | None = None,
    runner: Runner = run_shell,
) -> DisplayOutcome:
    """Try random candidates until the display command exits zero.

    Each attempt draws independently from the whole pool, so a retry may pick
    the same image again. Running out of attempts is logged and reported in the
    outcome; only a command that cannot be launched raises SpawnError.
    """

    if not pool:
        raise ValueError("Cannot set a wallpaper from an empty pool")

    policy = policy or DisplayPolicy()
    rng = rng or random.Random()
    outcome = DisplayOutcome()

    for attempt in range(1, policy.max_attempts + 1):
        path = rng.choice(pool)
        rendered = render_command(command, path)
        logger.info("Setting wallpaper (attempt %d/%d): %s", attempt, policy.max_attempts, rendered)

        try:
            returncode = runner(rendered)
        except OSError as exc:
            raise SpawnError(f"Failed to spawn command '{command}': {exc}") from exc

        outcome.attempts.append(DisplayAttempt(path=path, returncode=returncode))
        if returncode in _SHELL_LAUNCH_FAILURES:
            raise SpawnError(f"Command '{command}' could not be executed (exit status {returncode})")
        if returncode == 0:
            outcome.succeeded = True
            logger.info("Wallpaper set to %s", path)
            return outcome

        logger.warning("Display command exited with status %d for %s", returncode, path)

    logger.error("Giving up after %d failed attempt(s) to set the wallpaper", len(outcome.attempts))
    return outcome
