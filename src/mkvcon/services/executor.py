"""Run makemkvcon and capture its output."""

import logging
import subprocess
import time
from dataclasses import dataclass

from mkvcon.config import MkvconConfig
from mkvcon.error_handling import (
    DependencyError,
    ExternalToolError,
    extract_failure_message,
)
from mkvcon.robot import Record, get_messages, parse_robot_output
from mkvcon.services.command import CommandSpec, build_command

logger = logging.getLogger(__name__)

ROBOT_FLAGS = ("-r", "--robot")


@dataclass
class MakeMKVResult:
    """Outcome of one makemkvcon invocation."""

    exit_code: int
    stdout: str
    stderr: str
    # Parsed robot output, None when robot mode was not enabled
    records: list[Record] | None = None

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    def check(self) -> "MakeMKVResult":
        """Raise ExternalToolError if makemkvcon exited with an error."""
        if self.ok:
            return self

        details = None
        if self.records:
            details = extract_failure_message(get_messages(self.records))
        raise ExternalToolError(
            "MakeMKV",
            exit_code=self.exit_code,
            details=details or (self.stderr or self.stdout).strip() or None,
        )


def _run(
    args: list[str],
    config: MkvconConfig,
    timeout: int | None,
) -> tuple[int, str, str]:
    cmd = [config.makemkv_con, *args]
    logger.debug(f"Running: {' '.join(cmd)}")

    start_time = time.time()
    try:
        result = subprocess.run(
            cmd,
            check=False,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError as e:
        raise DependencyError(
            "MakeMKV",
            solution="Install MakeMKV from https://makemkv.com/ or set makemkvcon_path in your config",
            details=f"'{config.makemkv_con}' could not be executed",
            original_error=e,
        ) from e
    except subprocess.TimeoutExpired as e:
        msg = f"MakeMKV operation timed out after {timeout}s"
        raise ExternalToolError(
            "MakeMKV",
            message=msg,
            solution="Try again, or increase the timeout settings in your config",
            original_error=e,
        ) from e

    logger.debug(
        f"makemkvcon exited with {result.returncode} after {time.time() - start_time:.1f}s",
    )
    if result.returncode != 0:
        logger.warning(f"makemkvcon exited with code {result.returncode}")

    return result.returncode, result.stdout, result.stderr


def execute(spec: CommandSpec, config: MkvconConfig) -> MakeMKVResult:
    """Executes a makemkvcon command specification."""
    exit_code, stdout, stderr = _run(
        build_command(spec),
        config,
        config.timeout_for(spec.command),
    )

    records = None
    if spec.options.robot:
        records = parse_robot_output(stdout)

    return MakeMKVResult(
        exit_code=exit_code,
        stdout=stdout,
        stderr=stderr,
        records=records,
    )


def execute_raw(
    args: list[str],
    config: MkvconConfig,
    timeout: int | None = None,
) -> MakeMKVResult:
    """Executes makemkvcon with custom arguments."""
    exit_code, stdout, stderr = _run(args, config, timeout)

    records = None
    if any(flag in args for flag in ROBOT_FLAGS):
        records = parse_robot_output(stdout)

    return MakeMKVResult(
        exit_code=exit_code,
        stdout=stdout,
        stderr=stderr,
        records=records,
    )
