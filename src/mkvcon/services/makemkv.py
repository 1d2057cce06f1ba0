"""MakeMKV service wrapper."""

import asyncio
import logging
import subprocess
from functools import partial
from typing import Literal

from mkvcon.config import MkvconConfig
from mkvcon.robot import DiscInfo, Drive, aggregate, get_drives
from mkvcon.services.command import (
    BackupOptions,
    CommandSpec,
    ConversionOptions,
    MakeMKVOptions,
    StreamingOptions,
    build_backup_command,
    build_info_command,
    build_list_drives_command,
    build_mkv_command,
    build_stream_command,
)
from mkvcon.services.executor import MakeMKVResult, execute

logger = logging.getLogger(__name__)


class MakeMKVService:
    """Async wrapper for makemkvcon commands."""

    def __init__(self, config: MkvconConfig):
        self.config = config

    def _options(self, options: MakeMKVOptions | None) -> MakeMKVOptions | None:
        """Apply the configured default cache when the caller did not set one."""
        if self.config.default_cache is None:
            return options
        if options is None:
            return MakeMKVOptions(cache=self.config.default_cache)
        if "cache" in options.model_fields_set:
            return options
        return options.model_copy(update={"cache": self.config.default_cache})

    async def _execute(self, spec: CommandSpec) -> MakeMKVResult:
        # execute() blocks on the subprocess, run it off the event loop
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, partial(execute, spec, self.config))

    async def get_disc_info(
        self,
        disc_index: int | None = None,
        options: MakeMKVOptions | None = None,
    ) -> MakeMKVResult:
        """Get information about a disc (makemkvcon -r info disc:N)."""
        if disc_index is None:
            disc_index = self.config.default_disc_index
        logger.info(f"Scanning disc {disc_index}")
        return await self._execute(
            build_info_command(disc_index, self._options(options)),
        )

    async def get_structured_disc_info(
        self,
        disc_index: int | None = None,
        options: MakeMKVOptions | None = None,
    ) -> tuple[MakeMKVResult, DiscInfo | None]:
        """Get disc information organized into titles and streams."""
        result = await self.get_disc_info(disc_index, options)

        disc_info = None
        if result.records is not None:
            disc_info = aggregate(result.records)
            logger.info(f"Disc scan found {len(disc_info.titles)} titles")

        return result, disc_info

    async def list_drives(self, options: MakeMKVOptions | None = None) -> MakeMKVResult:
        """List all drives (makemkvcon -r --cache=1 info disc:9999)."""
        return await self._execute(build_list_drives_command(options))

    async def get_available_drives(
        self,
        options: MakeMKVOptions | None = None,
    ) -> tuple[MakeMKVResult, list[Drive]]:
        """List drives as DRV records."""
        result = await self.list_drives(options)

        drives: list[Drive] = []
        if result.records is not None:
            drives = get_drives(result.records)

        return result, drives

    async def convert_to_mkv(
        self,
        disc_index: int,
        titles: Literal["all"] | list[int],
        output_folder: str,
        options: MakeMKVOptions | None = None,
        conversion: ConversionOptions | None = None,
    ) -> MakeMKVResult:
        """Convert disc titles to MKV files."""
        try:
            logger.info(f"Converting titles {titles} from disc {disc_index} to {output_folder}")
            return await self._execute(
                build_mkv_command(
                    disc_index,
                    titles,
                    output_folder,
                    self._options(options),
                    conversion,
                ),
            )
        except Exception as e:
            logger.exception(f"MKV conversion failed: {e}")
            raise

    async def backup_disc(
        self,
        disc_index: int,
        output_folder: str,
        options: MakeMKVOptions | None = None,
        backup: BackupOptions | None = None,
    ) -> MakeMKVResult:
        """Back up a disc to a folder."""
        try:
            logger.info(f"Backing up disc {disc_index} to {output_folder}")
            return await self._execute(
                build_backup_command(
                    disc_index,
                    output_folder,
                    self._options(options),
                    backup,
                ),
            )
        except Exception as e:
            logger.exception(f"Disc backup failed: {e}")
            raise

    async def start_streaming_server(
        self,
        options: MakeMKVOptions | None = None,
        streaming: StreamingOptions | None = None,
    ) -> MakeMKVResult:
        """Start the makemkvcon streaming server."""
        return await self._execute(
            build_stream_command(self._options(options), streaming),
        )

    def validate_makemkv_available(self) -> bool:
        """Check if makemkvcon can be executed."""
        try:
            result = subprocess.run(
                [self.config.makemkv_con, "--version"],
                check=False,
                capture_output=True,
                text=True,
                timeout=10,
            )
            return result.returncode == 0
        except (subprocess.SubprocessError, FileNotFoundError):
            return False
