"""Command builder for makemkvcon.

Converts option models into makemkvcon command-line arguments.
"""

from dataclasses import dataclass, field
from typing import Literal

from pydantic import BaseModel, Field

Command = Literal["info", "mkv", "backup", "stream"]

# makemkvcon lists drives when asked for a disc index it cannot have
LIST_DRIVES_TARGET = "disc:9999"


class MakeMKVOptions(BaseModel):
    """General options accepted by every makemkvcon command."""

    # Output all messages to file ("-stdout", "-stderr", "-null", or file path)
    messages: str | None = None
    # Output progress messages to file ("-stdout", "-stderr", "-null", "-same", or file path)
    progress: str | None = None
    # True enables debug messages, a string also sets the debug file location
    debug: bool | str | None = None
    directio: bool | None = None
    # Don't access media during disc scan
    noscan: bool = False
    # Size of read cache in megabytes
    cache: int | None = Field(default=None, ge=1)
    # Robot mode, required for record parsing
    robot: bool = False


class StreamingOptions(BaseModel):
    """Options for the UPNP streaming server."""

    upnp: bool | None = None
    bindip: str | None = None
    bindport: int | None = Field(default=None, ge=1, le=65535)


class BackupOptions(BaseModel):
    """Options for disc backup."""

    decrypt: bool = False


class ConversionOptions(BaseModel):
    """Options for MKV conversion."""

    # Minimum title length in seconds
    minlength: int | None = Field(default=None, ge=0)


def _flag(value: bool) -> str:
    return "true" if value else "false"


def build_general_args(options: MakeMKVOptions | None = None) -> list[str]:
    """Builds general makemkvcon arguments from options."""
    options = options or MakeMKVOptions()
    args: list[str] = []

    if options.messages is not None:
        args.append(f"--messages={options.messages}")

    if options.progress is not None:
        args.append(f"--progress={options.progress}")

    if isinstance(options.debug, bool):
        if options.debug:
            args.append("--debug")
    elif options.debug is not None:
        args.append(f"--debug={options.debug}")

    if options.directio is not None:
        args.append(f"--directio={_flag(options.directio)}")

    if options.noscan:
        args.append("--noscan")

    if options.cache is not None:
        args.append(f"--cache={options.cache}")

    if options.robot:
        args.append("-r")

    return args


def build_streaming_args(options: StreamingOptions | None = None) -> list[str]:
    """Builds streaming-specific arguments."""
    options = options or StreamingOptions()
    args: list[str] = []

    if options.upnp is not None:
        args.append(f"--upnp={_flag(options.upnp)}")

    if options.bindip is not None:
        args.append(f"--bindip={options.bindip}")

    if options.bindport is not None:
        args.append(f"--bindport={options.bindport}")

    return args


def build_backup_args(options: BackupOptions | None = None) -> list[str]:
    """Builds backup-specific arguments."""
    if options and options.decrypt:
        return ["--decrypt"]
    return []


def build_conversion_args(options: ConversionOptions | None = None) -> list[str]:
    """Builds conversion-specific arguments."""
    if options and options.minlength is not None:
        return [f"--minlength={options.minlength}"]
    return []


@dataclass
class CommandSpec:
    """A makemkvcon invocation before it is turned into argv."""

    command: Command
    args: list[str] = field(default_factory=list)
    options: MakeMKVOptions = field(default_factory=MakeMKVOptions)


def build_command(spec: CommandSpec) -> list[str]:
    """Builds the complete argument list (without the executable)."""
    return [*build_general_args(spec.options), spec.command, *spec.args]


def _with_defaults(options: MakeMKVOptions | None, **defaults) -> MakeMKVOptions:
    """Apply forced defaults that explicitly set caller options override."""
    if options is None:
        return MakeMKVOptions(**defaults)
    return options.model_copy(
        update={
            key: value
            for key, value in defaults.items()
            if key not in options.model_fields_set
        },
    )


def build_info_command(
    disc_index: int,
    options: MakeMKVOptions | None = None,
) -> CommandSpec:
    """Builds info command for getting disc information."""
    return CommandSpec(
        command="info",
        args=[f"disc:{disc_index}"],
        options=_with_defaults(options, robot=True),
    )


def build_list_drives_command(options: MakeMKVOptions | None = None) -> CommandSpec:
    """Builds info command for listing drives."""
    return CommandSpec(
        command="info",
        args=[LIST_DRIVES_TARGET],
        options=_with_defaults(options, robot=True, cache=1),
    )


def build_mkv_command(
    disc_index: int,
    titles: Literal["all"] | list[int],
    output_folder: str,
    options: MakeMKVOptions | None = None,
    conversion: ConversionOptions | None = None,
) -> CommandSpec:
    """Builds mkv command for converting titles."""
    title_arg = "all" if titles == "all" else ",".join(str(t) for t in titles)
    return CommandSpec(
        command="mkv",
        args=[
            *build_conversion_args(conversion),
            f"disc:{disc_index}",
            title_arg,
            str(output_folder),
        ],
        options=options or MakeMKVOptions(),
    )


def build_backup_command(
    disc_index: int,
    output_folder: str,
    options: MakeMKVOptions | None = None,
    backup: BackupOptions | None = None,
) -> CommandSpec:
    """Builds backup command for backing up a disc."""
    return CommandSpec(
        command="backup",
        args=[*build_backup_args(backup), f"disc:{disc_index}", str(output_folder)],
        options=options or MakeMKVOptions(),
    )


def build_stream_command(
    options: MakeMKVOptions | None = None,
    streaming: StreamingOptions | None = None,
) -> CommandSpec:
    """Builds stream command for starting the streaming server."""
    return CommandSpec(
        command="stream",
        args=build_streaming_args(streaming),
        options=options or MakeMKVOptions(),
    )
