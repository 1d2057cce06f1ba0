"""Decode makemkvcon robot output lines into typed records."""

import logging
import re
from collections.abc import Callable, Iterable, Iterator

from mkvcon.robot.records import (
    Drive,
    Info,
    InfoScope,
    Message,
    ProgressKind,
    ProgressTitle,
    ProgressValue,
    Record,
    Rejected,
    RejectReason,
    TitleCount,
)
from mkvcon.robot.tokenizer import tokenize

logger = logging.getLogger(__name__)

_INTEGER = re.compile(r"[+-]?[0-9]+")


def _to_int(value: str) -> int:
    """Parse a strict base-10 integer field."""
    value = value.strip()
    if not _INTEGER.fullmatch(value):
        msg = f"not a base-10 integer: {value!r}"
        raise ValueError(msg)
    return int(value)


def _require(fields: list[str], minimum: int) -> None:
    if len(fields) < minimum:
        msg = f"expected at least {minimum} fields, got {len(fields)}"
        raise ValueError(msg)


def _decode_message(tag: str, fields: list[str]) -> Message:
    _require(fields, 5)
    return Message(
        code=_to_int(fields[0]),
        flags=_to_int(fields[1]),
        count=_to_int(fields[2]),
        message=fields[3],
        format=fields[4],
        params=tuple(fields[5:]),
    )


def _decode_progress_title(tag: str, fields: list[str]) -> ProgressTitle:
    _require(fields, 3)
    return ProgressTitle(
        kind=ProgressKind(tag),
        code=_to_int(fields[0]),
        id=_to_int(fields[1]),
        name=fields[2],
    )


def _decode_progress_value(tag: str, fields: list[str]) -> ProgressValue:
    _require(fields, 3)
    return ProgressValue(
        current=_to_int(fields[0]),
        total=_to_int(fields[1]),
        max=_to_int(fields[2]),
    )


def _decode_drive(tag: str, fields: list[str]) -> Drive:
    _require(fields, 6)
    return Drive(
        index=_to_int(fields[0]),
        visible=fields[1] == "1",
        enabled=fields[2] == "1",
        flags=_to_int(fields[3]),
        drive_name=fields[4],
        disc_name=fields[5],
    )


def _decode_title_count(tag: str, fields: list[str]) -> TitleCount:
    _require(fields, 1)
    return TitleCount(count=_to_int(fields[0]))


def _decode_info(tag: str, fields: list[str]) -> Info:
    # CINFO:id,code,value / TINFO:title,id,code,value / SINFO:title,stream,id,code,value
    _require(fields, 3)
    if tag == "SINFO" and len(fields) >= 5:
        # Stream attribute id
        _to_int(fields[2])
    return Info(
        scope=InfoScope(tag),
        id=_to_int(fields[0]),
        code=_to_int(fields[1]),
        value=fields[-1],
        qualifiers=tuple(fields[2:-1]),
    )


_DECODERS: dict[str, Callable[[str, list[str]], Record]] = {
    "MSG": _decode_message,
    "PRGC": _decode_progress_title,
    "PRGT": _decode_progress_title,
    "PRGV": _decode_progress_value,
    "DRV": _decode_drive,
    "TCOUT": _decode_title_count,
    "CINFO": _decode_info,
    "TINFO": _decode_info,
    "SINFO": _decode_info,
}


def decode(line: str) -> Record | Rejected:
    """Decode a single robot output line.

    Never raises: anything that cannot be turned into a complete record
    comes back as ``Rejected`` with the reason attached.
    """
    trimmed = line.strip()
    if not trimmed:
        return Rejected(RejectReason.EMPTY_LINE, line)

    tag, colon, payload = trimmed.partition(":")
    if not colon:
        return Rejected(RejectReason.NO_DELIMITER, line)

    decoder = _DECODERS.get(tag)
    if decoder is None:
        return Rejected(RejectReason.UNKNOWN_TYPE, line)

    try:
        return decoder(tag, tokenize(payload))
    except (ValueError, IndexError) as e:
        logger.debug(f"Failed to decode {tag} line '{trimmed}': {e}")
        return Rejected(RejectReason.MALFORMED_FIELDS, line)


def iter_records(lines: Iterable[str]) -> Iterator[Record]:
    """Decode lines one at a time, dropping rejected ones."""
    for line in lines:
        result = decode(line)
        if isinstance(result, Rejected):
            if result.reason is not RejectReason.EMPTY_LINE:
                logger.debug(f"Skipping robot line ({result.reason.value}): {line!r}")
            continue
        yield result


def parse_robot_output(output: str) -> list[Record]:
    """Parse a complete robot output capture into its records."""
    return list(iter_records(output.split("\n")))
