"""mkvcon - parse and drive MakeMKV's makemkvcon from Python.

Typical use::

    from mkvcon import aggregate, parse_robot_output

    disc = aggregate(parse_robot_output(captured_stdout))
    for title in disc.titles:
        print(title.id, title.name, title.duration)
"""

from mkvcon.robot import (
    AttributeId,
    DiscInfo,
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
    StreamInfo,
    TitleCount,
    TitleInfo,
    aggregate,
    decode,
    get_attribute,
    get_drives,
    get_messages,
    get_title_count,
    iter_records,
    parse_robot_output,
    tokenize,
)

__all__ = [
    "AttributeId",
    "DiscInfo",
    "Drive",
    "Info",
    "InfoScope",
    "Message",
    "ProgressKind",
    "ProgressTitle",
    "ProgressValue",
    "Record",
    "Rejected",
    "RejectReason",
    "StreamInfo",
    "TitleCount",
    "TitleInfo",
    "aggregate",
    "decode",
    "get_attribute",
    "get_drives",
    "get_messages",
    "get_title_count",
    "iter_records",
    "parse_robot_output",
    "tokenize",
]
