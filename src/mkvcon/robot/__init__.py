"""makemkvcon robot output parsing.

This package turns the line-oriented ``makemkvcon -r`` output into typed
records and folds disc, title and stream information into a ``DiscInfo``
hierarchy. Nothing here touches the disc, the filesystem or subprocesses.
"""

from mkvcon.robot.aggregator import (
    DiscInfo,
    StreamInfo,
    TitleInfo,
    aggregate,
    get_drives,
    get_messages,
    get_title_count,
)
from mkvcon.robot.attributes import AttributeId, get_attribute
from mkvcon.robot.decoder import decode, iter_records, parse_robot_output
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
