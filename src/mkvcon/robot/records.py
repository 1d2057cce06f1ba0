"""Typed records decoded from makemkvcon robot output lines.

Each robot line (``TAG:field0,field1,...``) decodes to exactly one of the
record classes below, or to a ``Rejected`` marker when the line cannot be
used. All records are frozen; they carry only ints, strings and tuples of
strings.
"""

from dataclasses import dataclass, field
from enum import Enum


class ProgressKind(Enum):
    """Which progress bar a PRGC/PRGT title refers to."""

    CURRENT = "PRGC"
    TOTAL = "PRGT"


class InfoScope(Enum):
    """Hierarchy level an information record applies to."""

    DISC = "CINFO"
    TITLE = "TINFO"
    STREAM = "SINFO"


class RejectReason(Enum):
    """Why a line did not decode to a record."""

    EMPTY_LINE = "empty line"
    NO_DELIMITER = "no type delimiter"
    UNKNOWN_TYPE = "unknown record type"
    MALFORMED_FIELDS = "malformed fields"


@dataclass(frozen=True)
class Message:
    """General message. Format: MSG:code,flags,count,message,format,param0,..."""

    code: int
    flags: int
    count: int
    message: str
    format: str
    params: tuple[str, ...] = ()


@dataclass(frozen=True)
class ProgressTitle:
    """Current or total progress title. Format: PRGC|PRGT:code,id,name"""

    kind: ProgressKind
    code: int
    id: int
    name: str


@dataclass(frozen=True)
class ProgressValue:
    """Progress bar values. Format: PRGV:current,total,max"""

    current: int
    total: int
    max: int

    @property
    def percentage(self) -> float:
        """Total progress as a percentage of ``max``."""
        if self.max <= 0:
            return 0.0
        return (self.total / self.max) * 100


@dataclass(frozen=True)
class Drive:
    """Drive scan entry. Format: DRV:index,visible,enabled,flags,drive name,disc name"""

    index: int
    visible: bool
    enabled: bool
    flags: int
    drive_name: str
    disc_name: str


@dataclass(frozen=True)
class TitleCount:
    """Number of titles on the disc. Format: TCOUT:count"""

    count: int


@dataclass(frozen=True)
class Info:
    """Disc, title or stream information. Format: CINFO|TINFO|SINFO:id,code,...,value

    ``value`` is always the last field. Any fields between ``code`` and the
    value (message codes, stream attribute ids) are kept verbatim in
    ``qualifiers``.
    """

    scope: InfoScope
    id: int
    code: int
    value: str
    qualifiers: tuple[str, ...] = field(default=())


@dataclass(frozen=True)
class Rejected:
    """A line that did not decode. Callers are expected to filter these out."""

    reason: RejectReason
    line: str = ""


Record = Message | ProgressTitle | ProgressValue | Drive | TitleCount | Info
