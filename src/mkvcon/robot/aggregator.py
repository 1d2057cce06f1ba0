"""Fold decoded robot records into a disc -> title -> stream hierarchy."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from functools import reduce
from types import MappingProxyType

from mkvcon.robot.attributes import AttributeId, get_attribute
from mkvcon.robot.records import Drive, Info, InfoScope, Message, Record, TitleCount


class _AttributeAccess:
    """Convenience lookups shared by disc, title and stream info."""

    attributes: Mapping[int, str]

    def __post_init__(self) -> None:
        # Copy into a read-only view so results cannot be changed afterwards
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    def get(self, attribute_id: int, default: str | None = None) -> str | None:
        return get_attribute(self.attributes, attribute_id, default)

    @property
    def type(self) -> str | None:
        return self.get(AttributeId.TYPE)

    @property
    def name(self) -> str | None:
        return self.get(AttributeId.NAME)

    @property
    def volume_name(self) -> str | None:
        return self.get(AttributeId.VOLUME_NAME)

    @property
    def duration(self) -> str | None:
        return self.get(AttributeId.DURATION)

    @property
    def chapter_count(self) -> str | None:
        return self.get(AttributeId.CHAPTER_COUNT)

    @property
    def disk_size(self) -> str | None:
        return self.get(AttributeId.DISK_SIZE)

    @property
    def source_file_name(self) -> str | None:
        return self.get(AttributeId.SOURCE_FILE_NAME)

    @property
    def codec_short(self) -> str | None:
        return self.get(AttributeId.CODEC_SHORT)

    @property
    def lang_code(self) -> str | None:
        return self.get(AttributeId.LANG_CODE)


@dataclass(frozen=True)
class StreamInfo(_AttributeAccess):
    """A stream (track) and its attributes.

    ``title`` is the owning title number when MakeMKV reports it, which is
    the case for the usual ``SINFO:title,stream,attribute,code,value`` form.
    """

    id: int
    attributes: Mapping[int, str] = field(default_factory=dict, hash=False)
    title: int | None = None


@dataclass(frozen=True)
class TitleInfo(_AttributeAccess):
    """A title on the disc and the streams MakeMKV reported for it."""

    id: int
    attributes: Mapping[int, str] = field(default_factory=dict, hash=False)
    streams: tuple[StreamInfo, ...] = ()


@dataclass(frozen=True)
class DiscInfo(_AttributeAccess):
    """Structured disc information built from CINFO/TINFO/SINFO records.

    ``streams`` holds every stream in first-seen order, including short-form
    SINFO records that name no title.
    """

    attributes: Mapping[int, str] = field(default_factory=dict, hash=False)
    titles: tuple[TitleInfo, ...] = ()
    streams: tuple[StreamInfo, ...] = ()

    def get_title(self, title_id: int) -> TitleInfo | None:
        """Find a title by its MakeMKV title number."""
        for title in self.titles:
            if title.id == title_id:
                return title
        return None


@dataclass
class _Accumulator:
    disc: dict[int, str] = field(default_factory=dict)
    titles: dict[int, dict[int, str]] = field(default_factory=dict)
    # Keyed by (title, stream); title is None for short-form records
    streams: dict[tuple[int | None, int], dict[int, str]] = field(default_factory=dict)


def _fold(acc: _Accumulator, record: Record) -> _Accumulator:
    if not isinstance(record, Info):
        return acc

    if record.scope is InfoScope.DISC:
        # CINFO:id,code,value - the first field is the attribute id
        acc.disc[record.id] = record.value
    elif record.scope is InfoScope.TITLE:
        # TINFO:title,id,... - the second field is the attribute id
        acc.titles.setdefault(record.id, {})[record.code] = record.value
    elif record.scope is InfoScope.STREAM:
        if len(record.qualifiers) >= 2:
            # SINFO:title,stream,id,code,value
            acc.titles.setdefault(record.id, {})
            key = (record.id, record.code)
            attribute_id = int(record.qualifiers[0])
        else:
            # SINFO:stream,id,value
            key = (None, record.id)
            attribute_id = record.code
        acc.streams.setdefault(key, {})[attribute_id] = record.value
    return acc


def aggregate(records: Iterable[Record]) -> DiscInfo:
    """Organize info records into a ``DiscInfo``.

    Titles and streams keep the order in which their number first appears.
    Later values for the same attribute overwrite earlier ones. Records other
    than CINFO/TINFO/SINFO are ignored.
    """
    acc = reduce(_fold, records, _Accumulator())
    streams = tuple(
        StreamInfo(id=stream_id, attributes=attributes, title=title_id)
        for (title_id, stream_id), attributes in acc.streams.items()
    )
    return DiscInfo(
        attributes=acc.disc,
        titles=tuple(
            TitleInfo(
                id=title_id,
                attributes=attributes,
                streams=tuple(stream for stream in streams if stream.title == title_id),
            )
            for title_id, attributes in acc.titles.items()
        ),
        streams=streams,
    )


def get_messages(records: Iterable[Record]) -> list[str]:
    """Message texts of all MSG records, in order."""
    return [record.message for record in records if isinstance(record, Message)]


def get_drives(records: Iterable[Record]) -> list[Drive]:
    """All DRV records, in order."""
    return [record for record in records if isinstance(record, Drive)]


def get_title_count(records: Iterable[Record]) -> int | None:
    """Title count from the last TCOUT record, or None when there is none."""
    count = None
    for record in records:
        if isinstance(record, TitleCount):
            count = record.count
    return count
