"""MakeMKV attribute identifiers (``AP_ItemAttributeId`` in apdefs.h)."""

from collections.abc import Mapping
from enum import IntEnum


class AttributeId(IntEnum):
    """Meaning of the integer keys in disc/title/stream attribute collections."""

    UNKNOWN = 0
    TYPE = 1
    NAME = 2
    LANG_CODE = 3
    LANG_NAME = 4
    CODEC_ID = 5
    CODEC_SHORT = 6
    CODEC_LONG = 7
    CHAPTER_COUNT = 8
    DURATION = 9
    DISK_SIZE = 10
    DISK_SIZE_BYTES = 11
    STREAM_TYPE_EXTENSION = 12
    BITRATE = 13
    AUDIO_CHANNELS_COUNT = 14
    ANGLE_INFO = 15
    SOURCE_FILE_NAME = 16
    AUDIO_SAMPLE_RATE = 17
    AUDIO_SAMPLE_SIZE = 18
    VIDEO_SIZE = 19
    VIDEO_ASPECT_RATIO = 20
    VIDEO_FRAME_RATE = 21
    STREAM_FLAGS = 22
    DATE_TIME = 23
    ORIGINAL_TITLE_ID = 24
    SEGMENTS_COUNT = 25
    SEGMENTS_MAP = 26
    OUTPUT_FILE_NAME = 27
    METADATA_LANGUAGE_CODE = 28
    METADATA_LANGUAGE_NAME = 29
    TREE_INFO = 30
    PANEL_TITLE = 31
    VOLUME_NAME = 32
    ORDER_WEIGHT = 33
    OUTPUT_FORMAT = 34
    OUTPUT_FORMAT_DESCRIPTION = 35
    SEAMLESS_INFO = 36
    PANEL_TEXT = 37
    MKV_FLAGS = 38
    MKV_FLAGS_TEXT = 39
    AUDIO_CHANNEL_LAYOUT_NAME = 40
    OUTPUT_CODEC_SHORT = 41
    OUTPUT_CONVERSION_TYPE = 42
    OUTPUT_AUDIO_SAMPLE_RATE = 43
    OUTPUT_AUDIO_SAMPLE_SIZE = 44
    OUTPUT_AUDIO_CHANNELS_COUNT = 45
    OUTPUT_AUDIO_CHANNEL_LAYOUT_NAME = 46
    OUTPUT_AUDIO_CHANNEL_LAYOUT = 47
    OUTPUT_AUDIO_MIX_DESCRIPTION = 48
    COMMENT = 49
    OFFSET_SEQUENCE_ID = 50

    @property
    def label(self) -> str:
        """Human readable name, e.g. ``Source File Name``."""
        return self.name.replace("_", " ").title()


def get_attribute(
    attributes: Mapping[int, str],
    attribute_id: int,
    default: str | None = None,
) -> str | None:
    """Look up an attribute value by id."""
    return attributes.get(int(attribute_id), default)


def attribute_label(attribute_id: int) -> str:
    """Label for an attribute id, falling back to the raw number."""
    try:
        return AttributeId(attribute_id).label
    except ValueError:
        return f"Attribute {attribute_id}"
