"""Field tokenizer for makemkvcon robot output payloads."""


def tokenize(payload: str) -> list[str]:
    """Split a robot-mode payload into its fields.

    Fields are comma separated. Double quotes toggle a quoted section (so
    commas can appear inside a value) and are never part of the field. A
    backslash drops itself and keeps the following character literally, so
    ``\\n`` becomes ``n`` rather than a newline.

    Unterminated quotes or a trailing backslash are not errors; whatever was
    accumulated is emitted as the last field.

    Args:
        payload: Text after the ``TAG:`` prefix of a robot line

    Returns:
        Ordered list of field values (empty for an empty payload)
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    escaped = False

    for char in payload:
        if escaped:
            current.append(char)
            escaped = False
            continue

        if char == "\\":
            escaped = True
            continue

        if char == '"':
            in_quotes = not in_quotes
            continue

        if char == "," and not in_quotes:
            fields.append("".join(current))
            current = []
            continue

        current.append(char)

    # A lone empty field is only emitted once a comma has produced another one
    if current or fields:
        fields.append("".join(current))

    return fields
