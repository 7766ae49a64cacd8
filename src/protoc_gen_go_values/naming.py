from __future__ import annotations

FIELD_NAME_SEPARATOR = "_"


def _capitalize_first(segment: str) -> str:
    first = segment[0].upper()
    # upper() may expand a character (ß -> SS); keep it unchanged then
    if len(first) != 1:
        first = segment[0]
    return first + segment[1:]


def to_go_field_name(proto_name: str) -> str:
    """Convert a snake_case proto field name into its Go struct field name.

    Empty segments (leading, trailing or repeated underscores) are dropped:
    user_full_profile -> UserFullProfile, _ -> "", 1_2_3 -> 123.
    """
    parts = proto_name.split(FIELD_NAME_SEPARATOR)
    return "".join(_capitalize_first(p) for p in parts if p)
