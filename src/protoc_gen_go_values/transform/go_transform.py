"""Rewrite protoc-gen-go output so annotated fields use value slices.

The rewrite is textual and line-scoped: a struct field declaration
`Users []*User` becomes `Users []User` and the getter signature
`GetUsers() []*User` becomes `GetUsers() []User`. Declarations split across
lines are not recognized.
"""

from __future__ import annotations

import re
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Pattern, Tuple

from protoc_gen_go_values.errors import InvalidInputError
from protoc_gen_go_values.models import AnnotatedFields

POINTER_SLICE = "[]*"
VALUE_SLICE = "[]"
GETTER_PREFIX = "Get"
GETTER_CALL = "() "
LINE_COMMENT = "//"

# An identifier must not continue to the left of the match.
_NOT_IDENT_BEFORE = r"(?<!\w)"


def _declaration_pattern(field_name: str) -> Pattern[str]:
    return re.compile(
        _NOT_IDENT_BEFORE
        + "(" + re.escape(field_name) + r"[ \t]+)"
        + re.escape(POINTER_SLICE)
    )


def _getter_pattern(field_name: str) -> Pattern[str]:
    return re.compile(
        _NOT_IDENT_BEFORE
        + "(" + re.escape(GETTER_PREFIX + field_name + GETTER_CALL) + ")"
        + re.escape(POINTER_SLICE)
    )


def _to_value_slice(match: re.Match) -> str:
    return match.group(1) + VALUE_SLICE


def _is_comment_line(line: str) -> bool:
    return line.lstrip().startswith(LINE_COMMENT)


def transform_field(content: str, field_name: str) -> str:
    """Convert the declaration and getter of one field to a value slice."""
    if not field_name or POINTER_SLICE not in content:
        return content

    declaration = _declaration_pattern(field_name)
    getter = _getter_pattern(field_name)

    lines = content.split("\n")
    for i, line in enumerate(lines):
        if field_name not in line:
            continue
        if not _is_comment_line(line):
            line = declaration.sub(_to_value_slice, line)
        lines[i] = getter.sub(_to_value_slice, line)
    return "\n".join(lines)


def transform_content(content: str, fields: AnnotatedFields) -> str:
    for field_name in fields:
        content = transform_field(content, field_name)
    return content


def _transform_one(item: Tuple[object, str], fields: AnnotatedFields) -> Tuple[object, str]:
    generated_file, content = item
    return generated_file, transform_content(content, fields)


def apply_transformations(files, fields: AnnotatedFields, workers: int = 1) -> None:
    """Rewrite the content of each generated file in place.

    `files` is a sequence of CodeGeneratorResponse.File. Names and the file
    list itself are never changed; files without content are skipped.
    With workers > 1 the files are processed on a thread pool.
    """
    if files is None:
        raise InvalidInputError("files cannot be None")
    if fields is None:
        raise InvalidInputError("fields cannot be None")
    if not len(fields):
        return

    pending: List[Tuple[object, str]] = [
        (f, f.content) for f in files if f.HasField("content")
    ]
    if not pending:
        return

    results: Iterable[Tuple[object, str]]
    if workers > 1 and len(pending) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            results = list(pool.map(lambda item: _transform_one(item, fields), pending))
    else:
        results = [_transform_one(item, fields) for item in pending]

    for generated_file, content in results:
        if content != generated_file.content:
            generated_file.content = content
