"""Find repeated message fields annotated for value-slice generation."""

from __future__ import annotations

from typing import Dict, Iterable, Optional, Set, Tuple

from google.protobuf import descriptor_pb2

from protoc_gen_go_values import options
from protoc_gen_go_values.errors import InvalidInputError
from protoc_gen_go_values.models import AnnotatedFields
from protoc_gen_go_values.naming import to_go_field_name

# Leading-comment markers recognized when a field carries no extension.
NULLABLE_FALSE_MARKER = "@nullable=false"
VALUE_SLICE_MARKER = "@valueslice"
COMMENT_MARKERS = (NULLABLE_FALSE_MARKER, VALUE_SLICE_MARKER)

# SourceCodeInfo path components (see descriptor.proto).
FILE_MESSAGE_TYPE_TAG = 4
MESSAGE_FIELD_TAG = 2

_FIELD = descriptor_pb2.FieldDescriptorProto

LocationMap = Dict[Tuple[int, ...], descriptor_pb2.SourceCodeInfo.Location]


def find_annotated_fields(request) -> AnnotatedFields:
    """Collect the Go names of every field that should become a value slice.

    `request` is a CodeGeneratorRequest (anything exposing `proto_file`).
    Only top-level messages are inspected; fields of nested message types
    are not visited.
    """
    if request is None:
        raise InvalidInputError("request cannot be None")

    names: Set[str] = set()
    for proto_file in request.proto_file:
        names.update(_process_proto_file(proto_file))
    return AnnotatedFields.of(names)


def _process_proto_file(proto_file: descriptor_pb2.FileDescriptorProto) -> Iterable[str]:
    locations = build_location_map(
        proto_file.source_code_info if proto_file.HasField("source_code_info") else None
    )
    for msg_idx, message in enumerate(proto_file.message_type):
        yield from _process_message(message, locations, (FILE_MESSAGE_TYPE_TAG, msg_idx))


def _process_message(
    message: descriptor_pb2.DescriptorProto,
    locations: LocationMap,
    path: Tuple[int, ...],
) -> Iterable[str]:
    for field_idx, field in enumerate(message.field):
        location = locations.get(path + (MESSAGE_FIELD_TAG, field_idx))
        comments = location.leading_comments if location is not None else ""
        if should_use_value_slice(field, comments):
            yield to_go_field_name(field.name)


def build_location_map(
    source_info: Optional[descriptor_pb2.SourceCodeInfo],
) -> LocationMap:
    """Index source locations by their descriptor path."""
    if source_info is None:
        return {}
    return {tuple(loc.path): loc for loc in source_info.location}


def is_repeated_message(field: descriptor_pb2.FieldDescriptorProto) -> bool:
    return field.label == _FIELD.LABEL_REPEATED and field.type == _FIELD.TYPE_MESSAGE


def has_value_slice_marker(comments: Optional[str]) -> bool:
    if not comments:
        return False
    return any(marker in comments for marker in COMMENT_MARKERS)


def extension_setting(field: descriptor_pb2.FieldDescriptorProto) -> Optional[bool]:
    """Return the value-slice flag carried by the field's options, if any.

    The value_slice shorthand wins over field_opts. A field_opts extension
    whose value_slice is unset counts as no setting at all.
    """
    if not field.HasField("options"):
        return None
    opts = field.options
    if opts.HasExtension(options.value_slice):
        return opts.Extensions[options.value_slice]
    if opts.HasExtension(options.field_opts):
        structured = opts.Extensions[options.field_opts]
        if structured.HasField("value_slice"):
            return structured.value_slice
    return None


def should_use_value_slice(
    field: descriptor_pb2.FieldDescriptorProto,
    leading_comments: str = "",
) -> bool:
    if not is_repeated_message(field):
        return False
    setting = extension_setting(field)
    if setting is not None:
        return setting
    return has_value_slice_marker(leading_comments)

