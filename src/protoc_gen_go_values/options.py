"""Runtime registration of the protogo_values field options.

Mirrors proto/protogo_values/options.proto. The descriptor is added to the
default pool on import, so FieldOptions parsed from a CodeGeneratorRequest
afterwards expose the extensions instead of keeping them as unknown fields.
"""

from __future__ import annotations

from typing import Any, Dict

from google.protobuf import descriptor_pb2, descriptor_pool
from google.protobuf.internal import builder as _builder

PROTO_FILE_NAME = "protogo_values/options.proto"
PROTO_PACKAGE = "protogo_values"
GO_PACKAGE = "github.com/benjamin-rood/protogo-values/proto/protogo_values"

VALUE_SLICE_FIELD_NUMBER = 65001
FIELD_OPTS_FIELD_NUMBER = 65002

_FIELD = descriptor_pb2.FieldDescriptorProto
_EXTENDEE = ".google.protobuf.FieldOptions"


def build_file_descriptor_proto() -> descriptor_pb2.FileDescriptorProto:
    fdp = descriptor_pb2.FileDescriptorProto(
        name=PROTO_FILE_NAME,
        package=PROTO_PACKAGE,
        syntax="proto2",
        dependency=[descriptor_pb2.DESCRIPTOR.name],
    )
    fdp.options.go_package = GO_PACKAGE

    msg = fdp.message_type.add(name="FieldOptions")
    msg.field.add(
        name="value_slice",
        number=1,
        label=_FIELD.LABEL_OPTIONAL,
        type=_FIELD.TYPE_BOOL,
        json_name="valueSlice",
    )

    fdp.extension.add(
        name="value_slice",
        number=VALUE_SLICE_FIELD_NUMBER,
        label=_FIELD.LABEL_OPTIONAL,
        type=_FIELD.TYPE_BOOL,
        extendee=_EXTENDEE,
    )
    fdp.extension.add(
        name="field_opts",
        number=FIELD_OPTS_FIELD_NUMBER,
        label=_FIELD.LABEL_OPTIONAL,
        type=_FIELD.TYPE_MESSAGE,
        type_name=f".{PROTO_PACKAGE}.FieldOptions",
        extendee=_EXTENDEE,
    )
    return fdp


DESCRIPTOR = descriptor_pool.Default().AddSerializedFile(
    build_file_descriptor_proto().SerializeToString()
)

_symbols: Dict[str, Any] = {}
_builder.BuildMessageAndEnumDescriptors(DESCRIPTOR, _symbols)
_builder.BuildTopDescriptorsAndMessages(DESCRIPTOR, __name__, _symbols)

# protogo_values.FieldOptions message class.
FieldOptions = _symbols["FieldOptions"]

# Extension descriptors, usable with FieldOptions.Extensions[...].
value_slice = _symbols["value_slice"]
field_opts = _symbols["field_opts"]
