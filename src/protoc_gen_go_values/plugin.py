"""Wrap protoc-gen-go and post-process its output."""

from __future__ import annotations

import subprocess
import sys
from typing import Callable, Optional, Sequence

from google.protobuf.compiler import plugin_pb2
from google.protobuf.message import DecodeError, EncodeError

from protoc_gen_go_values.config import DEFAULT_BASE_PLUGIN, DEFAULT_TIMEOUT, PluginConfig
from protoc_gen_go_values.errors import (
    InvalidInputError,
    SerializationFailureError,
    UpstreamFailureError,
)
from protoc_gen_go_values.parser.annotation_parser import find_annotated_fields
from protoc_gen_go_values.transform.go_transform import apply_transformations

PLUGIN_NAME = "protoc-gen-go-values"

BaseGenerator = Callable[
    [plugin_pb2.CodeGeneratorRequest], plugin_pb2.CodeGeneratorResponse
]


def _log(config: PluginConfig, message: str) -> None:
    if config.verbose:
        print(f"{PLUGIN_NAME}: {message}", file=sys.stderr)


def process_request(
    request: plugin_pb2.CodeGeneratorRequest,
    config: Optional[PluginConfig] = None,
    generator: Optional[BaseGenerator] = None,
) -> plugin_pb2.CodeGeneratorResponse:
    """Main plugin workflow: generate, find annotated fields, transform."""
    if request is None:
        raise InvalidInputError("request cannot be None")
    config = config or PluginConfig()

    # 1. Let the standard generator produce the Go code
    if generator is None:
        _log(config, f"running {' '.join(config.base_command)}")
        response = call_base_generator(request, config.base_command, config.timeout)
    else:
        response = generator(request)
    if response is None:
        raise UpstreamFailureError("base generator returned no response")
    _log(config, f"base generator produced {len(response.file)} file(s)")

    # 2. Resolve annotations from the same, unmodified request
    annotated = find_annotated_fields(request)
    if len(annotated):
        _log(config, f"value slices for: {', '.join(annotated.names())}")

    # 3. Rewrite the generated files
    apply_transformations(response.file, annotated, workers=config.workers)
    return response


def call_base_generator(
    request: plugin_pb2.CodeGeneratorRequest,
    command: Sequence[str] = (DEFAULT_BASE_PLUGIN,),
    timeout: Optional[float] = DEFAULT_TIMEOUT,
) -> plugin_pb2.CodeGeneratorResponse:
    """Run the base protoc plugin as a subprocess and parse its response."""
    command = list(command)
    if not command:
        raise UpstreamFailureError("no base generator command configured")
    name = command[0]

    try:
        completed = subprocess.run(
            command,
            input=request.SerializeToString(),
            capture_output=True,
            timeout=timeout,
            check=True,
        )
    except FileNotFoundError as e:
        raise UpstreamFailureError(
            f"'{name}' not found. Please install it and ensure it is in PATH."
        ) from e
    except subprocess.CalledProcessError as e:
        stderr = (e.stderr or b"").decode("utf-8", errors="ignore").strip()
        raise UpstreamFailureError(
            f"{name} failed with exit status {e.returncode}: {stderr}"
        ) from e
    except subprocess.TimeoutExpired as e:
        raise UpstreamFailureError(f"{name} timed out after {timeout} seconds") from e
    except OSError as e:
        raise UpstreamFailureError(f"failed to execute {name}: {e}") from e

    response = plugin_pb2.CodeGeneratorResponse()
    try:
        response.ParseFromString(completed.stdout)
    except DecodeError as e:
        raise UpstreamFailureError(f"failed to parse response from {name}: {e}") from e

    if response.HasField("error"):
        raise UpstreamFailureError(f"{name}: {response.error}")
    return response


def parse_request(data: bytes) -> plugin_pb2.CodeGeneratorRequest:
    request = plugin_pb2.CodeGeneratorRequest()
    try:
        request.ParseFromString(data)
    except DecodeError as e:
        raise InvalidInputError(f"failed to parse CodeGeneratorRequest: {e}") from e
    return request


def serialize_response(response: plugin_pb2.CodeGeneratorResponse) -> bytes:
    if response is None:
        raise InvalidInputError("response cannot be None")
    try:
        return response.SerializeToString()
    except EncodeError as e:
        raise SerializationFailureError(f"failed to serialize response: {e}") from e


def error_response(message: str) -> plugin_pb2.CodeGeneratorResponse:
    return plugin_pb2.CodeGeneratorResponse(error=message)
