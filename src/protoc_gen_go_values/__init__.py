"""protoc plugin that emits value slices for annotated repeated message fields."""

__version__ = "0.3.0"
