"""Operation telemetry helpers."""

from .jsonl import append_jsonl, operation_record

__all__ = ["append_jsonl", "operation_record"]
