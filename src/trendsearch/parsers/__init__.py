from .batchexecute import (
    BatchexecuteFrame,
    encode_batchexecute_body,
    extract_batchexecute_payload,
    parse_batchexecute,
)
from .rows import find_deep_arrays, pick_rows
from .widgets import select_widget


__all__ = [
    "BatchexecuteFrame",
    "encode_batchexecute_body",
    "extract_batchexecute_payload",
    "parse_batchexecute",
    "find_deep_arrays",
    "pick_rows",
    "select_widget",
]
