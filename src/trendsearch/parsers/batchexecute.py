"""
TrendSearch - batchexecute Frame Decoding

The TrendsUi RPC endpoint multiplexes several named calls into one text
body. After the anti-XSRF guard, the body is a sequence of lines; the
ones starting with `[` are JSON arrays of rows, the rest are chunk
length markers. A row carrying a response looks like

    ["wrb.fr", "<rpcId>", "<payload JSON encoded as a string>", ...]

so the payload needs a second json.loads pass.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, List, Optional
from urllib.parse import urlencode

from ..errors import UnexpectedResponseError
from ..http.prefix import strip_google_prefix

BATCHEXECUTE_PATH = "/_/TrendsUi/data/batchexecute"
BATCHEXECUTE_CONTENT_TYPE = "application/x-www-form-urlencoded;charset=UTF-8"


@dataclass(frozen=True)
class BatchexecuteFrame:
    rpc_id: str
    payload_text: str
    payload: Any
    raw: List[Any]


def encode_batchexecute_body(rpc_id: str, payload_json: str) -> str:
    """Form body for one RPC call: ``f.req=[[[rpcId, payload, null, "generic"]]]``."""
    f_req = json.dumps([[[rpc_id, payload_json, None, "generic"]]], separators=(",", ":"))
    return urlencode({"f.req": f_req})


def parse_frame_row(row: Any) -> Optional[BatchexecuteFrame]:
    if not isinstance(row, list) or len(row) < 3 or not isinstance(row[2], str):
        return None

    first, second, payload_text = row[0], row[1], row[2]
    if isinstance(second, str):
        rpc_id = second
    elif isinstance(first, str):
        rpc_id = first
    else:
        return None

    if not rpc_id:
        return None

    try:
        payload = json.loads(payload_text)
    except ValueError:
        payload = payload_text

    return BatchexecuteFrame(rpc_id=rpc_id, payload_text=payload_text, payload=payload, raw=row)


def parse_batchexecute(response_text: str) -> List[BatchexecuteFrame]:
    frames: List[BatchexecuteFrame] = []

    for line in strip_google_prefix(response_text).split("\n"):
        trimmed = line.strip()
        if not trimmed.startswith("["):
            continue

        try:
            parsed = json.loads(trimmed)
        except ValueError:
            continue

        rows = parsed if isinstance(parsed, list) else [parsed]
        for row in rows:
            frame = parse_frame_row(row)
            if frame is not None:
                frames.append(frame)

    return frames


def extract_batchexecute_payload(endpoint: str, response_text: str, rpc_id: str) -> Any:
    """Decoded payload of the first frame answering `rpc_id`."""
    for frame in parse_batchexecute(response_text):
        if frame.rpc_id == rpc_id:
            return frame.payload

    raise UnexpectedResponseError(
        endpoint=endpoint,
        message=f"RPC frame '{rpc_id}' was not found in batchexecute response.",
    )
