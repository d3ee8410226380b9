"""
Text artifact format for compressed output

    line 1: the encoded stream as literal '0'/'1' characters
    line 2: the code table as a JSON object, symbol -> code

Only the code table has to survive between compress and decompress runs.
"""

import json
import logging
from typing import Dict, Tuple

from huffman_codec import HuffmanError, is_prefix_free

logger = logging.getLogger(__name__)

BITS = frozenset("01")


class MalformedArtifactError(HuffmanError):
    pass


def _is_bits(s: str) -> bool:
    return set(s) <= BITS


def serialize_code_table(code_map: Dict[str, str]) -> str:
    # ensure_ascii escapes '\n' and friends, keeping the table on one line
    return json.dumps(code_map, sort_keys=True, ensure_ascii=True, separators=(",", ":"))


def deserialize_code_table(text: str) -> Dict[str, str]:
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedArtifactError(f"code table is not valid JSON: {exc}") from exc

    if not isinstance(raw, dict):
        raise MalformedArtifactError(f"code table must be a JSON object, got {type(raw).__name__}")

    for symbol, code in raw.items():
        if len(symbol) != 1:
            raise MalformedArtifactError(f"code table key {symbol!r} is not a single character")
        if not isinstance(code, str) or not code or not _is_bits(code):
            raise MalformedArtifactError(f"code for {symbol!r} is not a non-empty bit string: {code!r}")

    if not is_prefix_free(raw):
        raise MalformedArtifactError("code table is not prefix-free")

    return raw


def write_artifact(bitstring: str, code_map: Dict[str, str]) -> str:
    return f"{bitstring}\n{serialize_code_table(code_map)}"


def read_artifact(content: str) -> Tuple[str, Dict[str, str]]:
    bitstring, sep, table = content.partition("\n")
    if not sep:
        raise MalformedArtifactError("artifact has no code table line")
    bitstring = bitstring.rstrip("\r")
    if not _is_bits(bitstring):
        raise MalformedArtifactError("encoded stream contains characters other than '0' and '1'")

    code_map = deserialize_code_table(table)
    logger.debug("read artifact: %d bits, %d codes", len(bitstring), len(code_map))
    return bitstring, code_map
