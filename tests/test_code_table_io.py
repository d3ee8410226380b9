import json

import pytest

from code_table_io import (
    MalformedArtifactError,
    deserialize_code_table,
    read_artifact,
    serialize_code_table,
    write_artifact,
)
from huffman_codec import HuffmanError, huffman_compress, huffman_decode


def test_serialize_round_trip():
    _, codes = huffman_compress("abracadabra")
    assert deserialize_code_table(serialize_code_table(codes)) == codes


def test_serialized_table_is_one_line():
    _, codes = huffman_compress("a\nb\r\nc\t\"d\\")
    text = serialize_code_table(codes)
    assert "\n" not in text and "\r" not in text
    assert deserialize_code_table(text) == codes


def test_serialization_is_deterministic():
    assert serialize_code_table({"b": "1", "a": "0"}) == serialize_code_table({"a": "0", "b": "1"})


def test_non_ascii_symbols():
    codes = {"☃": "0", "é": "10", "😀": "11"}
    assert deserialize_code_table(serialize_code_table(codes)) == codes


def test_artifact_layout():
    assert write_artifact("0110", {"a": "0", "b": "1"}) == '0110\n{"a":"0","b":"1"}'


def test_artifact_round_trip():
    text = "line one\nline two\n"
    bits, codes = huffman_compress(text)
    got_bits, got_codes = read_artifact(write_artifact(bits, codes))
    assert got_bits == bits
    assert got_codes == codes
    assert huffman_decode(got_bits, got_codes) == text


def test_artifact_tolerates_trailing_newline():
    bits, codes = read_artifact('01\n{"a":"0","b":"1"}\n')
    assert bits == "01"
    assert codes == {"a": "0", "b": "1"}


def test_artifact_tolerates_crlf_after_bits():
    bits, _ = read_artifact('01\r\n{"a":"0","b":"1"}')
    assert bits == "01"


@pytest.mark.parametrize("content", [
    "0101",                        # no table line
    "",                            # nothing at all
    "01a1\n{\"a\":\"0\"}",         # stray character in the bit line
    "01\nnot json",
    "01\n[\"0\", \"1\"]",
    "01\n{\"ab\":\"0\"}",          # key longer than one character
    "01\n{\"\":\"0\"}",
    "01\n{\"a\":\"\"}",            # empty code
    "01\n{\"a\":\"012\"}",
    "01\n{\"a\":0}",
    "01\n{\"a\":\"0\",\"b\":\"01\"}",  # not prefix-free
])
def test_malformed_artifacts(content):
    with pytest.raises(MalformedArtifactError):
        read_artifact(content)


def test_malformed_artifact_is_a_huffman_error():
    with pytest.raises(HuffmanError):
        deserialize_code_table("{")


def test_deserialize_accepts_whitespace():
    assert deserialize_code_table(json.dumps({"a": "0", "b": "1"}, indent=2)) == {"a": "0", "b": "1"}
