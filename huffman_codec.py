import heapq
import logging
import math
from typing import Dict, Optional, Tuple

logger = logging.getLogger(__name__)

SINGLE_SYMBOL_CODE = "0"  # a lone leaf has no root-to-leaf path, so it gets a one-bit code


class HuffmanError(ValueError):
    """Base class for every failure raised by the codec and its collaborators."""


class EmptyInputError(HuffmanError):
    pass


class MissingSymbolError(HuffmanError):
    def __init__(self, symbol: str):
        super().__init__(f"symbol {symbol!r} has no entry in the code table")
        self.symbol = symbol


class UnmatchedBitsError(HuffmanError):
    def __init__(self, offset: int, remaining: str):
        preview = remaining if len(remaining) <= 16 else remaining[:16] + "..."
        super().__init__(f"no code matches the bits at offset {offset}: {preview!r}")
        self.offset = offset


class HuffmanNode: # Node for Huffman tree
    def __init__(self, symbol: Optional[str], frequency: int,
                 left: "Optional[HuffmanNode]" = None, right: "Optional[HuffmanNode]" = None):
        self.symbol = symbol    # character, or None for internal nodes
        self.frequency = frequency
        self.left = left
        self.right = right

    @classmethod
    def merge(cls, left: "HuffmanNode", right: "HuffmanNode") -> "HuffmanNode":
        # internal nodes only come from here, so they always carry two children
        return cls(None, left.frequency + right.frequency, left, right)

    @property
    def is_leaf(self) -> bool:
        return self.symbol is not None

    def __lt__(self, other):
        return self.frequency < other.frequency # allows heapq to maintain the min-heap property based on frequency

    def __repr__(self):
        if self.is_leaf:
            return f"HuffmanNode({self.symbol!r}, {self.frequency})"
        return f"HuffmanNode(None, {self.frequency}, {self.left!r}, {self.right!r})"


def frequency_table(text: str) -> Dict[str, int]:
    ft: Dict[str, int] = {}
    for ch in text:
        ft[ch] = ft.get(ch, 0) + 1
    return ft


def build_huffman_tree(frequencies: Dict[str, int]) -> HuffmanNode: # frequencies: dict of symbol -> count
    if not frequencies:
        raise EmptyInputError("cannot build a Huffman tree from an empty frequency table")

    priority_queue = [HuffmanNode(symbol, frequency) for symbol, frequency in frequencies.items()]
    heapq.heapify(priority_queue)

    while len(priority_queue) > 1:
        left = heapq.heappop(priority_queue)
        right = heapq.heappop(priority_queue)
        heapq.heappush(priority_queue, HuffmanNode.merge(left, right))

    root = priority_queue[0]
    logger.debug("built Huffman tree over %d symbols (total frequency %d)", len(frequencies), root.frequency)
    return root


def generate_huffman_codes(root: HuffmanNode) -> Dict[str, str]: # root: root of the Huffman tree
    if root.is_leaf:
        return {root.symbol: SINGLE_SYMBOL_CODE}

    codes: Dict[str, str] = {}

    def generate_codes_helper(node, current_code):
        if node.is_leaf:
            codes[node.symbol] = current_code
            return

        generate_codes_helper(node.left, current_code + '0')
        generate_codes_helper(node.right, current_code + '1')

    generate_codes_helper(root, '')
    return codes


def huffman_encode(text: str, code_map: Dict[str, str]) -> str:
    try:
        return ''.join(code_map[ch] for ch in text)
    except KeyError as exc:
        raise MissingSymbolError(exc.args[0]) from None


def _inverse_table(code_map: Dict[str, str]) -> Dict[str, str]:
    inverse: Dict[str, str] = {}
    for symbol, code in code_map.items():
        if code in inverse:
            raise HuffmanError(f"code {code!r} is assigned to both {inverse[code]!r} and {symbol!r}")
        inverse[code] = symbol
    return inverse


def huffman_decode(bitstring: str, code_map: Dict[str, str]) -> str:
    """
    Decode a bit string by greedy longest-prefix matching against the inverse code table.

    For a prefix-free table at most one code can match at any offset, so the longest
    match is simply the only one.
    """
    inverse = _inverse_table(code_map)
    max_len = max((len(code) for code in inverse), default=0)

    decoded = []
    pos = 0
    end = len(bitstring)
    while pos < end:
        for length in range(min(max_len, end - pos), 0, -1):
            symbol = inverse.get(bitstring[pos:pos + length])
            if symbol is not None:
                decoded.append(symbol)
                pos += length
                break
        else:
            raise UnmatchedBitsError(pos, bitstring[pos:])

    return ''.join(decoded)


def huffman_compress(text: str) -> Tuple[str, Dict[str, str]]:
    """Run the forward pipeline and return (encoded bits, code table)."""
    frequencies = frequency_table(text)
    root = build_huffman_tree(frequencies)
    codes = generate_huffman_codes(root)
    bits = huffman_encode(text, codes)
    logger.debug("encoded %d symbols into %d bits", len(text), len(bits))
    return bits, codes


def huffman_decompress(bitstring: str, code_map: Dict[str, str]) -> str:
    return huffman_decode(bitstring, code_map)


# Code table properties

def is_prefix_free(code_map: Dict[str, str]) -> bool:
    # after sorting, a code that prefixes another sorts directly before one of its extensions
    ordered = sorted(code_map.values())
    return all(not b.startswith(a) for a, b in zip(ordered, ordered[1:]))


def average_code_length(code_map: Dict[str, str], frequencies: Dict[str, int]) -> float:
    total = sum(frequencies.values())
    if total == 0:
        return 0.0
    return sum(len(code_map[s]) * f for s, f in frequencies.items()) / total


def shannon_entropy(frequencies: Dict[str, int]) -> float:
    total = sum(frequencies.values())
    if total == 0:
        return 0.0
    return -sum((f / total) * math.log2(f / total) for f in frequencies.values())
