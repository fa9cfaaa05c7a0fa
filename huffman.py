from typing import Dict, Iterator, List, Optional

from errors import CorruptStreamError

FILLER_SYMBOL = ord('a') # padded into single-symbol inputs so the tree gets two leaves
ALT_FILLER_SYMBOL = ord('b') # used instead when the only real symbol is 'a'


class HuffmanNode: # Node for Huffman tree
    def __init__(self, symbol, frequency, left=None, right=None):
        self.symbol = symbol    # byte or None for internal nodes
        self.frequency = frequency
        self.left = left
        self.right = right

    def is_leaf(self) -> bool:
        return self.symbol is not None

    def __repr__(self):
        if self.is_leaf():
            return f"HuffmanNode({self.symbol}, {self.frequency})"
        return f"HuffmanNode(None, {self.frequency}, ...)"


def freq_table(data: bytes) -> Dict[int, int]: # symbol -> count, ascending by symbol
    ft: Dict[int, int] = {}
    for b in data:
        ft[b] = ft.get(b, 0) + 1
    return dict(sorted(ft.items()))


def add_filler_symbol(ft: Dict[int, int]) -> Dict[int, int]:
    """
    A single distinct symbol would give a one node tree and an empty code,
    so add a filler with frequency 1. It gets a code in the header but
    never shows up in the body.
    """
    if len(ft) != 1:
        return dict(ft)
    (only,) = ft
    filler = FILLER_SYMBOL if only != FILLER_SYMBOL else ALT_FILLER_SYMBOL
    padded = dict(ft)
    padded[filler] = 1
    return dict(sorted(padded.items()))


class Forest:
    """
    Working set of partial trees, sorted ascending by root frequency.

    list.sort is stable and merged trees are appended before re-sorting, so
    equal frequencies keep insertion order: leaves in symbol order first,
    then merged trees in the order they were created.
    """

    def __init__(self, ft: Dict[int, int]):
        self.trees: List[HuffmanNode] = [HuffmanNode(symbol, frequency) for symbol, frequency in ft.items()]
        self._sort()

    def _sort(self) -> None:
        self.trees.sort(key=lambda node: node.frequency)

    def __len__(self) -> int:
        return len(self.trees)

    def merge_lowest(self) -> HuffmanNode:
        left = self.trees.pop(0) # lowest frequency
        right = self.trees.pop(0) # second lowest
        merged = HuffmanNode(None, left.frequency + right.frequency, left, right)
        self.trees.append(merged) # behind existing trees of equal frequency, so it loses ties
        self._sort()
        return merged

    def reduce(self) -> Optional[HuffmanNode]:
        while len(self.trees) > 1:
            self.merge_lowest()
        return self.trees[0] if self.trees else None


def build_huffman_tree(frequency_table: Dict[int, int]) -> Optional[HuffmanNode]: # frequency_table: dict of symbol -> frequency
    return Forest(frequency_table).reduce() # root of the tree, None for an empty table


def bit_code(root: Optional[HuffmanNode], symbol: int) -> Optional[str]:
    """Path from root to the leaf holding symbol ('0' left, '1' right), None if absent."""
    stack = [(root, '')]
    while stack:
        node, path = stack.pop()
        if node is None:
            continue
        if node.is_leaf():
            if node.symbol == symbol:
                return path
            continue
        # right pushed first so the left subtree is searched first
        stack.append((node.right, path + '1'))
        stack.append((node.left, path + '0'))
    return None


def build_code_table(root: HuffmanNode, symbols) -> Dict[int, str]: # symbol -> code, one tree walk per symbol
    codes = {}
    for symbol in symbols:
        code = bit_code(root, symbol)
        if code is None:
            raise KeyError(f"symbol {symbol} is not in the tree")
        codes[symbol] = code
    return codes


def invert_code_table(codes: Dict[int, str]) -> Dict[str, int]:
    return {code: symbol for symbol, code in codes.items()}


def is_prefix_free(codes) -> bool:
    # after sorting, a code that prefixes another sorts right before one it prefixes
    ordered = sorted(codes)
    return all(not b.startswith(a) for a, b in zip(ordered, ordered[1:]))


def _walk(node: Optional[HuffmanNode], depth: int) -> Iterator[str]:
    if node is None:
        return
    label = '+' if not node.is_leaf() else repr(chr(node.symbol)) if 32 <= node.symbol < 127 else f'0x{node.symbol:02x}'
    yield f"{'--=' * depth}{label}({node.frequency})"
    yield from _walk(node.left, depth + 1)
    yield from _walk(node.right, depth + 1)


def describe_tree(root: Optional[HuffmanNode]) -> str: # debug dump, one node per line
    return '\n'.join(_walk(root, 0))


def huffman_encode(data: bytes, code_map: Dict[int, str]) -> str: # data: input bytes to encode, code_map: dict of symbol -> Huffman code
    return ''.join(code_map[byte] for byte in data)


def huffman_decode(bitstring: str, code_table: Dict[str, int]) -> bytes: # bitstring: '0'/'1' body, code_table: code -> symbol
    """
    Grows a candidate one bit at a time and emits a symbol on an exact
    match. Works because the codes are prefix-free: a match can't be the
    start of a longer code.
    """
    longest = max((len(code) for code in code_table), default=0)
    decoded = bytearray()
    candidate = ''
    for bit in bitstring:
        candidate += bit
        symbol = code_table.get(candidate)
        if symbol is not None:
            decoded.append(symbol)
            candidate = ''
        elif len(candidate) >= longest:
            raise CorruptStreamError(f"no code matches {candidate!r} after {len(decoded)} symbols")
    if candidate:
        raise CorruptStreamError(f"body ends in the middle of a code ({len(candidate)} dangling bits)")
    return bytes(decoded)
