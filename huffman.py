import heapq
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

@dataclass
class HuffmanTree: # arena of nodes, children referenced by index (-1 = no child)
    symbols: List[Optional[int]] = field(default_factory=list)  # byte for leaves, None for internal nodes
    frequencies: List[int] = field(default_factory=list)
    left: List[int] = field(default_factory=list)
    right: List[int] = field(default_factory=list)
    root: int = -1

    def add_node(self, symbol, frequency, left=-1, right=-1) -> int:
        self.symbols.append(symbol)
        self.frequencies.append(frequency)
        self.left.append(left)
        self.right.append(right)
        return len(self.symbols) - 1

    def is_leaf(self, node: int) -> bool:
        return self.left[node] == -1 and self.right[node] == -1

    def __len__(self):
        return len(self.symbols)


def freq_table(data: bytes) -> Dict[int, int]: # symbol -> count, keys in order of first occurrence
    ft: Dict[int, int] = {}
    for b in data:
        ft[b] = ft.get(b, 0) + 1
    return ft

def build_huffman_tree(frequency_table: Dict[int, int]) -> HuffmanTree: # frequency_table: dict of symbol -> frequency
    tree = HuffmanTree()

    # Heap entries are (frequency, sequence, node). Equal frequencies pop in sequence order:
    # leaves in table order first, then merged nodes in the order they were created
    priority_queue: List[Tuple[int, int, int]] = []
    for sequence, (symbol, frequency) in enumerate(frequency_table.items()):
        node = tree.add_node(symbol, frequency)
        priority_queue.append((frequency, sequence, node))
    heapq.heapify(priority_queue)

    if not priority_queue:
        return tree # empty input -> no root

    sequence = len(priority_queue)
    while len(priority_queue) > 1:
        left_freq, _, left = heapq.heappop(priority_queue) # first popped -> left ('0')
        right_freq, _, right = heapq.heappop(priority_queue) # second popped -> right ('1')
        merged = tree.add_node(None, left_freq + right_freq, left, right)
        heapq.heappush(priority_queue, (left_freq + right_freq, sequence, merged))
        sequence += 1

    tree.root = priority_queue[0][2]
    return tree

def generate_huffman_codes(tree: HuffmanTree) -> Dict[int, str]: # symbol -> bit string
    codes: Dict[int, str] = {}
    if tree.root == -1:
        return codes

    # A lone leaf has no branch to walk; it still needs one bit per symbol to be packable
    if tree.is_leaf(tree.root):
        codes[tree.symbols[tree.root]] = "0"
        return codes

    stack = [(tree.root, "")]
    while stack:
        node, current_code = stack.pop()
        if tree.is_leaf(node):
            codes[tree.symbols[node]] = current_code
            continue
        # right pushed first so the left subtree is visited first
        stack.append((tree.right[node], current_code + "1"))
        stack.append((tree.left[node], current_code + "0"))

    return codes

def reverse_codes(codes: Dict[int, str]) -> Dict[str, int]:
    return {code: symbol for symbol, code in codes.items()}

def build_code_tables(frequency_table: Dict[int, int]) -> Tuple[Dict[int, str], Dict[str, int]]:
    """
    Frequency table -> (code table, reverse table). The tree is discarded afterwards
    """
    codes = generate_huffman_codes(build_huffman_tree(frequency_table))
    return codes, reverse_codes(codes)
