from typing import Dict, Tuple

import huffman as huff
from bitpack import pack_bits_from_codes, unpack_and_decode
from errors import ContainerFormatError, DecodeError

MAGIC = b"HUF1"
COUNT_BYTES = 2 # number of distinct symbols in the header
SYMBOL_BYTES = 1
FREQ_BYTES = 4 # per-symbol count, supports inputs up to 4GB
ENTRY_BYTES = SYMBOL_BYTES + FREQ_BYTES


def compress(data: bytes) -> Tuple[bytes, Dict[int, str]]:
    """
    Returns (packed bytes, code table). The packed bytes are not decodable without the table
    """
    if not data:
        return b"", {}

    codes, _ = huff.build_code_tables(huff.freq_table(data))
    return pack_bits_from_codes(data, codes), codes

def decompress(packed: bytes, reverse_map: Dict[str, int]) -> bytes:
    if not packed:
        return b""
    return unpack_and_decode(packed, reverse_map)


# Self-describing container: the frequency table travels with the payload
# and the decoder rebuilds the identical tree from it

def serialize_frequencies(frequency_table: Dict[int, int]) -> bytes:
    out = bytearray(MAGIC)
    out += len(frequency_table).to_bytes(COUNT_BYTES, byteorder="big")
    for symbol, count in frequency_table.items(): # table order decides tie-breaks, so it is preserved
        out += symbol.to_bytes(SYMBOL_BYTES, byteorder="big")
        out += count.to_bytes(FREQ_BYTES, byteorder="big")
    return bytes(out)

def deserialize_frequencies(blob: bytes) -> Tuple[Dict[int, int], int]:
    """
    Parse the container header. Returns (frequency table, offset of the payload)
    """
    if blob[:len(MAGIC)] != MAGIC:
        raise ContainerFormatError("missing container magic")

    offset = len(MAGIC)
    if len(blob) < offset + COUNT_BYTES:
        raise ContainerFormatError("header truncated (symbol count)")
    n_symbols = int.from_bytes(blob[offset:offset + COUNT_BYTES], byteorder="big")
    offset += COUNT_BYTES

    if n_symbols > 256:
        raise ContainerFormatError(f"{n_symbols} symbols is more than a byte alphabet holds")
    if len(blob) < offset + n_symbols * ENTRY_BYTES:
        raise ContainerFormatError("header truncated (frequency table)")

    frequency_table: Dict[int, int] = {}
    for _ in range(n_symbols):
        symbol = blob[offset]
        count = int.from_bytes(blob[offset + SYMBOL_BYTES:offset + ENTRY_BYTES], byteorder="big")
        offset += ENTRY_BYTES
        if symbol in frequency_table:
            raise ContainerFormatError(f"symbol {symbol} listed twice")
        if count == 0:
            raise ContainerFormatError(f"symbol {symbol} has a zero count")
        frequency_table[symbol] = count

    return frequency_table, offset

def compress_container(data: bytes) -> bytes:
    ft = huff.freq_table(data)
    header = serialize_frequencies(ft)
    if not ft:
        return header

    codes, _ = huff.build_code_tables(ft)
    return header + pack_bits_from_codes(data, codes)

def decompress_container(blob: bytes) -> bytes:
    ft, offset = deserialize_frequencies(blob)
    payload = blob[offset:]
    if not ft:
        if payload:
            raise ContainerFormatError("payload present but the frequency table is empty")
        return b""

    _, reverse_map = huff.build_code_tables(ft)
    decoded = unpack_and_decode(payload, reverse_map)

    expected = sum(ft.values())
    if len(decoded) != expected:
        raise DecodeError(f"decoded {len(decoded)} symbols, header promised {expected}")
    return decoded
