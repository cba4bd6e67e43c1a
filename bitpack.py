from typing import Dict

from errors import CodeLookupError, DecodeError, InternalInvariantError, MalformedPaddingError

HEADER_BITS = 8 # width of the padding-amount header
MAX_PADDING = 8 # an already aligned bitstring still gets a full byte of padding


# Encoding side

def huffman_encode(data: bytes, code_map: Dict[int, str]) -> str: # data: input bytes to encode, code_map: dict of symbol -> Huffman code
    out = []
    for b in data:
        code = code_map.get(b)
        if code is None:
            raise CodeLookupError(f"symbol {b} has no code in the table")
        out.append(code)
    return "".join(out)

def pad_encoded_text(encoded_text: str) -> str:
    """
    Append 1-8 zero bits to reach a byte boundary and prepend the amount as an 8-bit header
    """
    extra_padding = 8 - (len(encoded_text) % 8)
    padded_info = format(extra_padding, "08b")
    return padded_info + encoded_text + "0" * extra_padding

def get_byte_array(padded_encoded_text: str) -> bytes:
    if len(padded_encoded_text) % 8 != 0:
        raise InternalInvariantError(
            f"padded bitstring has {len(padded_encoded_text)} bits, not a multiple of 8"
        )

    out = bytearray()
    for i in range(0, len(padded_encoded_text), 8):
        out.append(int(padded_encoded_text[i:i + 8], 2)) # first bit of the chunk -> MSB
    return bytes(out)

def pack_bits_from_codes(data: bytes, code_map: Dict[int, str]) -> bytes:
    """
    Converts Huffman codes into packed bytes: padding header byte, then the padded code bits
    """
    encoded_text = huffman_encode(data, code_map)
    return get_byte_array(pad_encoded_text(encoded_text))


# Decoding side

def bytes_to_bits(packed: bytes) -> str:
    return "".join(format(byte, "08b") for byte in packed)

def remove_padding(padded_encoded_text: str) -> str:
    if len(padded_encoded_text) < HEADER_BITS:
        raise MalformedPaddingError("stream is too short to hold a padding header")

    extra_padding = int(padded_encoded_text[:HEADER_BITS], 2)
    if extra_padding > MAX_PADDING:
        raise MalformedPaddingError(f"padding header {extra_padding} is outside 0-{MAX_PADDING}")

    payload = padded_encoded_text[HEADER_BITS:]
    if extra_padding > len(payload):
        raise MalformedPaddingError(
            f"padding header {extra_padding} exceeds the {len(payload)} payload bits"
        )
    return payload[:len(payload) - extra_padding]

def decode_text(encoded_text: str, reverse_map: Dict[str, int]) -> bytes:
    """
    Greedy prefix match: accumulate bits until they equal a code, emit its symbol, start over
    """
    max_len = max((len(code) for code in reverse_map), default=0)
    decoded = bytearray()
    current_code = ""

    for bit in encoded_text:
        current_code += bit
        symbol = reverse_map.get(current_code)
        if symbol is not None:
            decoded.append(symbol)
            current_code = ""
        elif len(current_code) >= max_len:
            raise DecodeError(f"bit path {current_code!r} matches no code in the table")

    if current_code:
        raise DecodeError(f"{len(current_code)} trailing bits do not form a complete code")

    return bytes(decoded)

def unpack_and_decode(packed: bytes, reverse_map: Dict[str, int]) -> bytes:
    encoded_text = remove_padding(bytes_to_bits(packed))
    return decode_text(encoded_text, reverse_map)
