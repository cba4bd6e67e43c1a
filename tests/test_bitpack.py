import pytest

from bitpack import (
    bytes_to_bits,
    decode_text,
    get_byte_array,
    huffman_encode,
    pack_bits_from_codes,
    pad_encoded_text,
    remove_padding,
    unpack_and_decode,
)
from errors import CodeLookupError, DecodeError, InternalInvariantError, MalformedPaddingError

CODES = {ord('a'): "1", ord('b'): "0"}
REVERSE = {"1": ord('a'), "0": ord('b')}


def test_encode_concatenates_in_input_order():
    assert huffman_encode(b"aabba", CODES) == "11001"


def test_encode_unknown_symbol():
    with pytest.raises(CodeLookupError):
        huffman_encode(b"abc", CODES)
    with pytest.raises(LookupError):
        huffman_encode(b"z", CODES)


def test_pad_unaligned():
    padded = pad_encoded_text("11001")
    assert padded == "00000011" + "11001" + "000"
    assert len(padded) % 8 == 0


def test_pad_aligned_gets_full_byte():
    padded = pad_encoded_text("10101010")
    assert padded[:8] == "00001000"
    assert padded[8:] == "10101010" + "00000000"


def test_pad_empty():
    assert pad_encoded_text("") == "00001000" + "00000000"


def test_byte_array_msb_first():
    assert get_byte_array("10000000" "00000001") == bytes([0x80, 0x01])


def test_byte_array_rejects_unaligned():
    with pytest.raises(InternalInvariantError):
        get_byte_array("1010")


def test_pack_example():
    assert pack_bits_from_codes(b"aabba", CODES) == bytes([0b00000011, 0b11001000])


def test_bytes_to_bits():
    assert bytes_to_bits(bytes([0x80, 0x01])) == "1000000000000001"
    assert bytes_to_bits(b"") == ""


def test_remove_padding_full_byte():
    assert remove_padding("00001000" "10101010" "00000000") == "10101010"


def test_remove_padding_zero_header():
    assert remove_padding("00000000" "1100") == "1100"


def test_remove_padding_header_out_of_range():
    with pytest.raises(MalformedPaddingError):
        remove_padding("00001001" + "0" * 16)


def test_remove_padding_longer_than_payload():
    with pytest.raises(MalformedPaddingError):
        remove_padding("00000111" "0000")


def test_remove_padding_missing_header():
    with pytest.raises(MalformedPaddingError):
        remove_padding("0101")


def test_decode_greedy():
    assert decode_text("11001", REVERSE) == b"aabba"


def test_decode_multi_bit_codes():
    reverse = {"0": 1, "10": 2, "110": 3, "111": 4}
    assert decode_text("0101101110", reverse) == bytes([1, 2, 3, 4, 1])


def test_decode_trailing_partial_code():
    reverse = {"0": 1, "10": 2, "11": 3}
    with pytest.raises(DecodeError):
        decode_text("0101", reverse)


def test_decode_path_matching_nothing():
    reverse = {"00": 1, "01": 2}
    with pytest.raises(DecodeError):
        decode_text("0011", reverse)


def test_decode_empty_table_with_bits():
    with pytest.raises(DecodeError):
        decode_text("1", {})


def test_unpack_and_decode_roundtrip_aligned_boundary():
    # 8 one-bit codes -> exactly one byte of code bits, so the header says 8
    data = b"abababab"
    packed = pack_bits_from_codes(data, CODES)
    assert packed[0] == 8
    assert len(packed) == 3
    assert packed[-1] == 0
    assert unpack_and_decode(packed, REVERSE) == data


def test_unpack_and_decode_single_symbol():
    packed = pack_bits_from_codes(b"aaaa", {ord('a'): "0"})
    assert packed == bytes([4, 0])
    assert unpack_and_decode(packed, {"0": ord('a')}) == b"aaaa"


def test_unpack_and_decode_empty_payload():
    packed = pack_bits_from_codes(b"", {})
    assert packed == bytes([8, 0])
    assert unpack_and_decode(packed, {}) == b""
