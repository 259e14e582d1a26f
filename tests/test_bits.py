from xmpptrace.utils.bits import ByteOrder, bits_to_string, bytes_to_hex, bytes_to_int


def test_big_and_little_endian():
    buf = b"\x01\x02\x03\x04"
    assert bytes_to_int(buf, 0, 2, ByteOrder.BIG_ENDIAN) == 0x0102
    assert bytes_to_int(buf, 0, 2, ByteOrder.LITTLE_ENDIAN) == 0x0201
    assert bytes_to_int(buf, 1, 3, ByteOrder.BIG_ENDIAN) == 0x020304


def test_high_bytes_are_unsigned():
    assert bytes_to_int(b"\xff\xff\xff\xff", 0, 4, ByteOrder.BIG_ENDIAN) == 0xFFFFFFFF
    assert bytes_to_int(b"\x80", 0, 1, ByteOrder.LITTLE_ENDIAN) == 0x80


def test_seven_bytes_is_the_limit():
    buf = bytes(range(1, 9))
    assert bytes_to_int(buf, 0, 7, ByteOrder.BIG_ENDIAN) == 0x01020304050607
    assert bytes_to_int(buf, 0, 8, ByteOrder.BIG_ENDIAN) == -1


def test_out_of_range_span_returns_sentinel():
    buf = b"\x01\x02"
    assert bytes_to_int(buf, 1, 2, ByteOrder.BIG_ENDIAN) == -1
    assert bytes_to_int(buf, 0, 0, ByteOrder.BIG_ENDIAN) == -1
    assert bytes_to_int(buf, -1, 1, ByteOrder.BIG_ENDIAN) == -1


def test_hex_dump_breaks_every_four_bytes():
    assert bytes_to_hex(b"\x01\x02\x03\x04\x05", 0, 5) == "01 02 03 04 \n05 "


def test_bit_dump_is_lsb_first():
    assert bits_to_string(b"\x01", 0, 8) == "10000000 "
    assert bits_to_string(b"\xff\x00\x00\x00", 0, 32) == (
        "11111111 00000000 00000000 00000000 \n"
    )
