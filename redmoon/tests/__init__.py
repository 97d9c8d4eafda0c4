import struct

from redmoon.extract.lib.rle import IDENTIFIER

# test support code

BLANK = b'\x00\x00'


def sprite_header(width, height, *, length=0, offset_x=0, offset_y=0,
                  reserved=(0, 0, 0, 0)):
    return struct.pack('<9L', length, offset_x, offset_y, width, height,
                       *reserved)


def sprite_record(width, height, stream, **header):
    """A sprite header followed by a raw opcode stream."""
    return sprite_header(width, height, **header) + bytes(stream)


def encode_pixels(width, height, pixels):
    """Encode a packed canvas as an opcode stream.  Blank runs are skipped;
    before each painted run, a relative move takes x from wherever the last
    run left it to the run's first column (no move if it's already there).
    Next-line doesn't reset x, so the first run of a row usually moves left.
    """
    out = bytearray()
    x = 0
    for y in range(height):
        if y:
            out += b'\x03'
        row = pixels[y * width * 2:(y + 1) * width * 2]
        col = 0
        while col < width:
            if row[col * 2:col * 2 + 2] == BLANK:
                col += 1
                continue

            start = col
            while col < width and row[col * 2:col * 2 + 2] != BLANK:
                col += 1
            if start != x:
                out += struct.pack('<Bl', 0x02, (start - x) * 2)
            out += struct.pack('<BL', 0x01, col - start)
            out += row[start * 2:col * 2]
            x = col

    out += b'\x00'
    return bytes(out)


def build_rle(records, *, unknown=0):
    """Lay out a resource file.  Each record is the bytes of one sprite, or
    None for an empty slot.
    """
    offsets = []
    body = bytearray()
    pos = len(IDENTIFIER) + 8 + 4 * len(records)
    for record in records:
        if record is None:
            offsets.append(0)
            continue
        offsets.append(pos)
        body += record
        pos += len(record)

    return (
        IDENTIFIER
        + struct.pack('<LL', unknown, len(records))
        + struct.pack('<{}L'.format(len(records)), *offsets)
        + bytes(body)
    )
