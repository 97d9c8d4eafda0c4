"""Support for reading the RLE "Resource File" sprite containers used by
Redmoon Online.

A resource file is a header, a table of absolute offsets (zero meaning "no
sprite in this slot"), and at each offset a fixed-size sprite header followed
by a little opcode stream that paints 16-bit r5g6b5 pixels onto a canvas.
"""
import logging

import attr
import construct as c

from .base import ByteReader, FormatError, TruncatedError

log = logging.getLogger(__name__)

IDENTIFIER = b'Resource File\x00'

# Sprites this big or bigger are garbage (or placeholders); don't allocate
# canvases for them
MAX_DIMENSION = 8000
SENTINEL_PIXELS = b'\x00\x00'

OP_END = 0x00
OP_PAINT = 0x01
OP_MOVE_X = 0x02
OP_NEXT_LINE = 0x03


rle_header_struct = c.Struct(
    'unknown' / c.Int32ul,  # next free offset?
    'count' / c.Int32ul,
)
resource_header_struct = c.Struct(
    'length' / c.Int32ul,
    'offset_x' / c.Int32ul,
    'offset_y' / c.Int32ul,
    'width' / c.Int32ul,
    'height' / c.Int32ul,
    'reserved' / c.Array(4, c.Int32ul),
)


class MissingIdentifierError(FormatError):
    pass


class InvalidIdentifierEncodingError(FormatError):
    pass


class UnknownOpcodeError(FormatError):
    def __init__(self, offset, opcode):
        super().__init__(
            "unknown opcode 0x{:02x} at offset {}".format(opcode, offset))
        self.offset = offset
        self.opcode = opcode


class CanvasOverflowError(FormatError):
    pass


@attr.s(frozen=True)
class Sprite:
    file_number = attr.ib()
    index = attr.ib()
    offset = attr.ib()
    length = attr.ib()
    offset_x = attr.ib()
    offset_y = attr.ib()
    width = attr.ib()
    height = attr.ib()
    reserved = attr.ib(converter=tuple)
    pixels = attr.ib(repr=False)

    @property
    def is_sentinel(self):
        return self.width >= MAX_DIMENSION or self.height >= MAX_DIMENSION


def _parse_struct(struct, reader):
    start = reader.tell()
    try:
        return struct.parse_stream(reader)
    except c.StreamError as exc:
        raise TruncatedError(
            start, struct.sizeof(), max(len(reader) - start, 0)) from exc


def _check_identifier(data):
    if len(data) < len(IDENTIFIER):
        raise MissingIdentifierError(
            "file is only {} bytes long".format(len(data)))

    magic = bytes(data[:len(IDENTIFIER)])
    try:
        magic.decode('utf8')
    except UnicodeDecodeError as exc:
        raise InvalidIdentifierEncodingError(
            "identifier {!r} is not text".format(magic)) from exc

    # NOTE: the format notes say this ends in a newline, but every file seen so
    # far has a NUL here
    if magic != IDENTIFIER:
        raise MissingIdentifierError(
            "expected {!r}, got {!r}".format(IDENTIFIER, magic))


def _halve(delta):
    # Move deltas are in bytes; round toward zero like C would
    if delta < 0:
        return -(-delta // 2)
    return delta // 2


def decode_pixels(reader, width, height, *, strict=False):
    """Run the opcode stream at the reader's position, painting onto a fresh
    ``width`` x ``height`` canvas of packed pixels.  Returns the canvas as a
    bytearray and leaves the reader just past the end opcode.

    Paint runs are addressed as ``y * 2 * width + x * 2`` and are never
    clipped to the row, so a run that goes past the right edge carries on into
    the next row, and the cursor's ``x`` survives a next-line opcode.  Sample
    files depend on both.  With ``strict``, a run that leaves its row is an
    error instead.
    """
    canvas = bytearray(width * height * 2)
    x = y = 0
    while True:
        position = reader.tell()
        opcode, = reader.unpack('<B')

        if opcode == OP_END:
            return canvas

        elif opcode == OP_PAINT:
            count, = reader.unpack('<L')
            data = reader.read_exact(count * 2)
            if not count:
                continue

            if strict and (x < 0 or x + count > width or y >= height):
                raise CanvasOverflowError(
                    "paint of {} pixels at ({}, {}) at offset {} leaves a "
                    "{}x{} canvas".format(
                        count, x, y, position, width, height))

            start = y * 2 * width + x * 2
            end = start + count * 2
            if start < 0 or end > len(canvas):
                raise CanvasOverflowError(
                    "paint of {} pixels at ({}, {}) at offset {} runs off the "
                    "end of a {}x{} canvas".format(
                        count, x, y, position, width, height))

            canvas[start:end] = data
            x += count

        elif opcode == OP_MOVE_X:
            delta, = reader.unpack('<l')
            x += _halve(delta)

        elif opcode == OP_NEXT_LINE:
            y += 1

        else:
            raise UnknownOpcodeError(position, opcode)


class ResourceFile:
    """A parsed resource file.  Acts like a sequence of its sprites.

    Empty slots in the offset table don't produce a sprite, so a sprite's
    position in this sequence isn't its index; use ``Sprite.index``.
    """
    def __init__(self, data, file_number=0, *, strict=False):
        self.file_number = file_number

        _check_identifier(data)
        reader = ByteReader(data)
        reader.seek(len(IDENTIFIER))

        header = _parse_struct(rle_header_struct, reader)
        self.unknown = header.unknown
        offset_table = _parse_struct(
            c.Array(header.count, c.Int32ul), reader)
        self.offsets = tuple(offset_table)

        self.sprites = []
        for index, offset in enumerate(self.offsets):
            if offset == 0:
                # Empty slot; the index still counts
                continue

            reader.seek(offset)
            self.sprites.append(
                self._read_sprite(reader, index, offset, strict=strict))

    def __repr__(self):
        return "<{} {} with {} sprites>".format(
            type(self).__name__, self.file_number, len(self.sprites))

    def __len__(self):
        return len(self.sprites)

    def __iter__(self):
        return iter(self.sprites)

    def __getitem__(self, key):
        return self.sprites[key]

    def _read_sprite(self, reader, index, offset, *, strict):
        header = _parse_struct(resource_header_struct, reader)

        if header.width < MAX_DIMENSION and header.height < MAX_DIMENSION:
            pixels = bytes(decode_pixels(
                reader, header.width, header.height, strict=strict))
        else:
            log.debug(
                "file %s sprite %d is oversized (%dx%d); skipping its pixels",
                self.file_number, index, header.width, header.height)
            pixels = SENTINEL_PIXELS

        return Sprite(
            file_number=self.file_number,
            index=index,
            offset=offset,
            length=header.length,
            offset_x=header.offset_x,
            offset_y=header.offset_y,
            width=header.width,
            height=header.height,
            reserved=header.reserved,
            pixels=pixels,
        )


def parse_rle(file_number, data, *, strict=False):
    """Parse a whole resource file held in memory.

    Any malformed sprite aborts the whole file; a ``FormatError`` subclass is
    raised and nothing is returned.
    """
    return ResourceFile(data, file_number, strict=strict)
