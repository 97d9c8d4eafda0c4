"""Base or helper classes used a lot for dealing with file formats.
"""
import io
import struct


class FormatError(ValueError):
    """The data doesn't look like the format it's supposed to be."""


class TruncatedError(FormatError):
    def __init__(self, position, wanted, available):
        super().__init__(
            "wanted {} bytes at offset {}, but only {} are left".format(
                wanted, position, available))
        self.position = position
        self.wanted = wanted
        self.available = available


class ByteReader:
    """A read cursor over an in-memory buffer.

    Partly implements the file interface, so it can be handed to construct's
    ``parse_stream``.  ``read`` behaves like a file and may come up short;
    ``read_exact`` and ``unpack`` raise ``TruncatedError`` instead.

    The buffer itself is never modified, so several readers can share one.
    """
    def __init__(self, data):
        self.data = memoryview(data).cast('B')
        self.pos = 0

    def __repr__(self):
        return "<{} at {} of {}>".format(
            type(self).__name__, self.pos, len(self.data))

    def __len__(self):
        return len(self.data)

    def read(self, n=-1):
        maxread = max(len(self.data) - self.pos, 0)
        if n < 0 or n > maxread:
            n = maxread
        data = bytes(self.data[self.pos:self.pos + n])
        self.pos += n
        return data

    def read_exact(self, n):
        available = max(len(self.data) - self.pos, 0)
        if n > available:
            raise TruncatedError(self.pos, n, available)
        return self.read(n)

    def seek(self, offset, whence=io.SEEK_SET):
        # Seeking past the end is allowed, like a real file; the next read
        # will just come up empty
        if whence == io.SEEK_CUR:
            offset += self.pos
        elif whence == io.SEEK_END:
            offset += len(self.data)
        if offset < 0:
            raise ValueError("negative seek position {}".format(offset))
        self.pos = offset
        return self.pos

    def tell(self):
        return self.pos

    def unpack(self, fmt):
        """Unpacks a struct format from the current position in the stream."""
        return struct.unpack(fmt, self.read_exact(struct.calcsize(fmt)))
