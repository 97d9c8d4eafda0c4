"""Packed pixel colors, and turning decoded sprites into PNGs.

Sprites store one r5g6b5 color per pixel, low byte first:
rrrrrggg gggbbbbb
"""
import itertools


def unpack_r5g6b5(datum):
    # Truncate rather than round, to match the game's own tools
    r = ((datum >> 11) & 0x1f) * 255 // 31
    g = ((datum >> 5) & 0x3f) * 255 // 63
    b = ((datum >> 0) & 0x1f) * 255 // 31
    return r, g, b


def decode_r5g6b5(data, *, start=0, count=None):
    if count is None:
        end = len(data)
    else:
        end = start + count * 2

    for i in range(start, end, 2):
        yield unpack_r5g6b5(data[i] + data[i + 1] * 256)


def decode_r5g6b5_alpha(data, *, transparent=0):
    """Like ``decode_r5g6b5``, but yields RGBA.  Pixels whose packed value is
    ``transparent`` come out fully transparent; pass None to keep everything
    opaque.

    Canvases start out zeroed and the game paints over them, so black (0) is
    the usual background.
    """
    for i in range(0, len(data), 2):
        datum = data[i] + data[i + 1] * 256
        r, g, b = unpack_r5g6b5(datum)
        yield r, g, b, 0 if datum == transparent else 255


def sprite_rows(sprite, *, transparent=None):
    """Yield each row of a sprite as a flat list of channel values, the way
    pypng likes them.
    """
    stride = sprite.width * 2
    for y in range(sprite.height):
        row = sprite.pixels[y * stride:(y + 1) * stride]
        if transparent is None:
            pixels = decode_r5g6b5(row)
        else:
            pixels = decode_r5g6b5_alpha(row, transparent=transparent)
        yield list(itertools.chain.from_iterable(pixels))


def write_to_png(sprite, f, *, transparent=None):
    """Write a decoded sprite to a file object as a PNG."""
    import png

    if sprite.is_sentinel:
        raise ValueError("sprite {} of file {} is oversized and has no image"
            .format(sprite.index, sprite.file_number))
    if not sprite.width or not sprite.height:
        raise ValueError("sprite {} of file {} is empty"
            .format(sprite.index, sprite.file_number))

    writer = png.Writer(
        width=sprite.width,
        height=sprite.height,
        greyscale=False,
        alpha=transparent is not None,
    )
    writer.write(f, sprite_rows(sprite, transparent=transparent))
