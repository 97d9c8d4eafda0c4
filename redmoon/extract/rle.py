"""Walking a Redmoon data tree and pulling sprites out of its resource files.

The sprite folders each hold a pile of numbered .rle files (c0000042.rle and
so on).  The number in the file name is how the game's list files refer to a
resource file, so it's kept on every sprite as ``file_number``.
"""
import logging
from pathlib import Path

from .lib.base import FormatError
from .lib.color import write_to_png
from .lib.rle import ResourceFile

log = logging.getLogger(__name__)

# (kind, folder) for each sprite category.  Sounds live in Snd, but they're
# not sprites.
FOLDER_ENTRIES = (
    ('Bullets', 'Bul'),
    ('Icons', 'Ico'),
    ('Objects', 'Obj'),
    ('Tiles', 'Tle'),
    ('Interface', 'Int'),
)

UNKNOWN_FILE_NUMBER = 0xFFFF


def file_number_from_path(path):
    digits = ''.join(ch for ch in Path(path).stem if ch.isdecimal())
    if not digits:
        return UNKNOWN_FILE_NUMBER
    return int(digits)


def read_rle_file(path, file_number=None, *, strict=False):
    path = Path(path)
    if file_number is None:
        file_number = file_number_from_path(path)
    return ResourceFile(path.read_bytes(), file_number, strict=strict)


def read_rle_dir(folder, *, strict=False):
    """Yield a ResourceFile for every file in ``folder``, in name order."""
    for path in sorted(Path(folder).iterdir()):
        if not path.is_file():
            continue
        log.debug("reading %s", path)
        try:
            resource_file = read_rle_file(path, strict=strict)
        except FormatError:
            log.error("couldn't decode %s", path)
            raise
        yield resource_file


def extract_pngs(resource_file, dest, *, transparent=None):
    """Write every sprite with an image as ``<file number>-<index>.png`` under
    ``dest``.  Returns the paths written.
    """
    dest = Path(dest)
    written = []
    for sprite in resource_file:
        if sprite.is_sentinel or not sprite.width or not sprite.height:
            log.info("skipping sprite %d of file %d: no image",
                sprite.index, sprite.file_number)
            continue

        outfile = dest / "{}-{}.png".format(sprite.file_number, sprite.index)
        with outfile.open('wb') as f:
            write_to_png(sprite, f, transparent=transparent)
        written.append(outfile)

    return written
