"""Resource files to database."""
import fnmatch
import logging
from pathlib import Path

from redmoon.db import metadata, tables
from redmoon.extract.rle import FOLDER_ENTRIES, read_rle_dir

log = logging.getLogger(__name__)


def _get_folder_entries(patterns):
    """Returns the (kind, folder) entries whose kind matches one of the given
    patterns, case-insensitively.  No patterns means all of them.
    """
    if not patterns:
        return list(FOLDER_ENTRIES)

    patterns = [pattern.lower() for pattern in patterns]
    return [
        (kind, folder) for kind, folder in FOLDER_ENTRIES
        if any(fnmatch.fnmatchcase(kind.lower(), pattern)
            for pattern in patterns)
    ]


def sprite_row(kind, sprite):
    return tables.Sprite(
        type=kind,
        file_num=sprite.file_number,
        file_idx=sprite.index,
        length=sprite.length,
        offset_x=sprite.offset_x,
        offset_y=sprite.offset_y,
        width=sprite.width,
        height=sprite.height,
        image=sprite.pixels,
    )


def load(session, root, kinds=(), drop_tables=False, strict=False):
    """Load the sprites under a data directory into the given database session.

    Tables are created automatically.  Returns the number of sprites loaded.

    `session`
        SQLAlchemy session to use.

    `root`
        The directory holding the sprite folders (Bul, Ico, ...).

    `kinds`
        Sprite kinds to load, possibly with wildcards.  If omitted, all kinds
        are loaded.

    `drop_tables`
        If set to True, existing tables will be dropped first.

    `strict`
        Passed on to the decoder; reject paint runs that leave their row.

    Each kind is committed in its own transaction.  A file that fails to
    decode rolls back its kind's transaction and the error propagates.
    """
    root = Path(root)
    engine = session.get_bind()

    if drop_tables:
        log.info("dropping tables")
        metadata.drop_all(bind=engine)
    metadata.create_all(bind=engine)

    total = 0
    for kind, folder in _get_folder_entries(kinds):
        path = root / folder
        if not path.is_dir():
            log.warning("no %s folder at %s; skipping", kind, path)
            continue

        log.info("loading %s from %s", kind, path)
        count = 0
        try:
            for resource_file in read_rle_dir(path, strict=strict):
                session.add_all(
                    sprite_row(kind, sprite) for sprite in resource_file)
                count += len(resource_file)
            session.commit()
        except Exception:
            session.rollback()
            raise

        log.info("loaded %d %s sprites", count, kind)
        total += count

    return total
