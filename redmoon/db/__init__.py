from sqlalchemy import engine_from_config, orm

from ..defaults import get_default_db_uri
from .tables import metadata


def connect(uri=None, session_args={}, engine_args={}, engine_prefix=''):
    """Connects to the requested URI.  Returns a session object.

    With the URI omitted, uses the ``REDMOON_DB_ENGINE`` environment variable,
    or failing that an SQLite database in the current directory.
    """

    # If we didn't get a uri, fall back to the default
    if uri is None:
        uri = engine_args.get(engine_prefix + 'url', None)
    if uri is None:
        uri = get_default_db_uri()

    engine_args = dict(engine_args)
    engine_args[engine_prefix + 'url'] = uri
    engine = engine_from_config(engine_args, prefix=engine_prefix)

    all_session_args = dict(autoflush=True, bind=engine)
    all_session_args.update(session_args)
    sm = orm.sessionmaker(**all_session_args)
    return orm.scoped_session(sm)
