""" redmoon.defaults - logic for finding default paths """

import os

DEFAULT_DB_URI = 'sqlite:///rm.sqlite'


def get_default_db_uri_with_origin():
    uri = os.environ.get('REDMOON_DB_ENGINE', None)
    origin = 'environment'

    if uri is None:
        uri = DEFAULT_DB_URI
        origin = 'default'

    return uri, origin


def get_default_db_uri():
    return get_default_db_uri_with_origin()[0]
