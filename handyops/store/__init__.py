"""
Record store package

``init_stores`` picks the backend named by ``RECORD_STORE`` and attaches one
store per collection to the app; request handlers fetch them with
``get_stores``.
"""
import logging
from collections import namedtuple

import requests
from flask import current_app

from .base import COLLECTIONS, RecordStore
from .memory import MemoryRecordStore
from .remote import RemoteRecordStore

logger = logging.getLogger(__name__)

Stores = namedtuple('Stores', COLLECTIONS)

_EXTENSION_KEY = 'handyops.stores'


def build_sql_stores():
    from handyops.models import Client, Communication, Job, Review, Service
    from .sql import SQLRecordStore

    return Stores(
        jobs=SQLRecordStore(Job),
        clients=SQLRecordStore(Client),
        services=SQLRecordStore(Service),
        communications=SQLRecordStore(Communication),
        reviews=SQLRecordStore(Review),
    )


def build_memory_stores():
    return Stores(*(MemoryRecordStore() for _ in COLLECTIONS))


def build_remote_stores(config):
    base_url = config.get('REMOTE_STORE_URL')
    if not base_url:
        raise RuntimeError('REMOTE_STORE_URL must be set when RECORD_STORE=remote')

    session = requests.Session()
    field_maps = config.get('REMOTE_FIELD_MAPS') or {}
    return Stores(*(
        RemoteRecordStore(
            base_url,
            collection,
            session=session,
            api_key=config.get('REMOTE_STORE_API_KEY'),
            timeout=config.get('REMOTE_STORE_TIMEOUT', 10),
            field_map=field_maps.get(collection),
        )
        for collection in COLLECTIONS
    ))


def init_stores(app):
    """Build the configured record stores and attach them to ``app``"""
    backend = app.config.get('RECORD_STORE', 'sql')
    if backend == 'sql':
        stores = build_sql_stores()
    elif backend == 'memory':
        stores = build_memory_stores()
    elif backend == 'remote':
        stores = build_remote_stores(app.config)
    else:
        raise RuntimeError(f'Unknown RECORD_STORE backend: {backend}')

    logger.info('Using %s record store', backend)
    app.extensions[_EXTENSION_KEY] = stores
    return stores


def get_stores():
    """Record stores of the current app"""
    return current_app.extensions[_EXTENSION_KEY]


__all__ = [
    'COLLECTIONS',
    'RecordStore',
    'MemoryRecordStore',
    'RemoteRecordStore',
    'Stores',
    'build_sql_stores',
    'build_memory_stores',
    'build_remote_stores',
    'init_stores',
    'get_stores',
]
