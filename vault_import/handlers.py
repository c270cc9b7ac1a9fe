"""
HTTP adapter — exposes the importer as a JSON POST endpoint on aiohttp.

Authentication is done upstream: a middleware must store the verified subject
under ``request[SUBJECT_KEY]`` before this handler runs.

The body is read against ``ImportConfig.max_body_size`` rather than the
application's ``client_max_size``, so the bundle limits stay reachable
without enlarging the limit for every other route.
"""
import logging
from typing import Any, Optional

import orjson
from aiohttp import web

from .conf import IMPORT_PATH, SUBJECT_KEY
from .errors import BundleValidationError, VaultImportError
from .importer import ImportConfig, VaultImporter
from .models import ImportBundle

logger = logging.getLogger("vault.import")

DB_POOL_KEY = web.AppKey("vault.db_pool", object)
CONFIG_KEY = web.AppKey("vault.import_config", ImportConfig)

_CHUNK_SIZE = 64 * 1024


def _dumps(obj: Any) -> str:
    return orjson.dumps(obj).decode("utf-8")


def _error_response(err: VaultImportError) -> web.Response:
    return web.json_response(
        {"message": err.public_message},
        status=err.status,
        dumps=_dumps,
    )


async def read_body(request: web.Request, limit: int) -> bytes:
    """Read the whole request body, refusing more than ``limit`` bytes.

    Raises:
        BundleValidationError: If the body exceeds ``limit``.
    """
    too_large = BundleValidationError(
        f"Import payload exceeds {limit} bytes"
    )
    if request.content_length is not None and request.content_length > limit:
        raise too_large
    body = bytearray()
    async for chunk in request.content.iter_chunked(_CHUNK_SIZE):
        body.extend(chunk)
        if len(body) > limit:
            raise too_large
    return bytes(body)


async def import_data(request: web.Request) -> web.Response:
    subject = request.get(SUBJECT_KEY)
    if not subject:
        raise web.HTTPUnauthorized()

    config = request.app.get(CONFIG_KEY) or ImportConfig()
    importer = VaultImporter(request.app[DB_POOL_KEY], config)
    try:
        raw = await read_body(request, config.max_body_size)
        bundle = ImportBundle.from_json(raw)
        await importer.import_bundle(bundle, subject)
    except VaultImportError as err:
        logger.debug(
            "Import rejected for user=%s with status %d", subject, err.status,
        )
        return _error_response(err)
    return web.json_response(None, dumps=_dumps)


def setup_import_routes(
    app: web.Application,
    db_pool: Any,
    config: Optional[ImportConfig] = None,
    path: str = IMPORT_PATH,
) -> None:
    """Register the import endpoint and its collaborators on ``app``."""
    app[DB_POOL_KEY] = db_pool
    app[CONFIG_KEY] = config or ImportConfig.from_env()
    app.router.add_post(path, import_data)
