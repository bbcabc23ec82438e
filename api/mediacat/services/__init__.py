from . import catalog_keys, errors, identifiers, media_catalog, upload_authorizer

__all__ = [
    "catalog_keys",
    "errors",
    "identifiers",
    "media_catalog",
    "upload_authorizer",
]
