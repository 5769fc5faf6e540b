from __future__ import annotations

# MetadataRecord keys, in serialization order.
# Keep these centralized to reduce magic strings and accidental divergence.

NAME = "name"
TYPE = "type"
SIZE_HUMAN = "sizeHuman"
SIZE_BYTES = "sizeBytes"
LAST_MODIFIED = "lastModified"
LAST_MODIFIED_READABLE = "lastModifiedReadable"

CONTENT_DIGEST = "contentDigest"
WIDTH = "width"
HEIGHT = "height"
DURATION_SECONDS = "durationSeconds"

BASE_KEYS = (
    NAME,
    TYPE,
    SIZE_HUMAN,
    SIZE_BYTES,
    LAST_MODIFIED,
    LAST_MODIFIED_READABLE,
)
EXTRA_KEYS = (CONTENT_DIGEST, WIDTH, HEIGHT, DURATION_SECONDS)
FIELD_ORDER = BASE_KEYS + EXTRA_KEYS

UNDECLARED_TYPE = "undeclared"
