"""Per-engine upload size ceilings.

A value is either a byte count or a mapping of upload target -> byte count
for engines that accept uploads through more than one endpoint.
"""

from typing import Mapping, Optional, Union

UploadLimit = Union[int, Mapping[str, int]]

MAX_IMAGE_UPLOAD_SIZE: Mapping[str, UploadLimit] = {
    "pinterest": 10 * 1024 * 1024,
}


def get_max_image_upload_size(
    engine: str,
    target: Optional[str] = None,
    limits: Mapping[str, UploadLimit] = MAX_IMAGE_UPLOAD_SIZE,
) -> Optional[int]:
    """Return the byte ceiling for *engine* (and *target*), or None."""
    limit = limits.get(engine)
    if isinstance(limit, Mapping):
        return limit.get(target) if target else None
    return limit
