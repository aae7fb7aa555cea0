from typing import Any, Dict, List

from flask import current_app

from weighin.errors import ExtractionError, NotFoundError, ValidationError


def select_image(hits: List[Dict[str, Any]], object_name: str) -> str:
    """Pick the first hit tagged with *object_name*, else the first hit.

    Provider order is trusted for the fallback; no relevance ranking.
    """
    if not hits:
        raise NotFoundError('No images found for the specified object.')

    if not all(isinstance(hit, dict) for hit in hits):
        raise ExtractionError('Image search reply contained malformed results.')

    needle = object_name.lower()
    chosen = next(
        (hit for hit in hits if needle in str(hit.get('tags') or '').lower()),
        hits[0],
    )
    url = chosen.get('webformatURL')
    if not url:
        raise ExtractionError('Image search result did not contain an image URL.')
    return url


class ImageService:
    def __init__(self, search_client, per_page: int = 5):
        self._client = search_client
        self._per_page = per_page

    def find_image_url(self, object_name) -> str:
        if not isinstance(object_name, str) or not object_name.strip():
            raise ValidationError('Object name is required.')

        hits = self._client.search(object_name, per_page=self._per_page)
        current_app.logger.info(f'[image] object={object_name!r} hits={len(hits)}')
        return select_image(hits, object_name)
