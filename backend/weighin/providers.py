"""HTTP clients for the two third-party providers.

Both are thin wrappers over ``requests``: one outbound call per method, no
retries. Any transport failure or non-2xx status becomes an
:class:`~weighin.errors.UpstreamError`; a 2xx reply that lacks the fields we
consume becomes an :class:`~weighin.errors.ExtractionError`.
"""
import logging
from typing import Any, Dict, List, Optional

import requests

from weighin.errors import ExtractionError, UpstreamError


logger = logging.getLogger(__name__)


class CompletionClient:
    """Chat-completion client (OpenAI wire format)."""

    def __init__(self, api_key: Optional[str], model: str, max_tokens: int,
                 url: str, timeout: Optional[float] = None):
        self.api_key = api_key
        self.model = model
        self.max_tokens = max_tokens
        self.url = url
        self.timeout = timeout

    @classmethod
    def from_config(cls, config) -> 'CompletionClient':
        timeout = int(config.get('PROVIDER_TIMEOUT_SEC', 0))
        return cls(
            api_key=config.get('OPENAI_API_KEY'),
            model=config.get('OPENAI_MODEL', 'gpt-3.5-turbo'),
            max_tokens=int(config.get('OPENAI_MAX_TOKENS', 10)),
            url=config.get('OPENAI_API_URL', 'https://api.openai.com/v1/chat/completions'),
            timeout=timeout or None,
        )

    def complete(self, prompt: str) -> str:
        """Send a single user message and return the trimmed reply text."""
        if not self.api_key:
            logger.warning('[completion] OPENAI_API_KEY is not configured')
            raise UpstreamError('Error fetching weight from OpenAI.')

        payload = {
            'model': self.model,
            'messages': [{'role': 'user', 'content': prompt}],
            'max_tokens': self.max_tokens,
        }
        headers = {
            'Authorization': f'Bearer {self.api_key}',
            'Content-Type': 'application/json',
        }
        data = _request_json(
            'post', self.url, 'Error fetching weight from OpenAI.',
            json=payload, headers=headers, timeout=self.timeout,
        )
        try:
            content = data['choices'][0]['message']['content']
        except (KeyError, IndexError, TypeError):
            logger.warning('[completion] unexpected reply shape: %s', data)
            raise ExtractionError('Completion reply did not contain a message.')
        if not isinstance(content, str):
            raise ExtractionError('Completion reply did not contain a message.')
        return content.strip()


class ImageSearchClient:
    """Image search client (Pixabay wire format)."""

    def __init__(self, api_key: Optional[str], url: str,
                 timeout: Optional[float] = None):
        self.api_key = api_key
        self.url = url
        self.timeout = timeout

    @classmethod
    def from_config(cls, config) -> 'ImageSearchClient':
        timeout = int(config.get('PROVIDER_TIMEOUT_SEC', 0))
        return cls(
            api_key=config.get('PIXABAY_API_KEY'),
            url=config.get('PIXABAY_API_URL', 'https://pixabay.com/api/'),
            timeout=timeout or None,
        )

    def search(self, query: str, per_page: int = 5) -> List[Dict[str, Any]]:
        """Return the provider's ``hits`` for *query*, in provider order."""
        if not self.api_key:
            logger.warning('[image-search] PIXABAY_API_KEY is not configured')
            raise UpstreamError('Error fetching image from Pixabay.')

        params = {
            'key': self.api_key,
            'q': query,
            'image_type': 'photo',
            'per_page': per_page,
        }
        data = _request_json(
            'get', self.url, 'Error fetching image from Pixabay.',
            params=params, timeout=self.timeout,
        )
        hits = data.get('hits') if isinstance(data, dict) else None
        if not isinstance(hits, list):
            logger.warning('[image-search] unexpected reply shape: %s', data)
            raise ExtractionError('Image search reply did not contain results.')
        return hits


def _request_json(method: str, url: str, error_message: str, **kwargs) -> Any:
    try:
        resp = requests.request(method, url, **kwargs)
        resp.raise_for_status()
        return resp.json()
    except requests.HTTPError as exc:
        body = exc.response.text if exc.response is not None else ''
        logger.warning('Provider %s returned an error: %s %s', url, exc, body)
        raise UpstreamError(error_message) from exc
    except (requests.RequestException, ValueError) as exc:
        logger.warning('Provider %s request failed: %s', url, exc)
        raise UpstreamError(error_message) from exc
