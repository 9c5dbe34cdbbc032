import logging

import httpx

from client.client.config import API_BASE_URL, DEFAULT_HEADERS

logger = logging.getLogger('postboard.client.api')


class PostService:
    """
    Thin HTTP wrapper around the posts API.

    Every method performs exactly one request and returns the decoded JSON
    body. Failed requests are logged and the httpx error is re-raised so the
    caller decides what the user sees.
    """

    def __init__(self, base_url: str = API_BASE_URL, client: httpx.Client | None = None):
        self.client = client or httpx.Client(base_url=base_url)
        self.client.headers.update(DEFAULT_HEADERS)

    def close(self) -> None:
        self.client.close()

    def _request(self, method: str, path: str, description: str, **kwargs) -> dict:
        try:
            response = self.client.request(method, path, **kwargs)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as e:
            logger.error(f'Error while {description}: {e}')
            raise

    def get_all_posts(self, page: int | None = None) -> dict:
        params = {'page': page} if page is not None else None
        return self._request('GET', '/posts', 'fetching the posts', params=params)

    def get_post(self, post_id) -> dict:
        return self._request('GET', f'/posts/{post_id}', f'fetching post {post_id}')

    def create_post(self, post_data: dict) -> dict:
        return self._request('POST', '/posts', 'creating the post', json=post_data)

    def update_post(self, post_id, post_data: dict) -> dict:
        return self._request('PUT', f'/posts/{post_id}', f'updating post {post_id}', json=post_data)

    def delete_post(self, post_id) -> dict:
        return self._request('DELETE', f'/posts/{post_id}', f'deleting post {post_id}')

    def test_connection(self) -> dict:
        return self._request('GET', '/test', 'testing the connection')
