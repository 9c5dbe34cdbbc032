import logging
from datetime import datetime, timezone
from urllib.parse import urlparse

import httpx
import markdown
from markdown.treeprocessors import Treeprocessor

logger = logging.getLogger('postboard.client.utils')


def format_date_time(iso_timestamp):
    try:
        dt = datetime.fromisoformat(iso_timestamp.replace('Z', '+00:00'))
        now = datetime.now(timezone.utc)

        if dt.date() == now.date():
            return f"Today at {dt.strftime('%H:%M')}"
        elif (now.date() - dt.date()).days == 1:
            return f"Yesterday at {dt.strftime('%H:%M')}"
        else:
            return dt.strftime('%b %d, %Y at %H:%M')
    except (AttributeError, TypeError, ValueError):
        return iso_timestamp


SAFE_SCHEMES = ('', 'http', 'https', 'mailto')


class SafeLinks(Treeprocessor):
    """Drops href/src attributes whose scheme could run script."""

    def run(self, root):
        for element in root.iter():
            for attr in ('href', 'src'):
                value = element.get(attr)
                if value is None:
                    continue
                scheme = urlparse(''.join(value.split()).lower()).scheme
                if scheme not in SAFE_SCHEMES:
                    del element.attrib[attr]


def render_markdown(content):
    """
    Renders post content as HTML. Any API caller can write post content,
    so raw HTML in it is escaped instead of passed through.
    """
    md = markdown.Markdown()
    md.preprocessors.deregister('html_block')
    md.inlinePatterns.deregister('html')
    md.treeprocessors.register(SafeLinks(md), 'safe_links', 5)
    return md.convert(content or '')


def describe_error(message, error):
    """
    Appends the per-field validation errors returned by the API, if any,
    to a user-facing error message.
    """
    if not isinstance(error, httpx.HTTPStatusError) or error.response.status_code != 422:
        return message

    try:
        errors = error.response.json().get('errors') or {}
    except ValueError:
        logger.warning('Validation response without a JSON body')
        return message

    details = ' '.join(msg for messages in errors.values() for msg in messages)
    return f'{message} {details}' if details else message
