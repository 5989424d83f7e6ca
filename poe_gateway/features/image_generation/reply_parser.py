"""
Extraction of an image URL and a caption from free-form chat text.

Upstream models answer image prompts with prose that embeds the image either
as a Markdown image tag or as a bare link, e.g.::

    Here is your image: ![A cat on a sofa](https://cdn.example.com/cat.png)
    https://cdn.example.com/cat.png
"""

import re
from typing import NamedTuple

FALLBACK_CAPTION = "Generated image"
CAPTION_MAX_LENGTH = 100

URL_PATTERN = re.compile(r"https://[^\s)]+")
MARKDOWN_IMAGE_PATTERN = re.compile(r"!\[([^\]]*)\]\((https://[^)\s]+)\)")


class ImageReply(NamedTuple):
    url: str
    caption: str


def extract_image_url(text: str) -> str:
    """Markdown image URL if present, else the last bare https URL, else ''."""
    markdown = MARKDOWN_IMAGE_PATTERN.search(text)
    if markdown:
        return markdown.group(2)
    urls = URL_PATTERN.findall(text)
    return urls[-1] if urls else ""


def extract_caption(text: str) -> str:
    """Markdown alt text if present, else the URL-free text cut to 100 chars."""
    markdown = MARKDOWN_IMAGE_PATTERN.search(text)
    if markdown and markdown.group(1).strip():
        return markdown.group(1).strip()

    stripped = URL_PATTERN.sub("", MARKDOWN_IMAGE_PATTERN.sub("", text)).strip()
    return stripped[:CAPTION_MAX_LENGTH] or FALLBACK_CAPTION


def parse_image_reply(text: str) -> ImageReply:
    return ImageReply(url=extract_image_url(text or ""), caption=extract_caption(text or ""))
