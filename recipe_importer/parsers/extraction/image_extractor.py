"""
Recipe image resolution.

Structured data can describe an image as a string, an ImageObject with a url,
or a list of either. When no layer supplies one, the page itself is searched
for a social preview image, a microdata image, then a reasonably large <img>.
"""

import logging
from typing import Any, Optional

from bs4 import BeautifulSoup, Tag

from ..text_utils import resolve_url

logger = logging.getLogger(__name__)

MIN_IMAGE_DIMENSION = 200


def resolve_image_value(value: Any, base_url: Optional[str]) -> Optional[str]:
    """
    Return the first resolvable absolute URL from a structured-data image value.

    Args:
        value: A string, a {url: ...} object, or a list of either
        base_url: Document URL for resolving relative paths

    Returns:
        Absolute image URL or None
    """
    if isinstance(value, str):
        return resolve_url(value, base_url)
    if isinstance(value, dict):
        return resolve_image_value(value.get("url") or value.get("contentUrl"), base_url)
    if isinstance(value, list):
        for entry in value:
            resolved = resolve_image_value(entry, base_url)
            if resolved:
                return resolved
    return None


def _dimension(value: Optional[str]) -> int:
    try:
        return int(str(value).replace("px", "").strip())
    except (TypeError, ValueError):
        return 0


def is_large_image(img: Tag) -> bool:
    return (_dimension(img.get("width")) > MIN_IMAGE_DIMENSION
            and _dimension(img.get("height")) > MIN_IMAGE_DIMENSION)


def image_source(img: Optional[Tag], base_url: Optional[str]) -> Optional[str]:
    """Absolute URL of an <img>, preferring lazy-load attributes"""
    if img is None:
        return None
    for attr in ("data-lazy-src", "data-src", "src"):
        resolved = resolve_url(img.get(attr), base_url)
        if resolved:
            return resolved
    return None


def extract_page_image(soup: BeautifulSoup, base_url: Optional[str]) -> Optional[str]:
    """
    Page-level image fallbacks, tried in order:
    og:image, itemprop=image, first large <img>, first <img>.
    """
    og_image = soup.find("meta", attrs={"property": "og:image"})
    if og_image:
        resolved = resolve_url(og_image.get("content"), base_url)
        if resolved:
            return resolved

    item_image = soup.select_one('[itemprop="image"]')
    if item_image:
        resolved = resolve_url(item_image.get("content") or item_image.get("src"), base_url)
        if resolved:
            return resolved

    images = soup.find_all("img")
    for img in images:
        if is_large_image(img):
            resolved = image_source(img, base_url)
            if resolved:
                return resolved

    for img in images:
        resolved = image_source(img, base_url)
        if resolved:
            return resolved

    logger.debug("No page-level image found")
    return None
