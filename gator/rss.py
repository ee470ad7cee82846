"""Fetching and parsing RSS feeds."""

from __future__ import annotations

import urllib.error
import urllib.request
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field

USER_AGENT = "gator"


@dataclass
class RSSItem:
    """One entry of a feed."""

    title: str = ""
    link: str = ""
    description: str = ""
    pub_date: str = ""


@dataclass
class RSSFeed:
    """The channel of a feed and its entries."""

    title: str = ""
    link: str = ""
    description: str = ""
    items: list[RSSItem] = field(default_factory=list)


def _text(parent, tag):
    element = parent.find(tag)
    return "" if element is None else "".join(element.itertext())


def _item(element):
    return RSSItem(
        title=_text(element, "title"),
        link=_text(element, "link"),
        description=_text(element, "description"),
        pub_date=_text(element, "pubDate"),
    )


def parse_feed(data):
    """Parse an RSS document given as bytes or text; raise ValueError if it is not XML."""
    try:
        root = ET.fromstring(data)
    except ET.ParseError as exc:
        raise ValueError(f"invalid feed XML: {exc}") from exc

    channel = root.find("channel")
    if channel is None:
        return RSSFeed()
    return RSSFeed(
        title=_text(channel, "title"),
        link=_text(channel, "link"),
        description=_text(channel, "description"),
        items=[_item(element) for element in channel.findall("item")],
    )


def fetch_feed(feed_url, timeout=None):
    """Download the feed at ``feed_url`` and parse it, whatever the HTTP status."""
    request = urllib.request.Request(feed_url, headers={"User-Agent": USER_AGENT}, method="GET")
    options = {} if timeout is None else {"timeout": timeout}
    try:
        with urllib.request.urlopen(request, **options) as response:
            body = response.read()
    except urllib.error.HTTPError as exc:
        try:
            body = exc.read()
        finally:
            exc.close()
    return parse_feed(body)