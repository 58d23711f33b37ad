"""
News Fetcher — Parallel RSS Headline Collection

Fetches the configured RSS feeds in parallel, normalizes their entries
into Article objects, and de-duplicates the result. Every feed is
fetched independently: a feed that times out or fails to parse yields
no articles and never aborts the batch. When nothing at all could be
fetched, a small set of sample headlines keeps the site alive.
"""

from __future__ import annotations

import asyncio
import html
import logging
import random
import re
import time
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Optional

import aiohttp
import feedparser

from blamemom.config import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeedSource:
    """A configured RSS feed."""
    name: str
    url: str
    category: str


@dataclass
class Article:
    """A normalized news article."""
    title: str
    summary: str = ""
    link: Optional[str] = None
    source: str = ""
    category: str = ""
    published_at: Optional[str] = None

    def to_dict(self) -> dict:
        data = asdict(self)
        data["description"] = self.summary
        return data


RSS_FEEDS: list[FeedSource] = [
    FeedSource("BBC News", "https://feeds.bbci.co.uk/news/rss.xml", "world"),
    FeedSource("BBC Science", "https://feeds.bbci.co.uk/news/science_and_environment/rss.xml", "science"),
    FeedSource("Reuters World", "https://www.reutersagency.com/feed/?taxonomy=best-topics&post_type=best", "world"),
    FeedSource("NPR News", "https://feeds.npr.org/1001/rss.xml", "news"),
    FeedSource("AP Top Stories", "https://feeds.apnews.com/apf-topnews", "world"),
    FeedSource("AP International", "https://feeds.apnews.com/apf-intlnews", "world"),
]

SAMPLE_HEADLINES: list[dict] = [
    {
        "title": "Scientists warn of glitter crisis hovering over capital city",
        "summary": "Authorities say the glitter originated from an unknown party cannon deployed at dawn.",
        "link": "https://example.com/glitter-cloud",
        "source": "Sample Wire",
        "category": "weird",
    },
    {
        "title": "Local pigeon blamed for traffic problem downtown",
        "summary": "Witnesses report the pigeon refused to move until drivers calmed down.",
        "link": "https://example.com/pigeon-hero",
        "source": "Sample Wire",
        "category": "local",
    },
    {
        "title": "Economists warn of left sock shortage crisis",
        "summary": "Retailers recommend buying matched pairs while supplies last.",
        "link": "https://example.com/sock-crisis",
        "source": "Sample Wire",
        "category": "economy",
    },
]

_TAGS = re.compile(r"<[^>]*>")
_WHITESPACE = re.compile(r"\s+")


def strip_html(value: Optional[str]) -> str:
    """Remove markup and entities, collapse whitespace."""
    if not value:
        return ""
    text = html.unescape(_TAGS.sub("", value))
    return _WHITESPACE.sub(" ", text).strip()


def normalize_entry(entry: dict, feed: FeedSource) -> Optional[Article]:
    """Build an Article from a feedparser entry. Entries without a title are dropped."""
    title = strip_html(entry.get("title"))
    if not title:
        return None

    summary = strip_html(
        entry.get("summary") or entry.get("description") or _first_content(entry)
    )

    return Article(
        title=title,
        summary=summary,
        link=entry.get("link"),
        source=feed.name,
        category=feed.category,
        published_at=entry.get("published") or entry.get("updated"),
    )


def _first_content(entry: dict) -> str:
    content = entry.get("content") or []
    if content:
        return content[0].get("value", "")
    return ""


def sample_articles() -> list[Article]:
    now = datetime.now(timezone.utc).isoformat()
    return [Article(published_at=now, **item) for item in SAMPLE_HEADLINES]


class NewsFetcher:
    """Async RSS fetcher with bounded parallelism and per-feed isolation."""

    def __init__(
        self,
        feeds: Optional[list[FeedSource]] = None,
        max_articles: Optional[int] = None,
        timeout: Optional[int] = None,
        max_concurrent: Optional[int] = None,
    ):
        self.feeds = list(feeds) if feeds is not None else list(RSS_FEEDS)
        self.max_articles = max_articles or settings.NEWS_MAX_ARTICLES
        self.timeout = timeout or settings.FETCH_TIMEOUT
        self.max_concurrent = max_concurrent or settings.MAX_CONCURRENT_FEEDS

    def _session(self) -> aiohttp.ClientSession:
        return aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.timeout),
            headers={"User-Agent": "Mozilla/5.0 (compatible; BlameMom/1.0)"},
        )

    async def _download(self, session: aiohttp.ClientSession, url: str) -> bytes:
        async with session.get(url) as response:
            response.raise_for_status()
            return await response.read()

    async def fetch_from_feed(
        self, session: aiohttp.ClientSession, feed: FeedSource,
    ) -> list[Article]:
        """Fetch one feed. Any failure is logged and yields no articles."""
        try:
            content = await self._download(session, feed.url)
            parsed = feedparser.parse(content)
            if parsed.bozo and not parsed.entries:
                logger.warning(
                    "Feed could not be parsed",
                    extra={"feed": feed.name, "error": str(parsed.get("bozo_exception"))},
                )
                return []
            articles = [normalize_entry(entry, feed) for entry in parsed.entries]
            return [a for a in articles if a is not None]
        except asyncio.TimeoutError:
            logger.error("Timeout fetching feed", extra={"feed": feed.name, "url": feed.url})
        except aiohttp.ClientError as e:
            logger.error("HTTP error fetching feed",
                         extra={"feed": feed.name, "url": feed.url, "error": str(e)})
        except Exception as e:
            logger.error("Unexpected error fetching feed",
                         extra={"feed": feed.name, "error": str(e), "error_type": type(e).__name__})
        return []

    async def _fetch_feeds(self, feeds: list[FeedSource]) -> list[Article]:
        semaphore = asyncio.Semaphore(self.max_concurrent)
        start = time.time()

        async with self._session() as session:
            async def fetch_with_semaphore(feed: FeedSource) -> list[Article]:
                async with semaphore:
                    return await self.fetch_from_feed(session, feed)

            results = await asyncio.gather(
                *[fetch_with_semaphore(feed) for feed in feeds],
                return_exceptions=True,
            )

        articles: list[Article] = []
        for feed, result in zip(feeds, results):
            if isinstance(result, BaseException):
                logger.error("Feed fetch failed",
                             extra={"feed": feed.name, "error": str(result)})
                continue
            articles.extend(result)

        logger.info(
            "Fetched feeds",
            extra={"count": len(articles), "duration_ms": int((time.time() - start) * 1000)},
        )
        return articles

    def dedupe(self, articles: list[Article]) -> list[Article]:
        seen: set[str] = set()
        result = []
        for article in articles:
            if not article.title:
                continue
            key = f"{article.title.lower()}|{article.source}"
            if key in seen:
                continue
            seen.add(key)
            result.append(article)
            if len(result) >= self.max_articles:
                break
        return result

    async def fetch_all(self) -> list[Article]:
        """All feeds, de-duplicated. Falls back to sample headlines when empty."""
        deduped = self.dedupe(await self._fetch_feeds(self.feeds))
        if not deduped:
            logger.warning("No RSS headlines fetched; falling back to sample data")
            return sample_articles()
        return deduped

    async def fetch_by_category(self, category: Optional[str]) -> list[Article]:
        wanted = (category or "").lower()
        feeds = [f for f in self.feeds if not wanted or f.category.lower() == wanted]
        articles = await self._fetch_feeds(feeds)
        return self.dedupe([a for a in articles if wanted in a.category.lower()])

    async def get_random_headline(self) -> Optional[Article]:
        headlines = await self.fetch_all()
        if not headlines:
            return None
        return random.choice(headlines)
