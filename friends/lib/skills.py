"""Skills markdown: fetch an agent's skills.md and extract `## Skill: <name>` headers."""

import logging
import re

import httpx

from friends.core.defaults import NONE

logger = logging.getLogger(__name__)

SKILL_HEADER = re.compile(r"^##\s*Skill:\s*(.+)$", re.IGNORECASE)


def parse_skills(markdown: str) -> list[str]:
    skills = []
    for line in markdown.split("\n"):
        match = SKILL_HEADER.match(line.strip())
        if match:
            skills.append(match.group(1).strip())
    return skills


async def fetch_document(
    url: str, client: httpx.AsyncClient | None = None, timeout: float = 10.0
) -> str | None:
    """GET url and return the body, or None on transport failure or non-2xx status."""
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as owned:
                resp = await owned.get(url)
        else:
            resp = await client.get(url)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.warning(f"Skills fetch failed for {url}: {e}")
        return None

    if not resp.is_success:
        logger.warning(f"Skills fetch for {url} returned {resp.status_code}")
        return None
    return resp.text


async def fetch_skills(
    url: str, client: httpx.AsyncClient | None = None, timeout: float = 10.0
) -> list[str]:
    """Skill names listed at url; empty for the 'none' sentinel or any failure."""
    if not url or url == NONE:
        return []
    markdown = await fetch_document(url, client=client, timeout=timeout)
    if markdown is None:
        return []
    return parse_skills(markdown)
