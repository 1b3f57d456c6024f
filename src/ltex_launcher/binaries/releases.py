"""GitHub release lookup for language server binaries."""
import asyncio
import logging
from typing import Any, Dict, List, Optional

import aiohttp

from ltex_launcher.binaries.constants import (
    GITHUB_ACCEPT,
    GITHUB_API_BASE,
    GITHUB_REPOS_PATH,
    RELEASES_PATH,
    RELEASES_PER_PAGE,
)
from ltex_launcher.errors import NetworkOrFilesystemError
from ltex_launcher.logging import get_logger, log_with_data
from ltex_launcher.types import GithubRelease, GithubReleaseOptions, ReleaseAsset

logger = get_logger(__name__)


def select_release(
    releases: List[Dict[str, Any]], options: GithubReleaseOptions
) -> Optional[Dict[str, Any]]:
    """Pick the newest release entry allowed by the options."""
    for release in releases:
        if not isinstance(release, dict) or release.get("draft"):
            continue
        if release.get("prerelease") and not options.pre_release:
            continue
        if options.require_assets and not release.get("assets"):
            continue
        return release
    return None


def parse_release(data: Dict[str, Any]) -> GithubRelease:
    return GithubRelease(
        version=data["tag_name"],
        assets=[
            ReleaseAsset(name=asset["name"], download_url=asset["browser_download_url"])
            for asset in data.get("assets", [])
        ],
    )


async def latest_github_release(
    repo: str,
    options: GithubReleaseOptions,
    api_base: str = GITHUB_API_BASE,
    token: Optional[str] = None,
) -> GithubRelease:
    """Fetch the latest release of `owner/name` matching the options."""
    url = f"{api_base}/{GITHUB_REPOS_PATH}/{repo}/{RELEASES_PATH}"
    headers = {"Accept": GITHUB_ACCEPT}
    if token:
        headers["Authorization"] = f"Bearer {token}"

    try:
        async with aiohttp.ClientSession() as session:
            async with session.get(
                url, headers=headers, params={"per_page": RELEASES_PER_PAGE}
            ) as response:
                response.raise_for_status()
                releases = await response.json()
    except (aiohttp.ClientError, asyncio.TimeoutError, OSError, ValueError) as e:
        reason = str(e) or type(e).__name__
        log_with_data(logger, logging.ERROR, "Release lookup failed", {
            "repo": repo,
            "url": url,
            "error": reason,
            "status": getattr(e, "status", None),
        })
        raise NetworkOrFilesystemError(
            f"failed to fetch releases for {repo}: {reason}", details={"repo": repo}
        ) from e

    if not isinstance(releases, list):
        raise NetworkOrFilesystemError(
            f"failed to fetch releases for {repo}: unexpected response",
            details={"repo": repo, "response": type(releases).__name__}
        )

    release = select_release(releases, options)
    if release is None:
        raise NetworkOrFilesystemError(
            f"no matching release found for {repo}", details={"repo": repo}
        )

    result = parse_release(release)
    log_with_data(logger, logging.INFO, "Found latest release", {
        "repo": repo,
        "version": result.version,
        "assets": len(result.assets),
    })
    return result
