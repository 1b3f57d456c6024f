"""Upstream release and API constants."""

# GitHub API URL structure
GITHUB_API_BASE = "https://api.github.com"
GITHUB_REPOS_PATH = "repos"
RELEASES_PATH = "releases"

GITHUB_ACCEPT = "application/vnd.github+json"
RELEASES_PER_PAGE = 30

DOWNLOAD_CHUNK_SIZE = 8192
