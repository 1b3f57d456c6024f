"""Release lookup, download and install cache."""
from ltex_launcher.binaries.releases import latest_github_release
from ltex_launcher.binaries.fetcher import download_and_extract
from ltex_launcher.binaries.cache import is_file, remove_stale_entries
from ltex_launcher.binaries.platforms import current_platform

__all__ = [
    "latest_github_release",
    "download_and_extract",
    "is_file",
    "remove_stale_entries",
    "current_platform",
]
