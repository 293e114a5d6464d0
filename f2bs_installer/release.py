"""GitHub release lookup."""

from __future__ import annotations

import json
import urllib.error
import urllib.request
from typing import Any

from f2bs_installer import __version__
from f2bs_installer.errors import ReleaseError

GITHUB_API = "https://api.github.com"
USER_AGENT = f"f2bs-install/{__version__}"


def latest_release_url(repo: str) -> str:
    return f"{GITHUB_API}/repos/{repo}/releases/latest"


def fetch_latest_release(repo: str, timeout: int = 30) -> dict[str, Any]:
    """Fetch the latest release metadata for ``owner/name``.

    Raises:
        ReleaseError: On network failures or a non-object JSON response.
    """
    url = latest_release_url(repo)
    request = urllib.request.Request(  # noqa: S310
        url,
        headers={"User-Agent": USER_AGENT, "Accept": "application/vnd.github+json"},
    )
    try:
        with urllib.request.urlopen(request, timeout=timeout) as response:  # noqa: S310
            data = json.loads(response.read().decode("utf-8"))
    except urllib.error.HTTPError as exc:
        raise ReleaseError(f"GitHub API returned {exc.code} for {url}") from exc
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ReleaseError(f"Failed to fetch latest release of {repo}: {exc}") from exc
    if not isinstance(data, dict):
        raise ReleaseError(f"Unexpected release payload for {repo}")
    return data


def release_tag(release: dict[str, Any]) -> str:
    tag = str(release.get("tag_name") or "").strip()
    return tag or "unknown"


def find_asset_url(release: dict[str, Any], asset_name: str) -> str:
    """Return the download URL of ``asset_name`` in a release payload."""
    assets = release.get("assets")
    if not isinstance(assets, list):
        assets = []
    fallback = ""
    for asset in assets:
        if not isinstance(asset, dict):
            continue
        url = str(asset.get("browser_download_url") or "")
        if not url:
            continue
        if asset.get("name") == asset_name:
            return url
        if not fallback and url.endswith(f"/{asset_name}"):
            fallback = url
    if fallback:
        return fallback
    raise ReleaseError(f"Could not find {asset_name} in latest release")
