from __future__ import annotations
import argparse

from .config import RATE_LIMITS, DownloadConfig
from .downloader import Downloader
from .errors import WgetliteError

"""
User types command
↓
argparse reads flags
↓
DownloadConfig built (bad --rate-limit stops here)
↓
Downloader.download() runs
↓
Result printed
↓
Exit code returned
"""


def build_parser() -> argparse.ArgumentParser:
    """
    Define all the command-line flags. argparse automatically builds --help text.
    """
    p = argparse.ArgumentParser(
        prog="wgetlite",
        description="Minimal wget-style downloader with optional bandwidth tiers.",
    )
    p.add_argument("URL", nargs="?", help="URL to download")
    p.add_argument("-O", "--output-document", default=None,
                   help="Write to this file (default: last segment of the URL path)")
    p.add_argument("--rate-limit", default="",
                   help=f"Limit download speed ({' or '.join(RATE_LIMITS)}; default: unlimited)")
    p.add_argument("--timeout", type=float, default=None, help="Socket timeout in seconds (default: none)")
    p.add_argument("--user-agent", default=None, help="Override User-Agent header")
    p.add_argument("--verbose", action="store_true", help="Verbose logging")

    # Accepted for wget compatibility; they do not change what gets downloaded.
    p.add_argument("--mirror", action="store_true", help="Mirror the remote directory structure")
    p.add_argument("--convert-links", action="store_true", help="Convert links for offline viewing")
    p.add_argument("--reject", default="", help="Comma-separated list of file types to reject")
    p.add_argument("--accept", default="", help="Comma-separated list of file types to accept")
    p.add_argument("--recursive", action="store_true", help="Download directories recursively")
    return p


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for `python -m wgetlite` and the `wgetlite` console script.
    """
    args = build_parser().parse_args(argv)

    # Ensure a URL is provided
    if not args.URL:
        print("Usage: wgetlite <URL> [OPTIONS]")
        return 1

    try:
        config = DownloadConfig.from_args(args)
    except WgetliteError as e:
        print("Error:", e)
        return 1

    if config.verbose and config.inert_flags:
        print(f"note: {', '.join('--' + k for k in config.inert_flags)} have no effect", flush=True)

    try:
        result = Downloader.from_config(config).download(config.url, config.output)
    except WgetliteError as e:
        print("Error:", e)
        return 1

    print("Downloaded:", result.path)
    print("Download completed:", result.path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
