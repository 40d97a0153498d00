from __future__ import annotations
import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from .errors import InvalidRateLimit
from .utils import filename_from_url

# The only throughput tiers --rate-limit accepts, in bytes per second.
RATE_LIMITS: Dict[str, int] = {
    "300k": 300 * 1024,
    "700k": 700 * 1024,
    "2M": 2 * 1024 * 1024,
}


def parse_rate_limit(label: str) -> int:
    """
    Turn a --rate-limit label into bytes per second.

    ""      -> 0 (unlimited)
    "300k"  -> 307200
    "700k"  -> 716800
    "2M"    -> 2097152

    Anything else raises InvalidRateLimit. Matching is exact (no "300K", no "2m").
    """
    if label == "":
        return 0
    try:
        return RATE_LIMITS[label]
    except KeyError:
        allowed = " or ".join(f"'{k}'" for k in RATE_LIMITS)
        raise InvalidRateLimit(f"--rate-limit must be either {allowed}, got {label!r}") from None


@dataclass(frozen=True)
class DownloadConfig:
    """
    Everything one invocation needs, built once from the command line.
    The caller owns it and passes it down; nothing is kept in module globals.

    - rate_limit:  bytes per second, 0 = unlimited
    - output:      where the file is written
    - mirror, convert_links, accept, reject, recursive:
                   accepted for wget compatibility, they do not change the download
    """
    url: str
    output: Path
    rate_limit: int = 0
    timeout: Optional[float] = None
    user_agent: Optional[str] = None
    verbose: bool = False
    mirror: bool = False
    convert_links: bool = False
    accept: str = ""
    reject: str = ""
    recursive: bool = False

    @property
    def inert_flags(self) -> Dict[str, object]:
        """The compatibility flags the user actually set."""
        flags = {
            "mirror": self.mirror,
            "convert-links": self.convert_links,
            "accept": self.accept,
            "reject": self.reject,
            "recursive": self.recursive,
        }
        return {k: v for k, v in flags.items() if v}

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "DownloadConfig":
        """
        Build a config from parsed CLI arguments.
        Raises InvalidRateLimit before anything touches the network.
        """
        rate_limit = parse_rate_limit(args.rate_limit)
        output = Path(args.output_document) if args.output_document else Path(filename_from_url(args.URL))
        return cls(
            url=args.URL,
            output=output,
            rate_limit=rate_limit,
            timeout=args.timeout,
            user_agent=args.user_agent,
            verbose=args.verbose,
            mirror=args.mirror,
            convert_links=args.convert_links,
            accept=args.accept,
            reject=args.reject,
            recursive=args.recursive,
        )
