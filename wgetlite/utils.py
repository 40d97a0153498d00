from __future__ import annotations
import posixpath
import re
from urllib.parse import urlparse, unquote


def filename_from_url(url: str, default: str = "index.html") -> str:
    """
    Decide what to name the file we download: the last piece of the URL path.

    URL: https://example.com/files/image.png
    path: /files/image.png
    basename: image.png

    If the path ends with "/" (or is empty) there is no name to take,
    so we fall back to 'default', like wget does.
    """
    path = urlparse(url).path
    name = posixpath.basename(path)
    if not name:
        return default
    # unquote() converts URL encoding, sanitize_filename() makes it safe for the OS
    return sanitize_filename(unquote(name), default=default)


def sanitize_filename(name: str, default: str = "index.html") -> str:
    """
    Make the filename safe across OSes by removing illegal characters.
    - On Windows, characters like \\ / : * ? " < > | are not allowed.
    - We'll replace them with underscore.
    """
    name = name.strip().replace("\n", " ").replace("\r", " ")
    name = re.sub(r'[\\/:*?"<>|]', "_", name)
    if name in (".", ".."):
        return default
    return name or default  # If everything got stripped -> return the default.
