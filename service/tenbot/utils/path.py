"""
URL path normalization utilities.

Ensures every bot is keyed by one canonical path, whatever way it was written.
"""

import re


def format_path(path: str) -> str:
    """
    Normalize a URL path to its canonical form.

    Input formats handled:
    - "foo"            -> "/foo"
    - "/foo/"          -> "/foo"
    - "//foo//bar/"    -> "/foo/bar"
    - "\\foo\\bar"     -> "/foo/bar"
    - "" or "/"        -> "/"

    Output always has one leading slash and no trailing slash,
    except for the root path itself.
    """
    if not path:
        return "/"

    value = path.strip().replace("\\", "/")

    # Collapse runs of slashes
    value = re.sub(r"/+", "/", value)

    value = value.strip("/")
    if not value:
        return "/"

    return f"/{value}"
