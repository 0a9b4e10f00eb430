# SPDX-License-Identifier: MIT
"""URI value type used to address resources in repositories.

Usage::

    from urirepo.uri import parse_uri

    uri = parse_uri("mem:///foo/bar")
    uri.scheme                # "mem"
    uri.path                  # "/foo/bar"
    str(uri.with_path("/x"))  # "mem:///x"
"""

from __future__ import annotations

import re
from urllib.parse import urlsplit

from pydantic import BaseModel, ValidationError, field_validator

from .errors import InvalidURIError

SCHEME_RE = re.compile(r"^[a-z][a-z0-9+.\-]*$")


class URI(BaseModel, frozen=True):
    """An immutable ``scheme://authority/path`` identifier.

    Repositories only look at :attr:`scheme` (to be selected by a registry)
    and :attr:`path` (a ``/``-delimited hierarchical key).
    """

    scheme: str
    authority: str = ""
    path: str = ""

    @field_validator("scheme")
    @classmethod
    def _validate_scheme(cls, v: str) -> str:
        if not SCHEME_RE.match(v):
            raise ValueError(f"Invalid scheme: {v!r}")
        return v

    @field_validator("path")
    @classmethod
    def _validate_path(cls, v: str) -> str:
        if v and not v.startswith("/"):
            raise ValueError(f"Path must be empty or start with '/': {v!r}")
        return v

    def __str__(self) -> str:
        return f"{self.scheme}://{self.authority}{self.path}"

    def with_path(self, path: str) -> URI:
        """Return a URI with the same scheme and authority and a new *path*."""
        return URI(scheme=self.scheme, authority=self.authority, path=path)


def parse_uri(text: str) -> URI:
    """Parse *text* into a :class:`URI`.

    The scheme is lowercased. Query strings and fragments are not part of
    the addressing model and are rejected.

    Raises:
        InvalidURIError: If *text* has no scheme, carries a query or
            fragment, or fails validation.
    """
    parts = urlsplit(text)
    if not parts.scheme:
        raise InvalidURIError(text, "missing scheme")
    if parts.query or parts.fragment:
        raise InvalidURIError(text, "query and fragment are not supported")
    try:
        return URI(scheme=parts.scheme, authority=parts.netloc, path=parts.path)
    except ValidationError as e:
        raise InvalidURIError(text, str(e)) from e


def as_uri(value: URI | str) -> URI:
    """Return *value* as a :class:`URI`, parsing it if it is a string."""
    if isinstance(value, URI):
        return value
    return parse_uri(value)
