"""Repository slug utilities.

Relay resources are named after the repository they serve. GitHub slugs use
``owner/name`` but relay resource names must not contain ``/``, so
:func:`resource_slug` swaps the separator for ``-``.
"""

from __future__ import annotations


def repo_slug(owner: str, name: str) -> str:
    """Build a repository slug from owner and name.

    Examples
    --------
    >>> repo_slug("acme", "widget")
    'acme/widget'

    """
    return f"{owner}/{name}"


def resource_slug(owner: str, name: str) -> str:
    """Return the deterministic, separator-free suffix for relay resources.

    Only the first ``/`` is replaced, matching how the slug is built.

    Examples
    --------
    >>> resource_slug("acme", "widget")
    'acme-widget'

    """
    return repo_slug(owner, name).replace("/", "-", 1)
