"""
Catalog package for the plant lexicon.

This package turns the remote Perenual species API into stable screen
state: a paced, paginated category listing and a normalized detail
page per plant.  The route definitions expose that state to a
front-end, which only ever reads it.
"""

from .router import router as catalog_router  # noqa: F401
