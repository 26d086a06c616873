"""
Catalog index.

Responsibilities:
- Load the static list of travel experiences once at startup.
- Reject catalogs with duplicate ids, missing prices or malformed tags.
- Derive the allowed tag vocabulary from the loaded items.
"""
