"""
Google Maps link helpers.

The check is a caller-side sanity check on user input, not a security boundary.
"""

MAPS_LINK_MARKERS = (
    "google.com/maps",
    "maps.google.",
    "goo.gl",  # maps.app.goo.gl and goo.gl/maps short links
)


def looks_like_maps_link(url: str) -> bool:
    """Return True if the URL contains a recognized Google Maps substring."""
    if not url:
        return False
    lowered = url.strip().lower()
    return any(marker in lowered for marker in MAPS_LINK_MARKERS)
