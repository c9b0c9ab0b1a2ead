"""
Migrations that widen the places table: social media links, split address
fields and accessibility details.
"""
from __future__ import annotations

from sqlite3 import Connection

from .utils import add_column_if_absent

SOCIAL_MEDIA_COLUMNS = [
    "facebook_url",
    "instagram_url",
    "pinterest_url",
    "twitter_url",
    "youtube_url",
    "snapchat_url",
    "tiktok_url",
]

ADDRESS_COLUMNS = [
    ("address_street", "TEXT"),
    ("address_area", "TEXT"),
    ("address_city", "TEXT DEFAULT 'Edinburgh'"),
    ("address_postcode", "TEXT"),
]

ACCESSIBILITY_COLUMNS = [
    ("has_disabled_access", "INTEGER DEFAULT 0"),
    ("has_toilet_facilities", "INTEGER DEFAULT 0"),
    ("trade_associations", "TEXT"),
]


def add_social_media(conn: Connection) -> list[str]:
    return [c for c in SOCIAL_MEDIA_COLUMNS if add_column_if_absent(conn, "places", c, "TEXT")]


def add_address_fields(conn: Connection) -> list[str]:
    added = [c for c, decl in ADDRESS_COLUMNS if add_column_if_absent(conn, "places", c, decl)]
    if added:
        conn.execute("UPDATE places SET address_city = 'Edinburgh' WHERE address_city IS NULL")
    return added


def add_accessibility(conn: Connection) -> list[str]:
    return [c for c, decl in ACCESSIBILITY_COLUMNS if add_column_if_absent(conn, "places", c, decl)]
