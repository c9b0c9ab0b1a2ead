from __future__ import annotations

# antiques_trail/services/online_sales_svc.py
import re
from typing import Optional
from urllib.parse import urlparse

from ..db import get_conn, transaction
from ..errors import NotFoundError, ValidationError
from ..logs import LogContext
from ..repository import online_sales_repo, place_repo

COMMON_PLATFORMS = [
    "eBay",
    "Etsy",
    "Amazon",
    "Vinted",
    "Facebook Marketplace",
    "Instagram Shop",
    "Own Website",
    "Shopify",
    "Other",
]

# (substring, icon class); first match wins
_PLATFORM_ICONS = [
    ("ebay", "fa-brands fa-ebay"),
    ("etsy", "fa-brands fa-etsy"),
    ("amazon", "fa-brands fa-amazon"),
    ("instagram", "fa-brands fa-instagram"),
    ("facebook", "fa-brands fa-facebook"),
    ("vinted", "fa-solid fa-tag"),
    ("pinterest", "fa-brands fa-pinterest"),
    ("tiktok", "fa-brands fa-tiktok"),
    ("shopify", "fa-brands fa-shopify"),
    ("twitter", "fa-brands fa-twitter"),
    ("x.com", "fa-brands fa-twitter"),
]
_DEFAULT_ICON = "fa-solid fa-shopping-cart"


def platform_icon_class(platform_name: str) -> str:
    name = (platform_name or "").lower()
    for key, icon in _PLATFORM_ICONS:
        if key in name:
            return icon
    return _DEFAULT_ICON


def format_url(url: Optional[str]) -> str:
    """Prefix https:// when the url has no http(s) scheme."""
    if not url:
        return ""
    url = url.strip()
    if not re.match(r"^https?://", url, re.IGNORECASE):
        return f"https://{url}"
    return url


def extract_domain(url: str) -> str:
    host = urlparse(format_url(url)).hostname
    if not host:
        return url
    return re.sub(r"^www\.", "", host)


def get_online_sales_links_by_place_id(place_id: int) -> list[dict]:
    with get_conn() as conn:
        rows = online_sales_repo.list_by_place(conn, place_id)
        return [dict(r) for r in rows]


def _clean_link(data: dict, partial: bool = False) -> dict:
    out = {}
    for k in ("platform_name", "url", "description"):
        if k in data:
            v = data[k]
            out[k] = v.strip() if isinstance(v, str) else v
    # partial updates may omit required fields but not blank them
    required = [k for k in ("platform_name", "url") if not partial or k in out]
    missing = [k for k in required if not out.get(k)]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")
    if out.get("url"):
        out["url"] = format_url(out["url"])
    return out


def create_online_sales_link(place_id: int, data: dict, log: LogContext) -> dict:
    link = _clean_link(data)
    with get_conn() as conn:
        if not place_repo.exists(conn, place_id):
            raise NotFoundError("Place not found")
        new_id = online_sales_repo.insert_link(
            conn, place_id, link["platform_name"], link["url"], link.get("description")
        )
        after = dict(online_sales_repo.get_one(conn, new_id))
    log.set_entity("ONLINE_SALES_LINK", new_id)
    log.set_after(after)
    return after


def update_online_sales_link(link_id: int, data: dict, log: LogContext) -> dict:
    fields = _clean_link(data, partial=True)
    with get_conn() as conn:
        before = online_sales_repo.get_one(conn, link_id)
        if before is None:
            raise NotFoundError("Online sales link not found")
        online_sales_repo.update_link(conn, link_id, fields)
        after = dict(online_sales_repo.get_one(conn, link_id))
    log.set_entity("ONLINE_SALES_LINK", link_id)
    log.set_before(dict(before))
    log.set_after(after)
    return after


def delete_online_sales_link(link_id: int, log: LogContext):
    with get_conn() as conn:
        if not online_sales_repo.delete_link(conn, link_id):
            raise NotFoundError("Online sales link not found")
    log.set_entity("ONLINE_SALES_LINK", link_id)


def replace_links_for_place(place_id: int, links: list[dict]) -> int:
    """Swap all of a place's links for the given ones in one transaction."""
    cleaned = [dict(_clean_link(l), place_id=place_id) for l in links]
    with get_conn() as conn:
        with transaction(conn):
            online_sales_repo.delete_for_place(conn, place_id)
            online_sales_repo.bulk_insert(conn, cleaned)
    return len(cleaned)
