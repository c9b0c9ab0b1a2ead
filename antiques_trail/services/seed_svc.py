from __future__ import annotations

# antiques_trail/services/seed_svc.py
import logging

from ..db import get_conn, transaction
from ..repository import place_type_repo, specialty_repo

logger = logging.getLogger(__name__)

DEFAULT_PLACE_TYPES = [
    ("Antique Shop", "Shops selling antique furniture, decorative items, and collectibles."),
    ("Auction House", "Establishments that conduct auctions of antiques and collectibles."),
    ("Second-hand Book Shop", "Shops specializing in used, rare, and antiquarian books."),
    ("Record Shop", "Shops selling vinyl records, including rare and vintage recordings."),
    ("Vintage Clothing Shop", "Shops specializing in period clothing and accessories."),
    ("Antique Fair", "Regular or periodic events featuring multiple antique dealers."),
    ("Furniture Shop", "Shops focused on antique and second-hand furniture."),
    ("Charity Shop", "Charity-run shops selling donated second-hand goods."),
]

DEFAULT_SPECIALTIES = [
    ("Furniture", "Antique furniture pieces of various styles and eras"),
    ("Art", "Fine art, paintings, prints and drawings"),
    ("Jewelry", "Antique and vintage jewelry pieces"),
    ("Silver", "Silver items including tableware, decorative items and collectibles"),
    ("Ceramics & Pottery", "Ceramic and pottery items from various periods"),
    ("Glassware", "Antique glass including decanters, vases and tableware"),
    ("Books & Maps", "Antique books, maps and printed materials"),
    ("Textiles", "Antique textiles, rugs, tapestries and clothing"),
    ("Clocks & Watches", "Antique timepieces"),
    ("Militaria", "Military antiques and collectibles"),
    ("Lighting", "Antique lamps, chandeliers and lighting fixtures"),
    ("Scientific Instruments", "Antique scientific and medical instruments"),
    ("Toys & Games", "Antique toys, games and dolls"),
    ("Asian Antiques", "Antiques from China, Japan and wider Asia"),
    ("European Antiques", "Continental European antiques"),
    ("Scottish Antiques", "Specifically Scottish antiques and artifacts"),
    ("Mid-Century Modern", "Items from the mid-20th century modern design period"),
    ("Art Deco", "Art Deco period items from the 1920s and 1930s"),
    ("Art Nouveau", "Art Nouveau period items from the late 19th/early 20th century"),
    ("Victorian", "Victorian era antiques"),
    ("Georgian", "Georgian era antiques"),
    ("Edwardian", "Edwardian era antiques"),
    ("Restoration & Repair", "Restoration and repair services for antiques"),
    ("Appraisals", "Professional appraisal services"),
]


def seed_defaults() -> dict:
    """Insert the default place types and specialties that are not present yet.

    Every specialty is associated with every place type. Safe to run repeatedly.
    """
    created_types = 0
    created_specialties = 0
    with get_conn() as conn:
        with transaction(conn):
            for name, desc in DEFAULT_PLACE_TYPES:
                if place_type_repo.find_by_name(conn, name) is None:
                    place_type_repo.insert_type(conn, name, desc)
                    created_types += 1
            for name, desc in DEFAULT_SPECIALTIES:
                if specialty_repo.find_by_name(conn, name) is None:
                    specialty_repo.insert_specialty(conn, name, desc)
                    created_specialties += 1
            for t in place_type_repo.list_types(conn):
                for s in specialty_repo.list_main(conn):
                    specialty_repo.link_type(conn, t["id"], s["id"])
    res = {"created_place_types": created_types, "created_specialties": created_specialties}
    logger.info("Seeded defaults: %s", res)
    return res
