from antiques_trail.services.online_sales_svc import (
    extract_domain,
    format_url,
    platform_icon_class,
    replace_links_for_place,
    get_online_sales_links_by_place_id,
)


def test_format_url():
    assert format_url("etsy.com/shop/x") == "https://etsy.com/shop/x"
    assert format_url("http://example.com") == "http://example.com"
    assert format_url("HTTPS://Example.com") == "HTTPS://Example.com"
    assert format_url("") == ""
    assert format_url(None) == ""


def test_extract_domain():
    assert extract_domain("https://www.ebay.co.uk/str/shop") == "ebay.co.uk"
    assert extract_domain("etsy.com/shop/x") == "etsy.com"


def test_platform_icon_class():
    assert platform_icon_class("eBay") == "fa-brands fa-ebay"
    assert platform_icon_class("Facebook Marketplace") == "fa-brands fa-facebook"
    assert platform_icon_class("Own Website") == "fa-solid fa-shopping-cart"


def test_replace_links_for_place(make_place):
    pid = make_place()
    replace_links_for_place(pid, [{"platform_name": "eBay", "url": "ebay.co.uk/a"}])
    n = replace_links_for_place(pid, [
        {"platform_name": "Vinted", "url": "vinted.co.uk/b"},
        {"platform_name": "Etsy", "url": "https://etsy.com/c", "description": "Prints"},
    ])
    assert n == 2
    links = get_online_sales_links_by_place_id(pid)
    assert [l["platform_name"] for l in links] == ["Etsy", "Vinted"]
    assert links[1]["url"] == "https://vinted.co.uk/b"
