from antiques_trail.db import get_conn
from antiques_trail.repository import place_repo
from antiques_trail.scripts.clean_opening_hours import clean_all, clean_hours_text


def test_clean_hours_text():
    assert clean_hours_text("Mon-Sat: 09:00-17:30") == "Mon-Sat: 9:00-17:30"
    assert clean_hours_text("Tue 07.30am - 05pm") == "Tue 7.30am - 5pm"
    assert clean_hours_text("Sun: 0By appointment") == "Sun: By appointment"
    assert clean_hours_text("Wed: 00Closed") == "Wed: Closed"
    assert clean_hours_text("10:00-18:00") == "10:00-18:00"
    assert clean_hours_text("") == ""
    assert clean_hours_text(None) is None


def test_clean_all_dry_run_and_write(make_place):
    pid = make_place(opening_hours="Mon: 09:30-17:00")
    make_place("Tidy", opening_hours="Mon: 10:00-16:00")

    changes = clean_all(dry_run=True)
    assert changes == [{"id": pid, "name": "Georgian Antiques", "before": "Mon: 09:30-17:00", "after": "Mon: 9:30-17:00"}]
    with get_conn() as conn:
        assert place_repo.get_one(conn, pid)["opening_hours"] == "Mon: 09:30-17:00"

    clean_all()
    with get_conn() as conn:
        assert place_repo.get_one(conn, pid)["opening_hours"] == "Mon: 9:30-17:00"
    assert clean_all(dry_run=True) == []
