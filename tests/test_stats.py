"""Tests for dashboard statistics."""
from datetime import datetime, timedelta, timezone

from bloodconnect.services.stats import completion_rate, start_of_local_day


def test_completion_rate():
    assert completion_rate(0, 0) == 0
    assert completion_rate(1, 3) == 33
    assert completion_rate(2, 3) == 67
    assert completion_rate(4, 4) == 100


def test_start_of_local_day_is_not_after_now():
    utc_now = datetime.utcnow()
    midnight = start_of_local_day(utc_now)

    assert midnight <= utc_now
    assert utc_now - midnight < timedelta(days=1, hours=1)


def test_start_of_local_day_reads_naive_as_utc():
    instant = datetime(2026, 3, 1, 12, 0, 0)

    assert start_of_local_day(instant) == start_of_local_day(instant.replace(tzinfo=timezone.utc))
    assert start_of_local_day(instant) <= instant


def test_admin_stats_today_boundary_from_naive_utc(make_donor, make_request, store):
    donor = make_donor()
    request = make_request()
    now = datetime.utcnow()
    store.record_donation({"donor_id": donor.id, "request_id": request.id, "donation_date": now})

    assert store.get_admin_stats(now=now)["today_donations"] == 1
    assert store.get_admin_stats(now=now + timedelta(days=2))["today_donations"] == 0


def test_empty_portal(store):
    assert store.get_public_stats() == {
        "total_donors": 0,
        "total_donations": 0,
        "active_requests": 0,
        "completed_requests": 0,
    }
    assert store.get_admin_stats()["completion_rate"] == 0


def test_public_stats_count_only_approved_donors(make_donor, store):
    make_donor(approval="approved")
    make_donor(approval="approved")
    make_donor()
    make_donor(approval="rejected")

    assert store.get_public_stats()["total_donors"] == 2

    admin = store.get_admin_stats()
    assert admin["total_donors"] == 4
    assert admin["approved_donors"] == 2
    assert admin["pending_donors"] == 1


def test_request_counts(make_request, store):
    make_request()
    make_request(approval="approved")
    make_request(approval="approved", status="in_progress")
    done = make_request(approval="approved", status="in_progress")
    store.set_request_status(done.id, "completed")

    public = store.get_public_stats()
    assert public["active_requests"] == 1
    assert public["completed_requests"] == 1

    admin = store.get_admin_stats()
    assert admin["total_requests"] == 4
    assert admin["completion_rate"] == 25


def test_today_donations(make_donor, make_request, store):
    donor = make_donor()
    request = make_request()
    store.record_donation({"donor_id": donor.id, "request_id": request.id})
    store.record_donation({
        "donor_id": donor.id,
        "request_id": request.id,
        "donation_date": datetime.utcnow() - timedelta(days=3),
    })

    admin = store.get_admin_stats()

    assert admin["total_donations"] == 2
    assert admin["today_donations"] == 1
    assert store.get_public_stats()["total_donations"] == 2
