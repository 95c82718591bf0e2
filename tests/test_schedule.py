# tests/test_schedule.py
import copy

from app.services.availability import DEFAULT_WORKING_HOURS

URL = "/api/business/schedule"

# 2026-03-02 is a Monday


def _hours(**changes):
    hours = copy.deepcopy(DEFAULT_WORKING_HOURS)
    for day, entry in changes.items():
        hours[int(day[1:])].update(entry)
    return hours


def _add(client, headers, **payload):
    res = client.post(URL, json=payload, headers=headers)
    assert res.status_code == 200, res.text
    return res.json()["exception"]


# ----- schedule -----


def test_get_schedule(client, business_headers):
    res = client.get(URL, headers=business_headers)

    assert res.status_code == 200
    body = res.json()
    assert body["category"] == "salon_owner"
    assert len(body["businessHours"]) == 7
    assert body["exceptions"] == []


def test_get_schedule_job_seeker_has_no_hours(client, make_business, headers_for):
    clerk_id, _ = make_business(category="job_seeker")
    res = client.get(URL, headers=headers_for(clerk_id))

    assert res.json()["businessHours"] == []
    assert res.json()["category"] == "job_seeker"


def test_replace_working_hours(client, business_headers):
    hours = _hours(d6={"isOpen": True, "openTime": "10:00", "closeTime": "14:00"})
    res = client.put(URL, json={"businessHours": hours}, headers=business_headers)
    assert res.status_code == 200
    assert res.json() == {"success": True}

    stored = client.get(URL, headers=business_headers).json()["businessHours"]
    assert stored[6] == {"dayOfWeek": 6, "isOpen": True, "openTime": "10:00", "closeTime": "14:00"}


def test_working_hours_must_be_array(client, business_headers):
    res = client.put(URL, json={"businessHours": "9-5"}, headers=business_headers)
    assert res.status_code == 400
    assert res.json()["error"] == "businessHours must be an array"


def test_working_hours_need_every_weekday(client, business_headers):
    res = client.put(
        URL,
        json={"businessHours": _hours()[:6]},
        headers=business_headers,
    )
    assert res.status_code == 400


def test_working_hours_open_before_close(client, business_headers):
    hours = _hours(d1={"openTime": "18:00", "closeTime": "09:00"})
    res = client.put(URL, json={"businessHours": hours}, headers=business_headers)

    assert res.status_code == 400
    assert res.json()["error"] == "Invalid businessHours"
    assert res.json()["details"]


def test_job_seeker_cannot_set_hours(client, make_business, headers_for):
    clerk_id, _ = make_business(category="job_seeker")
    res = client.put(URL, json={"businessHours": _hours()}, headers=headers_for(clerk_id))

    assert res.status_code == 400
    assert res.json()["error"] == "Cannot update hours for this category"


# ----- exceptions -----


def test_create_full_day_exception(client, business_headers):
    exc = _add(
        client,
        business_headers,
        title="Eid",
        type="holiday",
        date="2026-03-20",
        endDate="2026-03-22",
    )
    assert exc["is_full_day"] is True
    assert exc["end_date"] == "2026-03-22"
    assert exc["start_time"] is None


def test_full_day_flag_clears_times(client, business_headers):
    exc = _add(
        client,
        business_headers,
        title="Closed",
        type="closure",
        date="2026-03-04",
        isFullDay=True,
        startTime="10:00",
        endTime="12:00",
    )
    assert exc["is_full_day"] is True
    assert exc["start_time"] is None and exc["end_time"] is None


def test_timed_exception_drops_end_date(client, business_headers):
    exc = _add(
        client,
        business_headers,
        title="Dentist",
        type="other",
        date="2026-03-04",
        endDate="2026-03-06",
        startTime="14:00",
        endTime="15:00",
    )
    assert exc["is_full_day"] is False
    assert exc["end_date"] is None
    assert exc["start_time"] == "14:00:00"


def test_timed_exception_needs_both_times(client, business_headers):
    res = client.post(
        URL,
        json={"title": "Break", "type": "break", "date": "2026-03-04", "startTime": "14:00"},
        headers=business_headers,
    )
    assert res.status_code == 400


def test_timed_exception_needs_ordered_times(client, business_headers):
    res = client.post(
        URL,
        json={
            "title": "Break",
            "type": "break",
            "date": "2026-03-04",
            "startTime": "15:00",
            "endTime": "14:00",
        },
        headers=business_headers,
    )
    assert res.status_code == 400
    assert res.json()["error"] == "startTime must be before endTime"


def test_exception_requires_title_type_date(client, business_headers):
    res = client.post(URL, json={"title": "Nope"}, headers=business_headers)
    assert res.status_code == 400
    assert res.json()["error"] == "title, type, and date are required"


def test_exception_type_is_checked(client, business_headers):
    res = client.post(
        URL,
        json={"title": "Party", "type": "party", "date": "2026-03-04"},
        headers=business_headers,
    )
    assert res.status_code == 400
    assert "holiday" in res.json()["validTypes"]


def test_recurring_day_defaults_to_anchor_weekday(client, business_headers):
    exc = _add(
        client,
        business_headers,
        title="Lunch",
        type="lunch_break",
        date="2026-03-02",
        startTime="12:00",
        endTime="13:00",
        recurring=True,
    )
    assert exc["recurring"] is True
    assert exc["recurring_day"] == 1


def test_delete_exception_is_idempotent(client, business_headers):
    exc = _add(client, business_headers, title="Off", type="vacation", date="2026-04-01")

    first = client.delete(URL, params={"id": exc["id"]}, headers=business_headers)
    second = client.delete(URL, params={"id": exc["id"]}, headers=business_headers)

    assert first.json() == {"success": True}
    assert second.json() == {"success": True}
    assert client.get(URL, headers=business_headers).json()["exceptions"] == []


def test_exceptions_are_scoped_to_business(client, business_headers, make_business, headers_for):
    exc = _add(client, business_headers, title="Off", type="vacation", date="2026-04-01")
    other_id, _ = make_business()

    client.delete(URL, params={"id": exc["id"]}, headers=headers_for(other_id))

    assert len(client.get(URL, headers=business_headers).json()["exceptions"]) == 1


# ----- calendar / availability -----


def test_calendar_blocks(client, business_headers):
    lunch = _add(
        client,
        business_headers,
        title="Lunch",
        type="lunch_break",
        date="2026-03-02",
        startTime="12:00",
        endTime="13:00",
        recurring=True,
    )
    _add(client, business_headers, title="Closed", type="closure", date="2026-03-04")

    res = client.get(
        f"{URL}/calendar",
        params={"start": "2026-03-01", "end": "2026-03-15"},
        headers=business_headers,
    )
    assert res.status_code == 200
    body = res.json()
    assert body["start"] == "2026-03-01"
    assert body["end"] == "2026-03-15"

    working = [b for b in body["blocks"] if b["kind"] == "working_hours"]
    overlay = [b for b in body["blocks"] if b["kind"] == "exception"]

    # two weeks of Mon-Fri
    assert len(working) == 10
    assert working[0]["start"] == "2026-03-02T09:00:00"

    assert [b["id"] for b in overlay] == [
        lunch["id"],
        overlay[1]["id"],
        f"{lunch['id']}_2026-03-09",
    ]
    closure = overlay[1]
    assert closure["allDay"] is True
    assert closure["start"] == "2026-03-04T00:00:00"
    assert closure["end"] == "2026-03-05T00:00:00"


def test_calendar_rejects_inverted_range(client, business_headers):
    res = client.get(
        f"{URL}/calendar",
        params={"start": "2026-03-10", "end": "2026-03-01"},
        headers=business_headers,
    )
    assert res.status_code == 400


def test_calendar_rejects_huge_range(client, business_headers):
    res = client.get(
        f"{URL}/calendar",
        params={"start": "2026-01-01", "end": "2028-01-01"},
        headers=business_headers,
    )
    assert res.status_code == 400


def test_calendar_default_window(client, business_headers):
    res = client.get(f"{URL}/calendar", headers=business_headers)
    assert res.status_code == 200


def test_availability(client, business_headers):
    _add(
        client,
        business_headers,
        title="Lunch",
        type="lunch_break",
        date="2026-03-02",
        startTime="12:00",
        endTime="13:00",
    )

    def check(date, start, end):
        res = client.get(
            f"{URL}/availability",
            params={"date": date, "start": start, "end": end},
            headers=business_headers,
        )
        assert res.status_code == 200, res.text
        return res.json()["open"]

    assert check("2026-03-02", "10:00", "11:00") is True
    assert check("2026-03-02", "12:30", "13:30") is False
    assert check("2026-03-02", "18:30", "19:30") is False
    assert check("2026-03-01", "10:00", "11:00") is False


def test_availability_rejects_inverted_interval(client, business_headers):
    res = client.get(
        f"{URL}/availability",
        params={"date": "2026-03-02", "start": "11:00", "end": "10:00"},
        headers=business_headers,
    )
    assert res.status_code == 400
