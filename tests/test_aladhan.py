import datetime

import pytest
import requests

from vaktija.calendar.aladhan import AladhanBackend
from vaktija.calendar.errors import ApiError, FetchFailed, InvalidResponseShape


@pytest.fixture
def backend():
    return AladhanBackend({"base_url": "https://api.example.test/v1/", "timeout": 5})


def _patch_get(monkeypatch, response, calls=None):
    def fake_get(url, params=None, timeout=None):
        if calls is not None:
            calls.append((url, params, timeout))
        return response
    monkeypatch.setattr("vaktija.calendar.aladhan.requests.get", fake_get)


def test_fetch_hijri_month_builds_url_and_parses(monkeypatch, backend, fake_response, month_payload) -> None:
    calls = []
    payload = {"code": 200, "status": "OK", "data": month_payload(datetime.date(2026, 2, 18), 30)}
    _patch_get(monkeypatch, fake_response(payload), calls)

    days = backend.fetch_hijri_month("Sarajevo", "Bosnia and Herzegovina", 1447, 9, method=13)

    assert len(days) == 30
    assert days[0].date.gregorian.date == "18-02-2026"
    url, params, timeout = calls[0]
    assert url == "https://api.example.test/v1/hijriCalendarByCity/1447/9"
    assert params == {"city": "Sarajevo", "country": "Bosnia and Herzegovina", "method": 13}
    assert timeout == 5


def test_optional_params_omitted_and_school_sent(monkeypatch, backend, fake_response) -> None:
    calls = []
    _patch_get(monkeypatch, fake_response({"code": 200, "status": "OK", "data": []}), calls)

    backend.fetch_hijri_month("Tuzla", "BA", 1447, 10, school=1)

    assert calls[0][1] == {"city": "Tuzla", "country": "BA", "school": 1}


def test_gregorian_month_and_year_paths(monkeypatch, backend, fake_response) -> None:
    calls = []
    _patch_get(monkeypatch, fake_response({"code": 200, "status": "OK", "data": []}), calls)

    backend.fetch_gregorian_month("Tuzla", "BA", 2026, 3)
    backend.fetch_gregorian_month("Tuzla", "BA", 2026)

    assert calls[0][0].endswith("/calendarByCity/2026/3")
    assert calls[1][0].endswith("/calendarByCity/2026")


def test_non_200_code_raises_api_error(monkeypatch, backend, fake_response) -> None:
    _patch_get(monkeypatch, fake_response({"code": 400, "status": "Bad Request", "data": "Invalid city"}, 400))

    with pytest.raises(ApiError) as excinfo:
        backend.fetch_hijri_month("Nowhere", "XX", 1447, 9)

    assert excinfo.value.code == 400
    assert excinfo.value.status == "Bad Request"


@pytest.mark.parametrize("payload", [
    {"status": "OK", "data": []},
    {"code": "200", "status": "OK", "data": []},
    ["not", "an", "envelope"],
])
def test_malformed_envelope_raises_invalid_shape(monkeypatch, backend, fake_response, payload) -> None:
    _patch_get(monkeypatch, fake_response(payload))

    with pytest.raises(InvalidResponseShape):
        backend.fetch_hijri_month("Sarajevo", "BA", 1447, 9)


def test_invalid_day_data_raises_invalid_shape(monkeypatch, backend, fake_response, month_payload) -> None:
    data = month_payload(datetime.date(2026, 2, 18), 2)
    data[1]["meta"]["latitude"] = "43.85"
    _patch_get(monkeypatch, fake_response({"code": 200, "status": "OK", "data": data}))

    with pytest.raises(InvalidResponseShape) as excinfo:
        backend.fetch_hijri_month("Sarajevo", "BA", 1447, 9)

    assert "latitude" in str(excinfo.value)


def test_non_json_body_raises_invalid_shape(monkeypatch, backend, fake_response) -> None:
    _patch_get(monkeypatch, fake_response(text="<html>gateway timeout</html>", status_code=504))

    with pytest.raises(InvalidResponseShape):
        backend.fetch_hijri_month("Sarajevo", "BA", 1447, 9)


def test_transport_error_raises_fetch_failed(monkeypatch, backend) -> None:
    def boom(*_args, **_kwargs):
        raise requests.exceptions.ConnectionError("connection refused")
    monkeypatch.setattr("vaktija.calendar.aladhan.requests.get", boom)

    with pytest.raises(FetchFailed):
        backend.fetch_hijri_month("Sarajevo", "BA", 1447, 9)


@pytest.mark.parametrize("bad_date", ["2026-02-23", "31-02-2026", "19.02.2026"])
def test_malformed_gregorian_date_raises_invalid_shape(monkeypatch, backend, fake_response, month_payload,
                                                       bad_date) -> None:
    data = month_payload(datetime.date(2026, 2, 18), 3)
    data[2]["date"]["gregorian"]["date"] = bad_date
    _patch_get(monkeypatch, fake_response({"code": 200, "status": "OK", "data": data}))

    with pytest.raises(InvalidResponseShape) as excinfo:
        backend.fetch_hijri_month("Sarajevo", "BA", 1447, 9)

    assert "gregorian.date" in str(excinfo.value)
