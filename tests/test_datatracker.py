import asyncio

import httpx
import pytest
import respx

from intsoc.datatracker import DataTrackerClient, DraftInfo, GroupInfo
from intsoc.errors import ApiError, DeserializeError, HttpError, NotFoundError

DOC_URL = "https://datatracker.ietf.org/api/v1/doc/document/draft-example-foo/"

DRAFT_JSON = {
    "name": "draft-example-foo",
    "title": "Foo Protocol",
    "rev": "03",
    "pages": 12,
    "time": "2026-02-08T10:00:00",
    "expires": None,
    "group": {"acronym": "httpbis", "name": "HTTP", "type": "wg"},
    "stream": "ietf",
    "intended_std_level": "ps",
    "unrelated": [1, 2],
}


def _run(call):
    async def go():
        async with DataTrackerClient() as client:
            return await call(client)

    return asyncio.run(go())


def test_get_draft_parses_fields():
    with respx.mock() as router:
        route = router.get(DOC_URL).mock(return_value=httpx.Response(200, json=DRAFT_JSON))
        info = _run(lambda c: c.get_draft("draft-example-foo"))
    assert route.called
    assert info.name == "draft-example-foo"
    assert info.rev == "03"
    assert info.pages == 12
    assert info.expires is None
    assert info.group == GroupInfo(acronym="httpbis", name="HTTP", group_type="wg")
    assert info.intended_std_level == "ps"


def test_get_draft_sends_user_agent():
    with respx.mock() as router:
        route = router.get(DOC_URL).mock(return_value=httpx.Response(200, json=DRAFT_JSON))
        info = _run(lambda c: c.get_draft("draft-example-foo"))
    assert info.title == "Foo Protocol"
    assert route.calls.last.request.headers["user-agent"] == "intsoc/0.1.0"


def test_get_draft_not_found():
    with respx.mock() as router:
        router.get(DOC_URL).mock(return_value=httpx.Response(404))
        with pytest.raises(NotFoundError) as info:
            _run(lambda c: c.get_draft("draft-example-foo"))
    assert info.value.resource == "draft-example-foo"


def test_get_draft_server_error():
    with respx.mock() as router:
        router.get(DOC_URL).mock(return_value=httpx.Response(500, text="boom"))
        with pytest.raises(ApiError) as info:
            _run(lambda c: c.get_draft("draft-example-foo"))
    assert info.value.status == 500
    assert info.value.message == "boom"


def test_get_draft_bad_schema():
    broken = {key: value for key, value in DRAFT_JSON.items() if key != "title"}
    with respx.mock() as router:
        router.get(DOC_URL).mock(return_value=httpx.Response(200, json=broken))
        with pytest.raises(DeserializeError):
            _run(lambda c: c.get_draft("draft-example-foo"))


def test_get_draft_connection_failure():
    with respx.mock() as router:
        router.get(DOC_URL).mock(side_effect=httpx.ConnectError("unreachable"))
        with pytest.raises(HttpError):
            _run(lambda c: c.get_draft("draft-example-foo"))


def test_is_name_available():
    with respx.mock() as router:
        router.get(DOC_URL).mock(return_value=httpx.Response(404))
        assert _run(lambda c: c.is_name_available("draft-example-foo")) is True
    with respx.mock() as router:
        router.get(DOC_URL).mock(return_value=httpx.Response(200, json=DRAFT_JSON))
        assert _run(lambda c: c.is_name_available("draft-example-foo")) is False


def test_is_name_available_propagates_errors():
    with respx.mock() as router:
        router.get(DOC_URL).mock(return_value=httpx.Response(503, text="down"))
        with pytest.raises(ApiError) as info:
            _run(lambda c: c.is_name_available("draft-example-foo"))
    assert info.value.status == 503


def test_submission_status():
    body = {
        "objects": [
            {
                "id": 42,
                "name": "draft-example-foo",
                "rev": "00",
                "state": "posted",
                "submission_date": "2026-01-01",
            }
        ]
    }
    with respx.mock() as router:
        route = router.get(
            host="datatracker.ietf.org", path="/api/v1/submit/submission/"
        ).mock(return_value=httpx.Response(200, json=body))
        statuses = _run(lambda c: c.submission_status("draft-example-foo"))
    assert [s.id for s in statuses] == [42]
    assert statuses[0].state == "posted"
    params = route.calls.last.request.url.params
    assert params["name"] == "draft-example-foo"
    assert params["format"] == "json"


def test_submission_status_not_found_is_api_error():
    with respx.mock() as router:
        router.get(host="datatracker.ietf.org", path="/api/v1/submit/submission/").mock(
            return_value=httpx.Response(404, text="missing")
        )
        with pytest.raises(ApiError) as info:
            _run(lambda c: c.submission_status("draft-example-foo"))
    assert not isinstance(info.value, NotFoundError)
    assert info.value.status == 404


def test_draft_info_round_trip():
    info = DraftInfo.from_dict(DRAFT_JSON)
    data = info.to_dict()
    assert data["group"]["type"] == "wg"
    assert DraftInfo.from_dict(data) == info