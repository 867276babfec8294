from unittest.mock import MagicMock

import pytest
import requests

from lifetrack.errors import RemoteError
from lifetrack.remote.postgrest import PostgrestStorageClient

from conftest import make_new_entry


def response(status_code=200, body=None, text=""):
    mock = MagicMock()
    mock.status_code = status_code
    mock.content = b"" if body is None else b"x"
    mock.text = text
    if body is None:
        mock.json.side_effect = ValueError("no body")
    else:
        mock.json.return_value = body
    return mock


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(session):
    return PostgrestStorageClient(
        "https://db.example.com/",
        api_key="anon-key",
        access_token="user-token",
        timeout=5,
        session=session,
    )


@pytest.mark.asyncio
async def test_fetch_entries(client, session):
    session.request.return_value = response(
        body=[
            {
                "id": 7,
                "date": "2024-03-05",
                "track_type_id": "t1",
                "value": "12.5",
                "note": None,
                "metadata": {},
            }
        ]
    )

    entries = await client.fetch_entries("alice")

    assert entries == [
        {
            "id": "7",
            "date": "2024-03-05",
            "track_type_id": "t1",
            "value": 12.5,
            "note": None,
            "metadata": None,
        }
    ]
    method, url = session.request.call_args.args
    kwargs = session.request.call_args.kwargs
    assert method == "GET"
    assert url == "https://db.example.com/rest/v1/entries"
    assert kwargs["params"]["user_id"] == "eq.alice"
    assert kwargs["params"]["order"] == "date.asc"
    assert kwargs["headers"]["Authorization"] == "Bearer user-token"
    assert kwargs["headers"]["apikey"] == "anon-key"
    assert kwargs["timeout"] == 5


@pytest.mark.asyncio
async def test_create_entry_sends_user_id(client, session):
    session.request.return_value = response(
        status_code=201,
        body=[
            {
                "id": "e1",
                "date": "2024-03-05",
                "track_type_id": "t1",
                "value": 3,
                "note": None,
                "metadata": None,
            }
        ],
    )

    created = await client.create_entry("alice", make_new_entry("2024-03-05", "t1", 3))

    assert created["id"] == "e1"
    payload = session.request.call_args.kwargs["json"]
    assert payload["user_id"] == "alice"
    assert payload["date"] == "2024-03-05"


@pytest.mark.asyncio
async def test_patch_sends_only_present_fields(client, session):
    session.request.return_value = response(body=[])

    assert await client.patch_entry("alice", "e1", {"note": None}) is None

    kwargs = session.request.call_args.kwargs
    assert session.request.call_args.args[0] == "PATCH"
    assert kwargs["json"] == {"note": None}
    assert kwargs["params"]["id"] == "eq.e1"
    assert kwargs["params"]["user_id"] == "eq.alice"


@pytest.mark.asyncio
async def test_delete_with_empty_response(client, session):
    session.request.return_value = response(status_code=204)
    await client.delete_track_type("alice", "t1")
    assert session.request.call_args.args[0] == "DELETE"


@pytest.mark.asyncio
async def test_backend_message_is_surfaced(client, session):
    session.request.return_value = response(
        status_code=403,
        body={"message": "new row violates row-level security policy"},
    )
    with pytest.raises(RemoteError) as excinfo:
        await client.fetch_track_types("alice")
    assert excinfo.value.message == "new row violates row-level security policy"
    assert excinfo.value.status == 403


@pytest.mark.asyncio
async def test_error_without_json_body(client, session):
    session.request.return_value = response(status_code=502, text="Bad Gateway")
    with pytest.raises(RemoteError) as excinfo:
        await client.fetch_entries("alice")
    assert excinfo.value.message == "Bad Gateway"


@pytest.mark.asyncio
async def test_timeout_and_connection_errors(client, session):
    session.request.side_effect = requests.exceptions.Timeout()
    with pytest.raises(RemoteError, match="timed out"):
        await client.fetch_entries("alice")

    session.request.side_effect = requests.exceptions.ConnectionError("refused")
    with pytest.raises(RemoteError, match="failed"):
        await client.fetch_entries("alice")


def test_base_url_trailing_slash_is_dropped():
    client = PostgrestStorageClient("https://db.example.com/", api_key="anon-key")
    assert client.base_url == "https://db.example.com"


@pytest.mark.asyncio
async def test_malformed_rows_are_remote_errors(client, session):
    session.request.return_value = response(body=[{"date": "2024-03-05"}])
    with pytest.raises(RemoteError, match="Malformed entries row"):
        await client.fetch_entries("alice")

    session.request.return_value = response(body=["not a row"])
    with pytest.raises(RemoteError, match="Malformed track_types row"):
        await client.fetch_track_types("alice")

    session.request.return_value = response(
        body=[{"id": "e1", "date": "2024-03-05", "track_type_id": "t", "value": "lots"}]
    )
    with pytest.raises(RemoteError, match="Malformed entries row"):
        await client.fetch_entries("alice")
