import httpx
import pytest

from models import Artist, RawArtist
from services import (ArtistSearchTransport, BadResponse, DecodingFailure,
                      InvalidURL, NetworkFailure, SelectionStore)

BASE_URL = "https://api.artic.edu"
SEARCH_PATH = "/api/v1/artists/search"


def make_transport(handler, base_url=BASE_URL):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return ArtistSearchTransport(base_url, SEARCH_PATH, client=client)


# ===========================================================================
# ArtistSearchTransport
# ===========================================================================


@pytest.fixture
def url_transport():
    """Builds transports for URL tests and closes their clients afterwards."""
    created = []

    def build(base_url=BASE_URL):
        transport = ArtistSearchTransport(base_url, SEARCH_PATH)
        created.append(transport)
        return transport

    yield build
    for transport in created:
        transport.close()


class TestBuildUrl:
    def test_query_is_percent_encoded_into_the_path(self, url_transport):
        transport = url_transport()
        url = transport.build_url("AC/DC & co")

        assert url.host == "api.artic.edu"
        assert url.path == SEARCH_PATH
        assert url.params["q"] == "AC/DC & co"
        assert " " not in str(url)

    def test_missing_scheme_is_invalid(self, url_transport):
        transport = url_transport("not a url")
        with pytest.raises(InvalidURL):
            transport.build_url("monet")

    def test_non_http_scheme_is_invalid(self, url_transport):
        transport = url_transport("ftp://api.artic.edu")
        with pytest.raises(InvalidURL) as exc_info:
            transport.build_url("monet")
        assert exc_info.value.url.startswith("ftp://")

    def test_close_releases_the_client(self):
        client = httpx.Client()
        transport = ArtistSearchTransport(BASE_URL, SEARCH_PATH, client=client)

        transport.close()

        assert client.is_closed


class TestFetch:
    def test_decodes_the_data_envelope(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"data": [
                {"id": 1, "title": "Claude Monet", "_score": 12.5},
                {"id": 2, "title": "Monet Workshop"},
            ]})

        artists = make_transport(handler).fetch("claude monet")

        assert artists == [RawArtist(1, "Claude Monet"), RawArtist(2, "Monet Workshop")]
        assert len(requests) == 1
        assert requests[0].method == "GET"
        assert requests[0].url.params["q"] == "claude monet"

    def test_empty_data_is_an_empty_list(self):
        transport = make_transport(lambda request: httpx.Response(200, json={"data": []}))
        assert transport.fetch("zzzz") == []

    def test_non_success_status_is_bad_response(self):
        transport = make_transport(lambda request: httpx.Response(500, text="oops"))
        with pytest.raises(BadResponse) as exc_info:
            transport.fetch("monet")
        assert exc_info.value.status == 500

    def test_invalid_json_is_decoding_failure(self):
        transport = make_transport(lambda request: httpx.Response(200, text="<html>"))
        with pytest.raises(DecodingFailure):
            transport.fetch("monet")

    def test_missing_data_key_is_decoding_failure(self):
        transport = make_transport(lambda request: httpx.Response(200, json={"items": []}))
        with pytest.raises(DecodingFailure):
            transport.fetch("monet")

    @pytest.mark.parametrize("item", [
        {"id": 1},
        {"title": "No id"},
        {"id": "1", "title": "String id"},
        {"id": True, "title": "Bool id"},
        "Claude Monet",
    ])
    def test_malformed_artist_is_decoding_failure(self, item):
        transport = make_transport(lambda request: httpx.Response(200, json={"data": [item]}))
        with pytest.raises(DecodingFailure):
            transport.fetch("monet")

    def test_connection_error_is_network_failure(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(NetworkFailure) as exc_info:
            make_transport(handler).fetch("monet")
        assert "connection refused" in str(exc_info.value)


# ===========================================================================
# SelectionStore
# ===========================================================================


class TestSelectionStore:
    def test_save_marks_the_stored_copy_selected(self):
        store = SelectionStore()
        artist = Artist(1, "Claude Monet", selected=False)

        saved = store.save(artist)

        assert saved.selected is True
        assert artist.selected is False
        assert store.list() == [Artist(1, "Claude Monet", True)]

    def test_list_keeps_selection_order(self):
        store = SelectionStore()
        for artist_id in (3, 1, 2):
            store.save(Artist(artist_id, f"Artist {artist_id}"))

        assert [a.id for a in store.list()] == [3, 1, 2]
        assert store.list_ids() == {1, 2, 3}

    def test_saving_an_id_twice_keeps_one_entry_in_place(self):
        store = SelectionStore()
        store.save(Artist(1, "Claude Monet"))
        store.save(Artist(2, "Claude Lorrain"))
        store.save(Artist(1, "Claude Monet (renamed)"))

        assert [(a.id, a.title) for a in store.list()] == [
            (1, "Claude Monet (renamed)"),
            (2, "Claude Lorrain"),
        ]
        assert len(store) == 2

    def test_remove_absent_id_is_a_no_op(self):
        store = SelectionStore()
        store.save(Artist(1, "Claude Monet"))

        store.remove(42)

        assert 1 in store
        assert len(store) == 1

    def test_clear_empties_the_store(self):
        store = SelectionStore()
        store.save(Artist(1, "Claude Monet"))
        store.clear()

        assert store.list() == []
        assert store.list_ids() == set()

    def test_list_returns_copies(self):
        store = SelectionStore()
        store.save(Artist(1, "Claude Monet"))

        store.list()[0].selected = False

        assert store.list()[0].selected is True
