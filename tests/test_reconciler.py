"""Unit tests for payload reconciliation and derived views."""

import pytest
from fakes import make_payload, make_raw_item

from animeflix.errors import TransportError
from animeflix.models import Genre, Images, MediaItem, Mode, PageResult, Pagination, Trailer
from animeflix.reconciler import carousel, featured, grid, parse_item, reconcile, shows_pagination


class TestParseItem:
    def test_full_item(self) -> None:
        item = parse_item(make_raw_item(1, "Cowboy Bebop", score=8.75, year=1998))

        assert item.id == 1
        assert item.title == "Cowboy Bebop"
        assert item.images == Images(
            small="https://cdn.example/1t.jpg",
            medium="https://cdn.example/1.jpg",
            large="https://cdn.example/1l.jpg",
        )
        assert item.score == 8.75
        assert item.year == 1998
        assert item.type == "TV"
        assert item.trailer == Trailer(
            url=None,
            embed_url="https://www.youtube.com/embed/vid1?enablejsapi=1",
            youtube_id="vid1",
        )
        assert item.genres == (Genre(1, "Action"),)

    def test_absent_fields_become_explicit_empty_values(self) -> None:
        item = parse_item({"mal_id": 5, "title": "Bare"})

        assert item == MediaItem(id=5, title="Bare")
        assert item.images == Images("", "", "")
        assert item.score is None
        assert item.year is None
        assert item.type == ""
        assert item.synopsis == ""
        assert item.trailer.is_empty
        assert item.genres == ()

    def test_null_fields_become_explicit_empty_values(self) -> None:
        raw = make_raw_item(
            2,
            score=None,
            year=None,
            synopsis=None,
            type=None,
            images=None,
            trailer={"url": None, "embed_url": None, "youtube_id": None},
            genres=None,
        )

        item = parse_item(raw)

        assert item.score is None
        assert item.year is None
        assert item.synopsis == ""
        assert item.type == ""
        assert item.images == Images()
        assert item.trailer == Trailer()
        assert item.genres == ()

    def test_item_without_id_is_rejected(self) -> None:
        with pytest.raises(TransportError):
            parse_item({"title": "No id"})

    def test_non_object_item_is_rejected(self) -> None:
        with pytest.raises(TransportError, match="not an object"):
            parse_item("Naruto")


class TestReconcile:
    def test_preserves_order(self) -> None:
        payload = {"data": [make_raw_item(i) for i in (30, 4, 17)]}

        result = reconcile(Mode.SEARCH, payload)

        assert [item.id for item in result.items] == [30, 4, 17]
        assert result.mode is Mode.SEARCH

    def test_pagination(self) -> None:
        result = reconcile(Mode.BROWSE, make_payload(3, last_page=40, has_next=True))
        assert result.pagination == Pagination(last_page=40, has_next=True)

    def test_missing_pagination_defaults_to_single_page(self) -> None:
        result = reconcile(Mode.BROWSE, {"data": []})
        assert result.pagination == Pagination(last_page=1, has_next=False)
        assert result.items == ()

    def test_missing_data_is_an_empty_page(self) -> None:
        assert reconcile(Mode.BROWSE, {}).items == ()

    @pytest.mark.parametrize("payload", [None, [], "data", {"data": {"mal_id": 1}}])
    def test_rejects_unexpected_payload(self, payload: object) -> None:
        with pytest.raises(TransportError):
            reconcile(Mode.BROWSE, payload)

    def test_rejects_page_with_non_object_entry(self) -> None:
        payload = {"data": [make_raw_item(1), None, make_raw_item(2)]}

        with pytest.raises(TransportError):
            reconcile(Mode.BROWSE, payload)


class TestDerivedViews:
    def test_single_page_browse(self) -> None:
        result = reconcile(Mode.BROWSE, make_payload(10))

        hero = featured("", result.items)
        assert hero is not None and hero.id == 1
        assert [item.id for item in carousel("", result.items)] == list(range(2, 11))
        assert grid("", result.items) == ()
        assert shows_pagination(result) is False

    def test_browse_with_more_than_ten(self, top_result: PageResult) -> None:
        assert len(carousel("", top_result.items)) == 9
        assert [item.id for item in grid("", top_result.items)] == list(range(11, 26))
        assert shows_pagination(top_result) is True

    def test_search_mode(self, top_result: PageResult) -> None:
        assert featured("bebop", top_result.items) is None
        assert carousel("bebop", top_result.items) == ()
        assert grid("bebop", top_result.items) == top_result.items

    def test_whitespace_query_counts_as_browse(self, top_result: PageResult) -> None:
        assert featured("  ", top_result.items) == top_result.items[0]

    def test_empty_results(self) -> None:
        assert featured("", ()) is None
        assert carousel("", ()) == ()
        assert grid("", ()) == ()
        assert shows_pagination(None) is False
