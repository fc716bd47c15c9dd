"""Unit tests for CLI display helpers."""

import pytest
from fakes import make_payload

from animeflix.cli.display_helpers import (
    display_view,
    format_item,
    format_pagination,
    page_numbers,
    synopsis_preview,
    view_as_json,
    youtube_watch_url,
)
from animeflix.models import MediaItem, Mode, PageResult, Pagination, QueryIntent, Trailer, ViewState
from animeflix.reconciler import reconcile


class TestPageNumbers:
    def test_few_pages_are_all_shown(self) -> None:
        assert page_numbers(5, 3) == [1, 2, 3, 4, 5]
        assert page_numbers(7, 1) == [1, 2, 3, 4, 5, 6, 7]

    def test_start(self) -> None:
        assert page_numbers(20, 1) == [1, 2, "...", 20]
        assert page_numbers(20, 3) == [1, 2, 3, 4, "...", 20]

    def test_middle(self) -> None:
        assert page_numbers(20, 10) == [1, "...", 9, 10, 11, "...", 20]

    def test_end(self) -> None:
        assert page_numbers(20, 20) == [1, "...", 19, 20]
        assert page_numbers(20, 18) == [1, "...", 17, 18, 19, 20]


class TestYoutubeWatchUrl:
    def test_prefers_url(self) -> None:
        trailer = Trailer(url="https://www.youtube.com/watch?v=abc", youtube_id="zzz")
        assert youtube_watch_url(trailer) == "https://www.youtube.com/watch?v=abc"

    def test_builds_from_youtube_id(self) -> None:
        assert youtube_watch_url(Trailer(youtube_id="xyz")) == "https://www.youtube.com/watch?v=xyz"

    def test_extracts_id_from_embed_url(self) -> None:
        trailer = Trailer(embed_url="https://www.youtube.com/embed/qig4KOK2R2g?enablejsapi=1&autoplay=1")
        assert youtube_watch_url(trailer) == "https://www.youtube.com/watch?v=qig4KOK2R2g"

    def test_no_trailer(self) -> None:
        assert youtube_watch_url(Trailer()) is None
        assert youtube_watch_url(Trailer(embed_url="https://example.com/player")) is None


class TestFormatting:
    def test_synopsis_preview(self) -> None:
        assert synopsis_preview("short") == "short"
        assert synopsis_preview("a" * 250) == "a" * 200 + "..."

    def test_format_item(self) -> None:
        item = MediaItem(id=1, title="Akira", score=8.2, year=1988, type="Movie")
        assert format_item(item) == "[Movie] Akira (1988)  * 8.2"
        assert format_item(item, rank=2) == "#2  [Movie] Akira (1988)  * 8.2"

    def test_format_item_without_optional_fields(self) -> None:
        assert format_item(MediaItem(id=1, title="Akira")) == "Akira"

    def test_format_pagination(self) -> None:
        assert format_pagination(Pagination(last_page=3, has_next=True), 1) == "    [1] 2 3  Next ->"
        assert format_pagination(Pagination(last_page=3, has_next=False), 3) == "<- Previous  1 2 [3]"


class TestDisplayView:
    def test_browse(self, capsys: pytest.CaptureFixture[str]) -> None:
        result = reconcile(Mode.BROWSE, make_payload(12, last_page=2, has_next=True))
        display_view(ViewState(result=result))

        output = capsys.readouterr().out
        assert "top anime | page 1" in output
        assert "#1  [TV] Anime 1 (2020)" in output
        assert "Watch: https://www.youtube.com/watch?v=vid1" in output
        assert "Top 10 Anime" in output
        assert "#10 [TV] Anime 10" in output
        assert "  [TV] Anime 12 (2020)" in output
        assert "[1] 2  Next ->" in output

    def test_search_without_results(self, capsys: pytest.CaptureFixture[str]) -> None:
        state = ViewState(intent=QueryIntent(text="zzz"), result=PageResult(mode=Mode.SEARCH))
        display_view(state)

        output = capsys.readouterr().out
        assert "search 'zzz'" in output
        assert "No anime found" in output
        assert "Top 10" not in output

    def test_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        display_view(ViewState(intent=QueryIntent(genres=frozenset({1, 22})), error="offline"))

        output = capsys.readouterr().out
        assert "genres: Action, Romance" in output
        assert "Error: offline" in output
        assert "retry" in output

    def test_loading(self, capsys: pytest.CaptureFixture[str]) -> None:
        display_view(ViewState(loading=True))
        assert "Loading..." in capsys.readouterr().out


class TestViewAsJson:
    def test_browse(self) -> None:
        result = reconcile(Mode.BROWSE, make_payload(11))
        data = view_as_json(ViewState(result=result))

        assert data["mode"] == "browse"
        assert data["featured"]["id"] == 1
        assert len(data["carousel"]) == 9
        assert [item["id"] for item in data["grid"]] == [11]
        assert data["pagination"] == {"last_page": 1, "has_next": False}

    def test_nothing_loaded(self) -> None:
        data = view_as_json(ViewState(intent=QueryIntent(text="x", genres=frozenset({4, 1}), page=2)))

        assert data["mode"] == "search"
        assert data["genres"] == [1, 4]
        assert data["page"] == 2
        assert data["featured"] is None
        assert data["pagination"] is None
        assert data["grid"] == []
