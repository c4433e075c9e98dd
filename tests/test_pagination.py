"""Tests for cursor pagination over the word catalog."""

import pytest

from dictapi.models import Word
from dictapi.services.catalog import SqlWordCatalog, WordCatalog, WordPaginator, clamp_limit
from dictapi.services.errors import InvalidCursorError


class InMemoryCatalog(WordCatalog):
    """Catalog over a plain list, allowing duplicate values."""

    def __init__(self, words: list[Word]) -> None:
        self.words = sorted(words, key=lambda w: (w.value, w.id))

    def _matching(self, search):
        if not search:
            return list(self.words)
        return [w for w in self.words if w.value.lower().startswith(search.lower())]

    async def get(self, word_id):
        return next((w for w in self.words if w.id == word_id), None)

    async def fetch(self, search, limit, after=None, before=None):
        rows = self._matching(search)
        if before is not None:
            rows = [w for w in reversed(rows) if (w.value, w.id) < before]
        elif after is not None:
            rows = [w for w in rows if (w.value, w.id) > after]
        return rows[:limit]

    async def count(self, search=None):
        return len(self._matching(search))


async def _walk_forward(paginator, limit, search=None) -> list[str]:
    ids: list[str] = []
    page = await paginator.list_words(search=search, limit=limit)
    ids.extend(w.id for w in page.results)
    while page.has_next:
        page = await paginator.list_words(search=search, limit=limit, next_cursor=page.next)
        ids.extend(w.id for w in page.results)
    return ids


class TestClampLimit:
    """Tests for clamp_limit."""

    def test_default(self):
        """Should use the default when no limit is given."""
        assert clamp_limit(None) == 50

    def test_bounds(self):
        """Should clamp into [1, 100]."""
        assert clamp_limit(0) == 1
        assert clamp_limit(-5) == 1
        assert clamp_limit(1000) == 100
        assert clamp_limit(20) == 20


class TestListWords:
    """Tests for WordPaginator.list_words against the database."""

    @pytest.fixture
    def paginator(self, async_session, sample_words):
        return WordPaginator(SqlWordCatalog(async_session))

    @pytest.mark.asyncio
    async def test_first_page(self, paginator):
        """Should return the first page with a next cursor."""
        page = await paginator.list_words(limit=2)

        assert [w.value for w in page.results] == ["ant", "bee"]
        assert page.total_docs == 3
        assert page.next == "2"
        assert page.previous == "1"
        assert page.has_next is True
        assert page.has_prev is False

    @pytest.mark.asyncio
    async def test_next_page(self, paginator):
        """Should continue after the next cursor."""
        page = await paginator.list_words(limit=2, next_cursor="2")

        assert [w.value for w in page.results] == ["cat"]
        assert page.next is None
        assert page.previous == "3"
        assert page.has_next is False
        assert page.has_prev is True

    @pytest.mark.asyncio
    async def test_previous_page(self, paginator):
        """Should return the entries before the previous cursor in ascending order."""
        page = await paginator.list_words(limit=2, previous_cursor="3")

        assert [w.value for w in page.results] == ["ant", "bee"]
        assert page.next == "2"
        assert page.previous == "1"
        assert page.has_next is True
        assert page.has_prev is True

    @pytest.mark.asyncio
    async def test_previous_page_keeps_adjacent_entries(self, paginator):
        """Should return the entries right before the cursor."""
        page = await paginator.list_words(limit=1, previous_cursor="3")

        assert [w.value for w in page.results] == ["bee"]

    @pytest.mark.asyncio
    async def test_previous_from_first_entry(self, paginator):
        """Should return an empty page before the first entry."""
        page = await paginator.list_words(limit=2, previous_cursor="1")

        assert page.results == []
        assert page.next is None
        assert page.previous is None
        assert page.total_docs == 3

    @pytest.mark.asyncio
    async def test_search_prefix(self, paginator):
        """Should filter by case-insensitive prefix."""
        page = await paginator.list_words(search="C")

        assert [w.value for w in page.results] == ["cat"]
        assert page.total_docs == 1
        assert page.has_next is False

    @pytest.mark.asyncio
    async def test_search_is_not_trimmed(self, paginator):
        """Should match the prefix exactly, including trailing whitespace."""
        page = await paginator.list_words(search="c ")

        assert page.results == []
        assert page.total_docs == 0

    @pytest.mark.asyncio
    async def test_empty_search_lists_everything(self, paginator):
        """Should treat an empty search as no filter."""
        page = await paginator.list_words(search="")

        assert page.total_docs == 3

    @pytest.mark.asyncio
    async def test_search_no_match(self, paginator):
        """Should return an empty page when nothing matches."""
        page = await paginator.list_words(search="zebra")

        assert page.results == []
        assert page.total_docs == 0
        assert page.next is None
        assert page.previous is None

    @pytest.mark.asyncio
    async def test_search_wildcards_are_literal(self, paginator):
        """Should not treat % or _ as wildcards."""
        assert (await paginator.list_words(search="%")).total_docs == 0
        assert (await paginator.list_words(search="_")).total_docs == 0

    @pytest.mark.asyncio
    async def test_invalid_next_cursor(self, paginator):
        """Should reject an unknown next cursor."""
        with pytest.raises(InvalidCursorError) as exc_info:
            await paginator.list_words(next_cursor="missing")

        assert exc_info.value.direction == "next"

    @pytest.mark.asyncio
    async def test_invalid_previous_cursor(self, paginator):
        """Should reject an unknown previous cursor."""
        with pytest.raises(InvalidCursorError) as exc_info:
            await paginator.list_words(previous_cursor="missing")

        assert exc_info.value.direction == "previous"

    @pytest.mark.asyncio
    async def test_next_cursor_wins(self, paginator):
        """Should follow the next cursor when both are given."""
        page = await paginator.list_words(limit=2, next_cursor="1", previous_cursor="3")

        assert [w.value for w in page.results] == ["bee", "cat"]

    @pytest.mark.asyncio
    async def test_limit_is_clamped(self, paginator):
        """Should return at least one entry for non-positive limits."""
        page = await paginator.list_words(limit=0)

        assert len(page.results) == 1

    @pytest.mark.asyncio
    async def test_to_dict(self, paginator):
        """Should serialize with camelCase keys."""
        page = await paginator.list_words(limit=2)

        assert page.to_dict() == {
            "results": [{"id": "1", "value": "ant"}, {"id": "2", "value": "bee"}],
            "totalDocs": 3,
            "next": "2",
            "previous": "1",
            "hasNext": True,
            "hasPrev": False,
        }


class TestTraversal:
    """Tests for walking the whole catalog."""

    @pytest.fixture
    async def paginator(self, async_session):
        values = ["delta", "alpha", "echo", "bravo", "charlie", "foxtrot", "golf"]
        async_session.add_all([Word(value=v) for v in values])
        await async_session.commit()
        return WordPaginator(SqlWordCatalog(async_session))

    @pytest.mark.asyncio
    @pytest.mark.parametrize("limit", [1, 2, 3, 7, 10])
    async def test_forward_is_complete(self, paginator, limit):
        """Should visit every entry exactly once in order."""
        ids = await _walk_forward(paginator, limit)
        everything = await paginator.list_words(limit=100)

        assert ids == [w.id for w in everything.results]
        assert len(ids) == 7

    @pytest.mark.asyncio
    async def test_backward_is_gapless(self, paginator):
        """Should walk back from the end without skipping entries."""
        everything = (await paginator.list_words(limit=100)).results
        seen: list[str] = []

        page = await paginator.list_words(limit=3, previous_cursor=everything[-1].id)
        while page.results:
            seen = [w.id for w in page.results] + seen
            page = await paginator.list_words(limit=3, previous_cursor=page.previous)

        assert seen == [w.id for w in everything[:-1]]


class TestTieBreak:
    """Tests for ordering entries that share a value."""

    @pytest.fixture
    def paginator(self):
        words = [
            Word(id="b", value="same"),
            Word(id="a", value="same"),
            Word(id="c", value="same"),
            Word(id="z", value="other"),
        ]
        return WordPaginator(InMemoryCatalog(words))

    @pytest.mark.asyncio
    async def test_orders_by_id_within_value(self, paginator):
        """Should break ties on id."""
        page = await paginator.list_words(limit=10)

        assert [w.id for w in page.results] == ["z", "a", "b", "c"]

    @pytest.mark.asyncio
    async def test_cursor_inside_tie(self, paginator):
        """Should neither skip nor repeat entries sharing a value."""
        first = await paginator.list_words(limit=2)
        second = await paginator.list_words(limit=2, next_cursor=first.next)
        back = await paginator.list_words(limit=2, previous_cursor=second.previous)

        assert [w.id for w in first.results] == ["z", "a"]
        assert [w.id for w in second.results] == ["b", "c"]
        assert [w.id for w in back.results] == ["z", "a"]


class TestSqlKeysetBounds:
    """Tests for SqlWordCatalog.fetch bounds that share the cursor's value."""

    @pytest.fixture
    def catalog(self, async_session, sample_words):
        return SqlWordCatalog(async_session)

    @pytest.mark.asyncio
    async def test_after_same_value_lower_id(self, catalog):
        """Should include the entry whose id sorts after the bound's id."""
        rows = await catalog.fetch(None, 10, after=("bee", "0"))

        assert [w.value for w in rows] == ["bee", "cat"]

    @pytest.mark.asyncio
    async def test_after_same_value_higher_id(self, catalog):
        """Should exclude the entry whose id sorts before the bound's id."""
        rows = await catalog.fetch(None, 10, after=("bee", "9"))

        assert [w.value for w in rows] == ["cat"]

    @pytest.mark.asyncio
    async def test_before_same_value_higher_id(self, catalog):
        """Should include the entry whose id sorts before the bound's id, descending."""
        rows = await catalog.fetch(None, 10, before=("bee", "9"))

        assert [w.value for w in rows] == ["bee", "ant"]

    @pytest.mark.asyncio
    async def test_before_same_value_lower_id(self, catalog):
        """Should exclude the entry whose id sorts after the bound's id."""
        rows = await catalog.fetch(None, 10, before=("bee", "0"))

        assert [w.value for w in rows] == ["ant"]

    @pytest.mark.asyncio
    async def test_bound_with_search(self, catalog):
        """Should AND the prefix filter with the bound."""
        rows = await catalog.fetch("b", 10, after=("bee", "0"))

        assert [w.value for w in rows] == ["bee"]
