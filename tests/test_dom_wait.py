"""Tests for LiveDocument and await_element."""

import asyncio

import pytest

from ac_extractor.dom import LiveDocument, await_element, select_all
from ac_extractor.errors import ElementNotFound

EMPTY_APP = "<html><body><div id='app'></div></body></html>"


class TestLiveDocument:
    """Tests for LiveDocument queries and mutations."""

    def test_query_selector_all_in_document_order(self) -> None:
        doc = LiveDocument("<html><body><p class='a'>1</p><p class='b'>2</p><p class='a'>3</p></body></html>")
        texts = [p.text for p in doc.query_selector_all(".a, .b")]
        assert texts == ["1", "2", "3"]

    def test_empty_html_gives_empty_body(self) -> None:
        doc = LiveDocument("")
        assert doc.body is not None
        assert doc.query_selector("div") is None

    def test_select_all_excludes_element_itself(self) -> None:
        doc = LiveDocument("<html><body><div class='x'><div class='x'>inner</div></div></body></html>")
        outer = doc.query_selector("div.x")
        assert len(select_all(outer, "div.x")) == 1

    def test_observers_notified_once_per_batch(self) -> None:
        doc = LiveDocument(EMPTY_APP)
        calls: list[int] = []
        disconnect = doc.observe(lambda: calls.append(1))
        doc.append_html("#app", "<span>a</span><span>b</span>")
        assert calls == [1]
        disconnect()
        disconnect()
        doc.replace(EMPTY_APP)
        assert calls == [1]
        assert doc.observer_count == 0

    def test_append_html_unknown_parent_raises(self) -> None:
        doc = LiveDocument(EMPTY_APP)
        with pytest.raises(ValueError, match="No element matches"):
            doc.append_html("#missing", "<span>x</span>")

    def test_from_file(self, tmp_path) -> None:
        path = tmp_path / "page.html"
        path.write_text("<html><body><h1>Saved</h1></body></html>", encoding="utf-8")
        doc = LiveDocument.from_file(path, url="https://acme.activehosted.com/app/contacts")
        assert doc.query_selector("h1").text == "Saved"
        assert doc.url.endswith("/app/contacts")


class TestAwaitElement:
    """Tests for await_element."""

    @pytest.mark.asyncio
    async def test_resolves_immediately_when_present(self) -> None:
        doc = LiveDocument("<html><body><div class='ready'>x</div></body></html>")
        element = await await_element(doc, ".ready", timeout_ms=10)
        assert element.text == "x"
        assert doc.observer_count == 0

    @pytest.mark.asyncio
    async def test_resolves_after_matching_mutation(self) -> None:
        doc = LiveDocument(EMPTY_APP)
        waiter = asyncio.create_task(await_element(doc, ".late", timeout_ms=1000))
        await asyncio.sleep(0)
        assert doc.observer_count == 1

        doc.append_html("#app", "<p>not yet</p>")
        await asyncio.sleep(0)
        assert not waiter.done()

        doc.append_html("#app", "<div class='late'>here</div>")
        element = await waiter
        assert element.text == "here"
        assert doc.observer_count == 0

    @pytest.mark.asyncio
    async def test_times_out_with_selector(self) -> None:
        doc = LiveDocument(EMPTY_APP)
        with pytest.raises(ElementNotFound) as exc_info:
            await await_element(doc, ".never", timeout_ms=20)
        assert exc_info.value.selector == ".never"
        assert exc_info.value.timeout_ms == 20
        assert doc.observer_count == 0

    @pytest.mark.asyncio
    async def test_concurrent_waits_are_independent(self) -> None:
        doc = LiveDocument(EMPTY_APP)
        first = asyncio.create_task(await_element(doc, ".one", timeout_ms=1000))
        second = asyncio.create_task(await_element(doc, ".two", timeout_ms=50))
        await asyncio.sleep(0)
        assert doc.observer_count == 2

        doc.append_html("#app", "<i class='one'>1</i>")
        assert (await first).text == "1"
        with pytest.raises(ElementNotFound):
            await second
        assert doc.observer_count == 0
