"""In-process page store."""

from collections.abc import Iterable

from schemas.publish import PublishedPage

from .store import LocalPageStore


class MemoryPageStore(LocalPageStore):
    """Keeps records in a dict. Useful for tests and single-shot runs."""

    def __init__(self, pages: Iterable[PublishedPage] = ()):
        super().__init__()
        self._pages: dict[str, PublishedPage] = {p.page_url_key: p for p in pages}

    def _load(self, slug: str) -> PublishedPage | None:
        return self._pages.get(slug)

    def _save(self, page: PublishedPage) -> None:
        self._pages[page.page_url_key] = page

    def _all(self) -> Iterable[PublishedPage]:
        return list(self._pages.values())
