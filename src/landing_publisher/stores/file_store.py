"""Page store backed by one JSON file per page key."""

import logging
from collections.abc import Iterator
from pathlib import Path

from pydantic import ValidationError

from schemas.publish import PublishedPage

from .store import LocalPageStore, PersistenceError

logger = logging.getLogger(__name__)


class JsonFilePageStore(LocalPageStore):
    """Stores each record as ``{store_dir}/{page_url_key}.json``.

    Example:
        store = JsonFilePageStore(Path("./workspace/pages"))
        page = await store.get_published("acme-vendor-1025")
    """

    def __init__(self, store_dir: Path):
        super().__init__()
        self.store_dir = Path(store_dir)

    def _path(self, slug: str) -> Path:
        return self.store_dir / f"{slug}.json"

    def _read(self, path: Path) -> PublishedPage:
        try:
            return PublishedPage.model_validate_json(path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as e:
            raise PersistenceError(f"Failed to read page record {path}: {e}") from e

    def _load(self, slug: str) -> PublishedPage | None:
        path = self._path(slug)
        if not path.exists():
            return None
        return self._read(path)

    def _save(self, page: PublishedPage) -> None:
        path = self._path(page.page_url_key)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            self.store_dir.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(page.model_dump_json(indent=2), encoding="utf-8")
            tmp_path.replace(path)
        except OSError as e:
            raise PersistenceError(f"Failed to write page record {path}: {e}") from e
        logger.debug(f"Wrote page record {path}")

    def _all(self) -> Iterator[PublishedPage]:
        if not self.store_dir.exists():
            return
        for path in sorted(self.store_dir.glob("*.json")):
            yield self._read(path)
