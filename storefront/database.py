import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Any, List

from .config import MissingPolicy, Settings
from .core import StoreReadError

# This file holds the JSON-file backed stores and their per-store locks.

logger = logging.getLogger("storefront.database")

PRODUCTS = "products"
CART = "cart"


class JsonStore:
    """Named collections, each persisted in full to its own JSON file.

    Every call re-reads the file; nothing is cached between requests. A store
    whose file is absent or malformed either starts empty or raises
    StoreReadError, depending on its MissingPolicy. Writes never raise:
    save() reports whether the data reached disk and callers decide what to
    tell the client.
    """

    def __init__(self, paths: Dict[str, Path], policies: Dict[str, MissingPolicy]):
        self.paths = paths
        self.policies = policies
        self._locks: Dict[str, asyncio.Lock] = {}

    @classmethod
    def from_settings(cls, settings: Settings) -> "JsonStore":
        return cls(
            paths={PRODUCTS: settings.products_path, CART: settings.cart_path},
            policies={
                PRODUCTS: settings.products_missing_policy,
                CART: settings.cart_missing_policy,
            },
        )

    def lock(self, store: str) -> asyncio.Lock:
        if store not in self._locks:
            self._locks[store] = asyncio.Lock()
        return self._locks[store]

    def load(self, store: str) -> List[Dict[str, Any]]:
        path = self.paths.get(store)
        if path is None:
            raise StoreReadError(store)
        try:
            records = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(records, list):
                raise ValueError(f"{path} does not hold a JSON array")
            return records
        except (OSError, ValueError) as e:
            if self.policies.get(store, MissingPolicy.FAIL_IF_MISSING) is MissingPolicy.EMPTY_IF_MISSING:
                logger.warning("store %s unreadable (%s), starting empty", store, e)
                return []
            logger.error("store %s unreadable: %s", store, e)
            raise StoreReadError(store) from e

    def save(self, store: str, records: List[Dict[str, Any]]) -> bool:
        path = self.paths[store]
        tmp = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            text = json.dumps(records, indent=2)
            # a failed write leaves the previous file in place
            fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(text)
            os.replace(tmp, path)
        except (OSError, TypeError, ValueError) as e:
            logger.error("failed to persist store %s to %s: %s", store, path, e)
            if tmp is not None and os.path.exists(tmp):
                os.unlink(tmp)
            return False
        return True
