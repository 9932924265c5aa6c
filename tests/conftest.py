"""Fixtures compartidos: un storefront falso que sirve conexiones paginadas."""

import re
from typing import Any, Dict, List, Optional, Sequence, Set, Tuple

import pytest

from storefront_sdk.client import Client
from storefront_sdk.core.config import Config

NODE_RE = re.compile(r'node\(id: "([^"]+)"\)')
AFTER_RE = re.compile(r'(?:(\w+): )?(\w+)\(first: (\d+), after: "([^"]+)"\)')


def page_cursor(owner: str, field: str, page: int, index: int) -> str:
    return f"{owner}|{field}|{page}|{index}"


class FakeStorefront:
    """
    Fetcher falso para el cliente.

    ``pages[(owner, field)]`` es la lista de páginas de una conexión; ``owner``
    es el id del nodo dueño, o ``"shop"`` para conexiones de la tienda. La
    primera respuesta (sin ``after``) es ``initial``; las siguientes se
    resuelven a partir del cursor.
    """

    def __init__(self):
        self.pages: Dict[Tuple[str, str], List[List[Dict[str, Any]]]] = {}
        self.initial: Optional[Dict[str, Any]] = None
        self.fail_pages: Set[Tuple[str, str, int]] = set()
        self.payloads: List[Dict[str, Any]] = []

    @property
    def queries(self) -> List[str]:
        return [payload["query"] for payload in self.payloads]

    def add_pages(self, owner: str, field: str, sizes: Sequence[int], prefix: Optional[str] = None):
        prefix = prefix or f"{owner}-{field}"
        pages = []
        counter = 0
        for size in sizes:
            page = []
            for _ in range(size):
                page.append({"id": f"{prefix}-{counter}"})
                counter += 1
            pages.append(page)
        self.pages[(owner, field)] = pages
        return self

    def connection(self, owner: str, field: str, page: int = 0) -> Dict[str, Any]:
        pages = self.pages[(owner, field)]
        nodes = pages[page] if pages else []
        return {
            "pageInfo": {"hasNextPage": page < len(pages) - 1, "hasPreviousPage": page > 0},
            "edges": [
                {"cursor": page_cursor(owner, field, page, index), "node": node} for index, node in enumerate(nodes)
            ],
        }

    async def __call__(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        self.payloads.append(payload)
        match = AFTER_RE.search(payload["query"])
        if match is None:
            return self.initial

        owner, field, page, _ = match.group(4).split("|")
        response_key = match.group(1) or match.group(2)
        next_page = int(page) + 1
        if (owner, field, next_page) in self.fail_pages:
            return {"errors": [{"message": f"Internal error fetching {field}"}]}

        connection = self.connection(owner, field, next_page)
        if owner == "shop":
            return {"data": {"shop": {response_key: connection}}}

        node_match = NODE_RE.search(payload["query"])
        assert node_match is not None and node_match.group(1) == owner
        return {"data": {"node": {"id": owner, response_key: connection}}}


@pytest.fixture
def config():
    return Config.create(domain="test-shop.myshopify.com", storefront_access_token="storefront-token")


@pytest.fixture
def storefront():
    return FakeStorefront()


@pytest.fixture
def client(config, storefront):
    return Client(config, fetcher=storefront)
