from collections import Counter
from collections.abc import AsyncGenerator
from typing import Any

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi import HTTPException

from greencycle_client.api import ApiClient
from greencycle_client.config import ClientConfig

BASE_URL = "http://testserver/v1"


class FakeClock:
    """Manually driven clock returning epoch seconds."""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def collection_payload(collection_id: int = 42, **overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": collection_id,
        "cliente_id": 7,
        "cliente_nome": "Maria",
        "parceiro_id": 9,
        "parceiro_nome": "Coleta Verde",
        "material_nome": "Papel",
        "peso_material": "12.5",
        "quantidade_material": 3,
        "endereco_completo": "Rua das Flores, 100",
        "status_solicitacao": "2",
        "observacoes_solicitacao": None,
        "status_pagamento": "pendente",
        "valor_pagamento": 25.0,
        "criado_em": "2024-05-01T10:00:00Z",
        "atualizado_em": "2024-05-01T10:00:00Z",
        "imagens_coletas": [],
    }
    payload.update(overrides)
    return payload


class FakeApi:
    """In-memory stand-in for the Green Cycle REST API."""

    def __init__(self) -> None:
        self.collections: dict[int, dict[str, Any]] = {}
        self.phones: dict[int, Any] = {}
        self.clients: dict[int, dict[str, Any]] = {}
        self.partners: dict[int, dict[str, Any]] = {}
        self.failing: set[str] = set()
        self.calls: Counter[str] = Counter()
        self.app = self._build_app()

    def _lookup(self, kind: str, table: dict[int, Any], item_id: int) -> Any:
        key = f"{kind}/{item_id}"
        self.calls[key] += 1
        if key in self.failing:
            raise HTTPException(status_code=500, detail="boom")
        if item_id not in table:
            raise HTTPException(status_code=404, detail="Not found")
        return table[item_id]

    def _build_app(self) -> FastAPI:
        app = FastAPI()

        @app.get("/v1/coletas/{item_id}/")
        async def get_collection(item_id: int):
            return self._lookup("coletas", self.collections, item_id)

        @app.get("/v1/telefones/{item_id}/")
        async def get_phone(item_id: int):
            return self._lookup("telefones", self.phones, item_id)

        @app.get("/v1/clientes/{item_id}/")
        async def get_client(item_id: int):
            return self._lookup("clientes", self.clients, item_id)

        @app.get("/v1/parceiros/{item_id}/")
        async def get_partner(item_id: int):
            return self._lookup("parceiros", self.partners, item_id)

        @app.get("/v1/materiais/")
        async def get_materials():
            self.calls["materiais"] += 1
            return [{"id": 2, "nome": "Papel", "preco": 0.5}]

        @app.get("/v1/pontos-coleta/")
        async def get_points():
            self.calls["pontos-coleta"] += 1
            return [{"id": 1, "nome": "Ecoponto Centro", "latitude": -23.5}]

        return app

    def http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            transport=httpx.ASGITransport(app=self.app), base_url=BASE_URL
        )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_api() -> FakeApi:
    api = FakeApi()
    api.collections[42] = collection_payload(42)
    api.phones[7] = {"numero": "11999887766"}
    api.phones[9] = {"numero": "1133334444"}
    return api


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(base_url=BASE_URL)


@pytest_asyncio.fixture
async def api_client(
    fake_api: FakeApi, config: ClientConfig
) -> AsyncGenerator[ApiClient, Any]:
    http_client = fake_api.http_client()
    client = ApiClient(config, http_client=http_client)
    yield client
    await http_client.aclose()


@pytest.fixture
def make_collection() -> Any:
    return collection_payload
