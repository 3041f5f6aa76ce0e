"""Pydantic models for the Green Cycle API payloads."""

from enum import Enum
from typing import Any
from typing import TypeVar

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import ValidationError

from greencycle_client.exceptions import ResponseValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


class CollectionStatus(str, Enum):
    """Server-side states of a collection request."""

    PENDING = "1"
    APPROVED = "2"
    IN_COLLECTION = "3"
    FINALIZED = "4"
    CANCELLED = "5"
    FAILED = "6"


class ApiModel(BaseModel):
    """Base model for API payloads; unknown fields are ignored."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class CollectionDetail(ApiModel):
    """Full detail of a collection request."""

    id: int
    cliente_id: int
    cliente_nome: str
    parceiro_id: int | None = None
    parceiro_nome: str | None = None
    material_nome: str
    peso_material: str
    quantidade_material: float | None = None
    endereco_completo: str
    status_solicitacao: str
    observacoes_solicitacao: str | None = None
    status_pagamento: str
    valor_pagamento: float
    criado_em: str
    atualizado_em: str
    imagens_coletas: list[Any] = Field(default_factory=list)
    cliente_telefone: str | None = None
    parceiro_telefone: str | None = None


class PhoneRecord(ApiModel):
    numero: str


class UserRef(ApiModel):
    id: int


class PartyRecord(ApiModel):
    """A client or partner record, which points at its user account."""

    id: int
    id_usuarios: UserRef | int | None = None

    @property
    def user_id(self) -> int | None:
        """Id of the linked user account, None when missing or not positive."""
        if isinstance(self.id_usuarios, UserRef):
            user_id = self.id_usuarios.id
        else:
            user_id = self.id_usuarios
        if user_id is None or user_id <= 0:
            return None
        return user_id


class CollectionPoint(ApiModel):
    """A drop-off point; fields beyond id and name are kept as returned."""

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    id: int
    nome: str | None = None


class Material(ApiModel):
    id: int
    nome: str
    preco: float | None = None


MATERIALS: tuple[Material, ...] = (
    Material(id=1, nome="Metal"),
    Material(id=2, nome="Papel"),
    Material(id=3, nome="Plástico"),
    Material(id=4, nome="Vidro"),
    Material(id=5, nome="Eletrônico"),
    Material(id=6, nome="Resíduo Orgânico"),
    Material(id=7, nome="Resíduo Hospitalar"),
)

# Materials offered on the registration form
REGISTER_MATERIALS: tuple[Material, ...] = tuple(
    m
    for m in MATERIALS
    if m.nome
    in ("Metal", "Papel", "Plástico", "Resíduo Orgânico", "Resíduo Hospitalar")
)


def material_by_id(material_id: int) -> Material | None:
    return next((m for m in MATERIALS if m.id == material_id), None)


def material_by_name(name: str) -> Material | None:
    return next((m for m in MATERIALS if m.nome.lower() == name.lower()), None)


def parse_model(model: type[ModelT], payload: Any, url: str | None = None) -> ModelT:
    """Validate an API payload against ``model``.

    Raises:
        ResponseValidationError: If the payload does not match the model
    """
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        msg = f"Invalid {model.__name__} payload from {url or 'API'}: {e}"
        raise ResponseValidationError(msg, url=url) from e


def parse_list(model: type[ModelT], payload: Any, url: str | None = None) -> list[ModelT]:
    if not isinstance(payload, list):
        msg = f"Expected a list of {model.__name__} from {url or 'API'}"
        raise ResponseValidationError(msg, url=url)
    return [parse_model(model, item, url) for item in payload]
