import typing as t
import pydantic as p

T = t.TypeVar("T")

class Envelope(p.BaseModel, t.Generic[T]):
    successful: bool = True
    data: T|None = None

class ErrorEnvelope(p.BaseModel):
    successful: bool = False
    detail: str
    errors: dict[str, list[str]]|None = None
