from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


def _fold(key: str) -> str:
    return key.replace("_", "").lower()


class WireModel(BaseModel):
    """
    Base for records exchanged with clients and the upstream API.
    Incoming keys are matched case-insensitively ("userId", "UserId" and
    "user_id" all land on the same field); output uses the aliases.
    """

    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _fold_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        names = {_fold(f.alias or name): f.alias or name for name, f in cls.model_fields.items()}
        folded: dict[Any, Any] = {}
        seen: dict[str, str] = {}
        for key, value in data.items():
            if isinstance(key, str) and _fold(key) in names:
                target = names[_fold(key)]
                if target in seen:
                    raise ValueError(f"keys {seen[target]!r} and {key!r} both set {target!r}")
                seen[target] = key
                key = target
            folded[key] = value
        return folded

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class PostWithoutId(WireModel):
    """Body of a create request; the upstream API assigns the id."""

    user_id: int = Field(alias="userId")
    title: str
    body: str


class Post(WireModel):
    id: int
    user_id: int = Field(alias="userId")
    title: str
    body: str
