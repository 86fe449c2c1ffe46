"""Named config profiles stored as static.json beside each config package. Read-only; no business logic."""

import json
from pathlib import Path
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

ModelT = TypeVar("ModelT", bound=BaseModel)


def apply_overrides(base: ModelT, overrides: dict[str, Any] | None) -> ModelT:
    """Return base with the non-None overrides applied and re-validated."""
    updates = {k: v for k, v in (overrides or {}).items() if v is not None}
    if not updates:
        return base
    return type(base).model_validate({**base.model_dump(), **updates})


class ProfileStore(Generic[ModelT]):
    """
    Lazily loads {"active": name, "profiles": {name: {...}}, ...} and validates each profile.
    aliases map alternative names (e.g. strategy names) onto profile names.
    """

    def __init__(
        self,
        path: Path,
        model: type[ModelT],
        kind: str,
        default_active: str = "default",
        aliases: dict[str, str] | None = None,
    ) -> None:
        self._path = path
        self._model = model
        self._kind = kind
        self._default_active = default_active
        self._aliases = aliases or {}
        self._raw: dict[str, Any] | None = None
        self._profiles: dict[str, ModelT] | None = None

    @property
    def raw(self) -> dict[str, Any]:
        """The whole JSON document, for sections other than profiles."""
        if self._raw is None:
            self._raw = json.loads(self._path.read_text(encoding="utf-8"))
        return self._raw

    def profiles(self) -> dict[str, ModelT]:
        if self._profiles is None:
            self._profiles = {k: self._model.model_validate(v) for k, v in self.raw.get("profiles", {}).items()}
        return self._profiles

    def active_name(self) -> str:
        return self.raw.get("active", self._default_active)

    def resolve(self, name: str, overrides: dict[str, Any] | None = None) -> ModelT:
        """
        Profile by name, then overrides. "active" selects the profile marked active; aliases are
        tried before plain names. Raises ValueError for an unknown name or an invalid merge
        (pydantic ValidationError is a ValueError).
        """
        key = self.active_name() if name == "active" else self._aliases.get(name, name)
        base = self.profiles().get(key)
        if base is None:
            raise ValueError(f"Unknown {self._kind} profile: {name!r}")
        return apply_overrides(base, overrides)
