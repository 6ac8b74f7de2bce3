"""Result types produced by the schema resolvers and the operation parser."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class PendingRef:
    """A field type that still points at a named schema.

    ``suffix`` carries the array brackets wrapped around the reference,
    e.g. ``"[]"`` for an array of the referenced type.
    """

    ref: str
    suffix: str = ""

    @property
    def raw(self) -> str:
        return f"{self.ref}{self.suffix}"


@dataclass
class Field:
    """A resolved member of an interface."""

    name: str
    type: str
    optional: bool = True
    description: str | None = None
    format: str | None = None
    pending: PendingRef | None = None


@dataclass
class Interface:
    """A named, ordered list of fields."""

    name: str
    fields: list[Field] = field(default_factory=list)
    description: str | None = None


@dataclass(frozen=True)
class Notice:
    """Advisory record of a field dropped because its type is unrepresentable."""

    owner: str
    field: str

    @property
    def message(self) -> str:
        return f"the {self.field} attribute of the {self.owner} is ignored"


@dataclass
class ParseResult:
    """Everything needed to render one operation."""

    name: str
    path: str
    method: str
    comment: str = ""
    is_form_data: bool = False
    path_var: str | None = None
    query: str | None = None
    body: str | None = None
    res: str | None = None
    # body/res name the element interface of an array-of-reference schema
    body_is_array: bool = False
    res_is_array: bool = False
    interfaces: list[Interface] = field(default_factory=list)
    notices: list[Notice] = field(default_factory=list)
