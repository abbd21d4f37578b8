from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional, Literal, Iterable

FieldKind = Literal["Text", "Button"]

TEXT: FieldKind = "Text"
BUTTON: FieldKind = "Button"


@dataclass(frozen=True)
class FormField:
    """A fillable form field as reported when the catalog was built.

    The snapshot is never re-synced: `current_value` keeps the value the
    document had before any fill.
    """
    name: str
    field_type: FieldKind
    current_value: str = ""

    def to_public(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "field_type": self.field_type,
            "current_value": self.current_value,
        }


@dataclass
class FormData:
    """Values for one fill call: text fields by name, buttons on/off."""
    text_values: Dict[str, str] = field(default_factory=dict)
    button_values: Dict[str, bool] = field(default_factory=dict)


class FieldCatalog:
    """Fields of a document in discovery order.

    A repeated name replaces the earlier field but keeps its original
    position, so each name appears once in the order.
    """

    def __init__(self, fields: Optional[Iterable[FormField]] = None):
        self._names: List[str] = []
        self._fields: Dict[str, FormField] = {}
        for f in fields or ():
            self.add(f)

    def add(self, form_field: FormField):
        if form_field.name not in self._fields:
            self._names.append(form_field.name)
        self._fields[form_field.name] = form_field

    def ordered_field_names(self) -> List[str]:
        return list(self._names)

    def fields(self) -> List[FormField]:
        return [self._fields[n] for n in self._names]

    def get(self, name: str) -> Optional[FormField]:
        return self._fields.get(name)

    def names_of_type(self, kind: FieldKind) -> List[str]:
        return [n for n in self._names if self._fields[n].field_type == kind]

    def to_public_dict(self) -> Dict[str, Any]:
        return {
            "field_count": len(self._names),
            "fields": [f.to_public() for f in self.fields()],
        }

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self):
        return iter(self.fields())

    def __repr__(self) -> str:
        return f"FieldCatalog({self.fields()!r})"
