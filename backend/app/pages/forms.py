"""
Create-form draft and submission state machine
"""
import enum
import re
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional, Sequence

from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
import structlog

from app.core.exceptions import StoreError, ValidationError
from app.pages.controller import Lifetime

logger = structlog.get_logger()

_email = TypeAdapter(EmailStr)
_integer = re.compile(r"^\d+$")
# Largest value a BIGINT column can hold
MAX_INTEGER = 2**63 - 1


class FormState(str, enum.Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"


class FieldKind(str, enum.Enum):
    TEXT = "text"
    EMAIL = "email"
    INTEGER = "integer"


@dataclass(frozen=True)
class FormField:
    name: str
    label: str
    required: bool = False
    kind: FieldKind = FieldKind.TEXT


class CreateForm:
    """
    Draft of plain strings for one insertable record.

    submit() moves idle -> submitting -> idle. On success the draft is
    cleared and the dialog closed; on any failure both stay as they were
    and `error` carries the message to show.
    """

    def __init__(self, fields: Sequence[FormField]):
        self.fields = {f.name: f for f in fields}
        self.draft: Dict[str, str] = {}
        self.dialog_open = False
        self.state = FormState.IDLE
        self.error: Optional[str] = None
        self.error_kind: Optional[str] = None  # validation, store
        self.reset()

    def open(self):
        self.dialog_open = True

    def close(self):
        self.dialog_open = False

    def reset(self):
        self.draft = {name: "" for name in self.fields}

    def update(self, **values: Any):
        for name, value in values.items():
            if name not in self.fields:
                raise ValidationError(f"Unknown field: {name}", details={"field": name})
            self.draft[name] = "" if value is None else str(value)

    def to_record(self) -> Dict[str, Any]:
        """Validate the draft and build the insert payload"""
        record: Dict[str, Any] = {}
        for name, definition in self.fields.items():
            value = self.draft.get(name, "").strip()
            if not value:
                if definition.required:
                    raise ValidationError(f"{definition.label} is required", details={"field": name})
                record[name] = None
                continue
            if definition.kind is FieldKind.EMAIL:
                try:
                    _email.validate_python(value)
                except PydanticValidationError:
                    raise ValidationError("Please enter a valid email address", details={"field": name})
            elif definition.kind is FieldKind.INTEGER:
                if not _integer.match(value):
                    raise ValidationError(
                        f"{definition.label} must be a whole number of 0 or more", details={"field": name}
                    )
                number = int(value)
                if number > MAX_INTEGER:
                    raise ValidationError(f"{definition.label} is too large", details={"field": name})
                record[name] = number
                continue
            record[name] = value
        return record

    async def submit(
        self,
        perform: Callable[[Dict[str, Any]], Awaitable[Any]],
        lifetime: Optional[Lifetime] = None,
    ) -> bool:
        if self.state is FormState.SUBMITTING:
            return False
        self.error = None
        self.error_kind = None
        try:
            record = self.to_record()
        except ValidationError as e:
            self.error = e.message
            self.error_kind = "validation"
            return False

        self.state = FormState.SUBMITTING
        try:
            await perform(record)
        except StoreError as e:
            if lifetime is None or not lifetime.cancelled:
                self.error = e.message
                self.error_kind = "store"
            return False
        finally:
            self.state = FormState.IDLE

        if lifetime is not None and lifetime.cancelled:
            return True
        self.reset()
        self.close()
        return True

    def as_dict(self) -> Dict[str, Any]:
        return {
            "open": self.dialog_open,
            "state": self.state.value,
            "draft": dict(self.draft),
            "error": self.error,
        }
