"""
Field discovery and access.

Describes the public fields a class declares in its own body and provides a
narrow get/set capability for one field on one owner.
"""

import dataclasses
import inspect
import types
import typing
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Set, Tuple

from liveconf.core.errors import FieldAccessError
from liveconf.utils.helpers import qualified_name
from liveconf.utils.logging import get_logger

logger = get_logger("fields")


@dataclass(frozen=True)
class FieldDescriptor:
    """Location and modifiers of one declared field."""

    name: str
    declaring_type: type
    field_type: Any
    is_static: bool
    is_final: bool
    is_classvar: bool = False

    @property
    def qualified_name(self) -> str:
        return f"{qualified_name(self.declaring_type)}.{self.name}"


class FieldAccessor:
    """Reads and writes the current value of a field.

    Instance fields need an owner object. A plain class attribute is the
    default for every instance, so with an owner object it is read from and
    written to that owner; without one it lives on the declaring class.
    ClassVar fields always live on the declaring class.
    """

    def __init__(self, field: FieldDescriptor, owner: Any = None):
        self.field = field
        self.owner = owner

    def get(self) -> Any:
        target = self._target()
        try:
            return getattr(target, self.field.name)
        except AttributeError as e:
            raise FieldAccessError(self.field.qualified_name, str(e)) from e

    def set(self, value: Any) -> None:
        target = self._target()
        try:
            setattr(target, self.field.name, value)
        except (AttributeError, TypeError) as e:
            raise FieldAccessError(self.field.qualified_name, str(e)) from e

    def _target(self) -> Any:
        if self.field.is_static:
            if (
                self.field.is_classvar
                or self.owner is None
                or inspect.isclass(self.owner)
            ):
                return self.field.declaring_type
            return self.owner
        if self.owner is None:
            raise FieldAccessError(
                self.field.qualified_name, "instance field has no owner object"
            )
        return self.owner

    def __repr__(self) -> str:
        return f"FieldAccessor({self.field.qualified_name})"


def describe_fields(cls: type) -> List[FieldDescriptor]:
    """
    Describe the public fields declared directly in a class body.

    Annotated names come first in annotation order, followed by unannotated
    class attributes in definition order. Methods, descriptors, nested classes
    and modules are not fields.

    Args:
        cls: Class to inspect

    Returns:
        List of field descriptors
    """
    annotations = _own_annotations(cls)
    class_dict = vars(cls)
    dataclass_fields = _dataclass_field_names(cls)
    frozen = _is_frozen_dataclass(cls)

    fields: List[FieldDescriptor] = []

    for name, annotation in annotations.items():
        if name.startswith("_") or isinstance(annotation, dataclasses.InitVar):
            continue

        has_value = name in class_dict
        value = class_dict.get(name)
        if has_value and _is_member(value):
            continue

        field_type, is_classvar, is_final = _unwrap_annotation(annotation)
        if field_type is None or isinstance(field_type, str):
            # Bare ClassVar/Final or an unresolved forward reference
            field_type = type(value) if has_value else field_type

        if name in dataclass_fields:
            is_static = False
            is_final = is_final or frozen
        else:
            is_static = is_classvar or has_value

        fields.append(
            FieldDescriptor(
                name=name,
                declaring_type=cls,
                field_type=field_type,
                is_static=is_static,
                is_final=is_final,
                is_classvar=is_classvar,
            )
        )

    for name, value in class_dict.items():
        if name.startswith("_") or name in annotations or _is_member(value):
            continue
        fields.append(
            FieldDescriptor(
                name=name,
                declaring_type=cls,
                field_type=type(value),
                is_static=True,
                is_final=False,
            )
        )

    return fields


def _own_annotations(cls: type) -> Dict[str, Any]:
    """Annotations declared in the class body itself, resolved where possible."""
    try:
        raw = inspect.get_annotations(cls)
    except NameError as e:
        logger.warning(f"Ignoring unresolvable annotations of {qualified_name(cls)}: {e}")
        return {}

    if not raw:
        return {}

    try:
        hints = typing.get_type_hints(cls, include_extras=True)
    except (NameError, SyntaxError, TypeError) as e:
        # Forward references to names that are not importable stay unresolved
        logger.debug(f"Could not resolve annotations of {qualified_name(cls)}: {e}")
        hints = {}

    return {name: hints.get(name, annotation) for name, annotation in raw.items()}


def _unwrap_annotation(annotation: Any) -> Tuple[Any, bool, bool]:
    """
    Strip qualifiers from an annotation.

    Returns:
        Tuple of (inner_type, is_classvar, is_final); inner_type is None for a
        bare ClassVar or Final
    """
    is_classvar = False
    is_final = False

    while True:
        if annotation is typing.ClassVar:
            return None, True, is_final
        if annotation is typing.Final:
            return None, is_classvar, True

        origin = typing.get_origin(annotation)
        args = typing.get_args(annotation)

        if origin is typing.ClassVar:
            is_classvar = True
        elif origin is typing.Final:
            is_final = True
        elif origin is typing.Annotated:
            pass
        elif origin in (typing.Union, types.UnionType):
            members = [arg for arg in args if arg is not type(None)]
            if len(members) != 1:
                return annotation, is_classvar, is_final
            args = tuple(members)
        else:
            return annotation, is_classvar, is_final

        if not args:
            return None, is_classvar, is_final
        annotation = args[0]


def _is_member(value: Any) -> bool:
    """True for class-body entries that are not data fields."""
    return (
        inspect.isclass(value)
        or inspect.ismodule(value)
        or hasattr(type(value), "__get__")
    )


def _dataclass_field_names(cls: type) -> Set[str]:
    if not dataclasses.is_dataclass(cls):
        return set()
    return {f.name for f in dataclasses.fields(cls)}


def _is_frozen_dataclass(cls: type) -> bool:
    params: Optional[Any] = getattr(cls, "__dataclass_params__", None)
    return bool(params is not None and params.frozen)
