"""Attribute discovery and reading."""

from __future__ import annotations

import dataclasses
import inspect
import logging
import types
import typing
from collections.abc import Iterable, Mapping
from functools import partial
from typing import Any, ClassVar, Protocol, runtime_checkable

from diffy.attributes.models import AttributeDescriptor
from diffy.comparators.kinds import ValueKind, infer_kind
from diffy.exceptions import AttributeAccessError, InvalidArgumentError

logger = logging.getLogger(__name__)

EXCLUDE_MARKER = "__diff_exclude__"


@runtime_checkable
class AttributeResolver(Protocol):
    """Enumerates the attributes of a type and reads them off instances."""

    def resolve(self, target_type: type) -> list[AttributeDescriptor]:
        ...

    def read(self, instance: Any, name: str) -> Any:
        ...


class ReflectionAttributeResolver:
    """Discovers attributes by introspecting classes.

    Sources, in order of preference:
    - dataclass fields (``compare=False`` fields are skipped)
    - pydantic model fields
    - class annotations and ``__slots__`` across the MRO
    - ``__init__`` parameters, for plain classes with nothing else to go on

    Discovery order is base class first. Dunder names, names listed in a
    ``__diff_exclude__`` class attribute and attributes typed as the target
    type itself are skipped.
    """

    def __init__(self) -> None:
        self._cache: dict[type, list[AttributeDescriptor]] = {}

    def resolve(self, target_type: type) -> list[AttributeDescriptor]:
        """Resolve the attributes of a type.

        Args:
            target_type: Class to introspect

        Returns:
            Descriptors in discovery order

        Raises:
            InvalidArgumentError: If target_type is not a class
        """
        if not isinstance(target_type, type):
            raise InvalidArgumentError(f"Expected a class, got {target_type!r}")

        if target_type not in self._cache:
            self._cache[target_type] = self._discover(target_type)
            logger.debug(
                f"Resolved {len(self._cache[target_type])} attributes "
                f"for {target_type.__qualname__}"
            )
        return list(self._cache[target_type])

    def read(self, instance: Any, name: str) -> Any:
        """Read an attribute off an instance.

        Raises:
            AttributeAccessError: If reading raises for any reason
        """
        try:
            return getattr(instance, name)
        except Exception as e:
            raise AttributeAccessError(
                f"Cannot read '{name}' of {type(instance).__name__}: {e}",
                property_name=name,
            ) from e

    def _discover(self, target_type: type) -> list[AttributeDescriptor]:
        hints = _type_hints(target_type)
        excluded = _excluded_names(target_type)

        descriptors = []
        for name, declared in self._candidates(target_type, hints).items():
            if _is_dunder(name) or name in excluded:
                continue
            if _refers_to(declared, target_type):
                logger.debug(f"Skipping self-referencing attribute '{name}'")
                continue
            kind, element_kind = infer_kind(declared)
            descriptors.append(
                AttributeDescriptor(
                    name=name,
                    reader=partial(_read_attribute, self, name),
                    kind=kind,
                    declared_type=declared,
                    element_kind=element_kind,
                    owner=_owner(target_type, name),
                )
            )
        return descriptors

    def _candidates(self, target_type: type, hints: dict[str, Any]) -> dict[str, Any]:
        if dataclasses.is_dataclass(target_type):
            return {
                f.name: hints.get(f.name, f.type)
                for f in dataclasses.fields(target_type)
                if f.compare
            }

        model_fields = _pydantic_fields(target_type)
        if model_fields is not None:
            return {
                name: hints.get(name, info.annotation)
                for name, info in model_fields.items()
            }

        candidates: dict[str, Any] = {}
        for klass in reversed(target_type.__mro__):
            if klass is object:
                continue
            for name, raw in inspect.get_annotations(klass).items():
                declared = hints.get(name, raw)
                if name not in candidates and not _is_class_var(declared):
                    candidates[name] = declared
            for name in _slots(klass):
                candidates.setdefault(name, hints.get(name, Any))

        if not candidates:
            candidates = _init_parameters(target_type)
        return candidates


class MappingAttributeResolver:
    """Resolves a fixed, ordered list of keys for dict-like instances."""

    def __init__(
        self,
        names: Iterable[str],
        kinds: Mapping[str, ValueKind] | None = None,
    ) -> None:
        """Initialize resolver.

        Args:
            names: Keys to compare, in order
            kinds: Optional value kind per key (OBJECT otherwise)
        """
        self.names = list(dict.fromkeys(names))
        self.kinds = dict(kinds or {})

    @classmethod
    def from_documents(cls, *documents: Mapping[str, Any]) -> MappingAttributeResolver:
        """Build a resolver over the union of the documents' keys."""
        names: dict[str, None] = {}
        for document in documents:
            names.update(dict.fromkeys(document))
        return cls(names)

    def resolve(self, target_type: type) -> list[AttributeDescriptor]:
        return [
            AttributeDescriptor(
                name=name,
                reader=partial(_read_attribute, self, name),
                kind=self.kinds.get(name, ValueKind.OBJECT),
                owner=target_type,
            )
            for name in self.names
        ]

    def read(self, instance: Any, name: str) -> Any:
        if not isinstance(instance, Mapping):
            raise AttributeAccessError(
                f"Cannot read '{name}' of {type(instance).__name__}: not a mapping",
                property_name=name,
            )
        return instance.get(name)


def _read_attribute(resolver: AttributeResolver, name: str, instance: Any) -> Any:
    return resolver.read(instance, name)


def _type_hints(target_type: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(target_type, include_extras=True)
    except Exception as e:
        # Unresolvable forward references; fall back to raw annotations
        logger.debug(f"Cannot resolve type hints of {target_type.__qualname__}: {e}")
        return {}


def _pydantic_fields(target_type: type) -> dict[str, Any] | None:
    fields = getattr(target_type, "model_fields", None)
    if isinstance(fields, dict) and hasattr(target_type, "model_validate"):
        return fields
    return None


def _excluded_names(target_type: type) -> set[str]:
    names: set[str] = set()
    for klass in target_type.__mro__:
        marker = vars(klass).get(EXCLUDE_MARKER)
        if isinstance(marker, str):
            names.add(marker)
        elif marker:
            names.update(marker)
    return names


def _slots(klass: type) -> list[str]:
    slots = vars(klass).get("__slots__", ())
    if isinstance(slots, str):
        slots = (slots,)
    return [name for name in slots if name not in ("__dict__", "__weakref__")]


def _init_parameters(target_type: type) -> dict[str, Any]:
    if target_type.__init__ is object.__init__:
        return {}
    try:
        signature = inspect.signature(target_type.__init__)
    except (TypeError, ValueError):
        return {}

    parameters = {}
    for name, param in signature.parameters.items():
        if name == "self" or param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            continue
        annotation = param.annotation
        parameters[name] = Any if annotation is inspect.Parameter.empty else annotation
    return parameters


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


def _is_class_var(declared: Any) -> bool:
    if declared is ClassVar or typing.get_origin(declared) is ClassVar:
        return True
    if isinstance(declared, str):
        return declared.startswith(("ClassVar", "typing.ClassVar"))
    return False


def _refers_to(declared: Any, target_type: type) -> bool:
    if declared is target_type:
        return True
    if isinstance(declared, str):
        text = declared.replace(" ", "").strip("'\"")
        names = {target_type.__name__, target_type.__qualname__}
        return any(
            text in (name, f"Optional[{name}]", f"{name}|None", f"None|{name}")
            for name in names
        )
    origin = typing.get_origin(declared)
    if origin is typing.Annotated:
        return _refers_to(typing.get_args(declared)[0], target_type)
    if origin is typing.Union or origin is types.UnionType:
        members = [arg for arg in typing.get_args(declared) if arg is not type(None)]
        return len(members) == 1 and _refers_to(members[0], target_type)
    return False


def _owner(target_type: type, name: str) -> type:
    for klass in reversed(target_type.__mro__):
        if name in inspect.get_annotations(klass) or name in _slots(klass):
            return klass
    return target_type
