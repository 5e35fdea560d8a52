"""Identity of a mockable method and the shape of its original definition."""

import inspect
import types
from dataclasses import dataclass
from enum import Enum
from typing import Any


class MemberAccess(Enum):
    """Visibility of a member by Python naming convention."""

    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"


class MemberKind(Enum):
    """Descriptor kind of the original definition."""

    INSTANCE = "instance"
    CLASS = "class"
    STATIC = "static"


@dataclass(frozen=True)
class MockTarget:
    """A class and the name of one of its methods."""

    klass: type
    method_name: str

    def __str__(self) -> str:
        return f"{self.klass.__module__}.{self.klass.__qualname__}#{self.method_name}"


@dataclass(frozen=True)
class MemberDefinition:
    """What a method looked like before it was mocked."""

    attribute_name: str
    access: MemberAccess
    kind: MemberKind
    inherited: bool
    owner: type
    raw: Any

    @property
    def function(self) -> Any:
        """The underlying callable, unwrapped from staticmethod/classmethod.

        C-level class methods have no ``__func__`` and are returned as is.
        """
        if self.kind is MemberKind.INSTANCE:
            return self.raw
        return getattr(self.raw, "__func__", self.raw)

    @property
    def is_async(self) -> bool:
        return inspect.iscoroutinefunction(self.function)


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__") and len(name) > 4


def _mangle_prefix(klass: type) -> str:
    return f"_{klass.__name__.lstrip('_')}__"


def attribute_name_for(klass: type, method_name: str) -> str:
    """Return the name the method is stored under in a class ``__dict__``.

    ``__name`` members are name-mangled by the compiler, so ``"__secret"`` on
    ``Vault`` lives at ``"_Vault__secret"``.
    """
    if (
        method_name.startswith("__")
        and not _is_dunder(method_name)
        and klass.__name__.strip("_")
    ):
        return f"_{klass.__name__.lstrip('_')}{method_name}"
    return method_name


def access_for(klass: type, attribute_name: str) -> MemberAccess:
    if _is_dunder(attribute_name) or not attribute_name.startswith("_"):
        return MemberAccess.PUBLIC
    for base in klass.__mro__:
        prefix = _mangle_prefix(base)
        if attribute_name.startswith(prefix) and len(attribute_name) > len(prefix):
            return MemberAccess.PRIVATE
    if attribute_name.startswith("__"):
        return MemberAccess.PRIVATE
    return MemberAccess.PROTECTED


def kind_for(raw: Any) -> MemberKind | None:
    """Classify a raw class attribute, or return None if it is not a method.

    Only attributes that bind to an instance or class when looked up count as
    methods. Nested classes and plain callable objects are returned from the
    class unchanged, so they are not methods.
    """
    if isinstance(raw, staticmethod):
        return MemberKind.STATIC
    if isinstance(raw, (classmethod, types.ClassMethodDescriptorType)):
        return MemberKind.CLASS
    if callable(raw) and (inspect.isfunction(raw) or inspect.ismethoddescriptor(raw)):
        return MemberKind.INSTANCE
    return None


def resolve_member(klass: type, method_name: str) -> MemberDefinition | None:
    """Find the definition of a method on the class or any of its ancestors.

    Args:
        klass: The class the method would be mocked on
        method_name: The method name as written by the caller

    Returns:
        The member definition, or None when no callable member exists
    """
    attribute_name = attribute_name_for(klass, method_name)
    for owner in klass.__mro__:
        if attribute_name in vars(owner):
            raw = vars(owner)[attribute_name]
            break
    else:
        return None

    kind = kind_for(raw)
    if kind is None:
        return None

    return MemberDefinition(
        attribute_name=attribute_name,
        access=access_for(klass, attribute_name),
        kind=kind,
        inherited=owner is not klass,
        owner=owner,
        raw=raw,
    )
