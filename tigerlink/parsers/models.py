"""Platform-neutral contracts extracted from interface-definition sources."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple


@dataclass(frozen=True)
class MethodParam:
    name: str
    type_text: str
    is_optional: bool = False


@dataclass(frozen=True)
class MethodInfo:
    """Method signature; `type_text` values are kept verbatim."""

    name: str
    params: Tuple[MethodParam, ...] = ()
    return_type: str = "void"


@dataclass(frozen=True)
class PropertyInfo:
    name: str
    type_text: str
    is_optional: bool = False


@dataclass(frozen=True)
class AndroidViewTypeConfig:
    """Native view class bound to an element.

    Produced unvalidated by the syntactic directive parse and replaced by a
    validated copy once the view-type registry has resolved it.
    """

    view_type: str
    short_name: str
    package_name: str
    is_validated: bool = False

    def validated(
        self, view_type: str, short_name: str, package_name: str
    ) -> "AndroidViewTypeConfig":
        return replace(
            self,
            view_type=view_type,
            short_name=short_name,
            package_name=package_name,
            is_validated=True,
        )


@dataclass(frozen=True)
class InterfaceInfo:
    """One interface declaration from the source file.

    Attributes:
        name: Interface name.
        extends: Names in the `extends` clause.
        methods: Method signatures in declaration order.
        properties: Property signatures in declaration order.
        doc_comments: Raw `/** ... */` blocks attached to the declaration.
    """

    name: str
    extends: Tuple[str, ...] = ()
    methods: Tuple[MethodInfo, ...] = ()
    properties: Tuple[PropertyInfo, ...] = ()
    doc_comments: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ElementInfo:
    name: str
    tag_name: str
    properties: Tuple[PropertyInfo, ...] = ()
    android_view_type: Optional[AndroidViewTypeConfig] = None
    warnings: Tuple[str, ...] = field(default_factory=tuple)
