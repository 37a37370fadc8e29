"""TypeScript interface-definition parser.

Uses tree-sitter to read the extension's interface source (`src/module.ts`)
and extract every top-level interface declaration with its methods,
properties, `extends` clause and attached `/** ... */` doc comments.

    export interface NativeLocalStorageModule extends TigerModule {
      setStorageItem(key: string, value: string): void;
      getStorageItem(key: string, callback: (value: string | null) => void): void;
    }

Type annotations are kept as source text with whitespace runs collapsed, so
multi-line object types end up on one line.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import tree_sitter_typescript as ts_typescript
from tree_sitter import Language, Node, Parser

from tigerlink.config.schema import NativeModuleConfig
from tigerlink.errors import InterfaceParseError
from tigerlink.parsers.models import InterfaceInfo, MethodInfo, MethodParam, PropertyInfo

logger = logging.getLogger("tigerlink.parsers.interface_parser")

MODULE_BASE_INTERFACE = "TigerModule"
_PARAMETER_NODE_TYPES = {"required_parameter", "optional_parameter"}


@dataclass(frozen=True)
class ParsedInterfaces:
    """All interfaces of one source file, keyed by name in source order."""

    source_file: Optional[Path]
    interfaces: Dict[str, InterfaceInfo] = field(default_factory=dict)

    def get(self, name: str) -> Optional[InterfaceInfo]:
        return self.interfaces.get(name)

    def module_interfaces(self) -> List[InterfaceInfo]:
        """Interfaces that extend TigerModule."""
        return [
            info
            for info in self.interfaces.values()
            if MODULE_BASE_INTERFACE in info.extends
        ]

    def element_interfaces(self, element_names: Sequence[str] = ()) -> List[InterfaceInfo]:
        """Props interfaces (`*Props`) and interfaces named after elements."""
        names = set(element_names)
        return [
            info
            for info in self.interfaces.values()
            if info.name.endswith("Props") or info.name in names
        ]

    def service_interfaces(self, service_names: Sequence[str]) -> List[InterfaceInfo]:
        return [self.interfaces[name] for name in service_names if name in self.interfaces]


def _text(node: Node) -> str:
    return node.text.decode("utf-8")


def _normalize(text: str) -> str:
    return " ".join(text.split())


def _annotation_text(annotation: Optional[Node], default: str) -> str:
    """Type text of a `type_annotation` node without its leading colon."""
    if annotation is None:
        return default
    raw = _text(annotation).strip()
    if raw.startswith(":"):
        raw = raw[1:]
    return _normalize(raw) or default


def _has_question_token(node: Node) -> bool:
    return any(child.type == "?" for child in node.children)


class InterfaceParser:
    """Extracts interface declarations from TypeScript sources."""

    def __init__(self) -> None:
        self._parser = Parser(Language(ts_typescript.language_typescript()))
        logger.debug("InterfaceParser: tree-sitter TypeScript parser initialized")

    def parse_file(self, source_file: Path) -> ParsedInterfaces:
        """Parse an interface-definition file.

        Raises:
            InterfaceParseError: The file cannot be read.
        """
        try:
            source = source_file.read_bytes()
        except OSError as exc:
            raise InterfaceParseError(
                f"Cannot read interface source {source_file}: {exc}", source_file
            ) from exc
        return self.parse_source(source, source_file=source_file)

    def parse_source(
        self, source: bytes | str, source_file: Optional[Path] = None
    ) -> ParsedInterfaces:
        if isinstance(source, str):
            source = source.encode("utf-8")

        tree = self._parser.parse(source)
        root = tree.root_node
        if root.has_error:
            logger.warning(
                "Syntax errors in %s; interfaces after the error may be incomplete",
                source_file or "<source>",
            )

        interfaces: Dict[str, InterfaceInfo] = {}
        for owner, declaration in self._iter_interface_declarations(root.children):
            info = self._build_interface(owner, declaration)
            interfaces[info.name] = info

        logger.info(
            "Parsed %d interface(s) from %s",
            len(interfaces),
            source_file or "<source>",
        )
        return ParsedInterfaces(source_file=source_file, interfaces=interfaces)

    def _iter_interface_declarations(
        self, nodes: Iterable[Node]
    ) -> Iterable[Tuple[Node, Node]]:
        """Yield (owner, declaration); owner is the export statement if any."""
        for node in nodes:
            if node.type == "interface_declaration":
                yield node, node
            elif node.type == "export_statement":
                declaration = node.child_by_field_name("declaration")
                if declaration is not None and declaration.type == "interface_declaration":
                    yield node, declaration

    def _build_interface(self, owner: Node, declaration: Node) -> InterfaceInfo:
        name_node = declaration.child_by_field_name("name")
        name = _text(name_node) if name_node is not None else "<anonymous>"

        extends: List[str] = []
        for child in declaration.children:
            if child.type == "extends_type_clause":
                extends.extend(_text(t) for t in child.named_children)

        methods: List[MethodInfo] = []
        properties: List[PropertyInfo] = []
        body = declaration.child_by_field_name("body")
        if body is not None:
            for member in body.named_children:
                if member.type == "method_signature":
                    methods.append(self._build_method(member))
                elif member.type == "property_signature":
                    properties.append(self._build_property(member))

        return InterfaceInfo(
            name=name,
            extends=tuple(extends),
            methods=tuple(methods),
            properties=tuple(properties),
            doc_comments=self._doc_comments(owner),
        )

    def _build_method(self, node: Node) -> MethodInfo:
        name_node = node.child_by_field_name("name")
        params: List[MethodParam] = []
        parameters = node.child_by_field_name("parameters")
        if parameters is not None:
            for param in parameters.named_children:
                if param.type not in _PARAMETER_NODE_TYPES:
                    continue
                pattern = param.child_by_field_name("pattern")
                params.append(
                    MethodParam(
                        name=_text(pattern) if pattern is not None else "arg",
                        type_text=_annotation_text(
                            param.child_by_field_name("type"), "any"
                        ),
                        is_optional=param.type == "optional_parameter",
                    )
                )
        return MethodInfo(
            name=_text(name_node),
            params=tuple(params),
            return_type=_annotation_text(node.child_by_field_name("return_type"), "void"),
        )

    def _build_property(self, node: Node) -> PropertyInfo:
        name_node = node.child_by_field_name("name")
        return PropertyInfo(
            name=_text(name_node),
            type_text=_annotation_text(node.child_by_field_name("type"), "any"),
            is_optional=_has_question_token(node),
        )

    def _doc_comments(self, owner: Node) -> Tuple[str, ...]:
        """Contiguous `/** */` comments directly above the declaration."""
        blocks: List[str] = []
        sibling = owner.prev_sibling
        while sibling is not None and sibling.type == "comment":
            text = _text(sibling)
            if text.startswith("/**"):
                blocks.append(text)
            sibling = sibling.prev_sibling
        blocks.reverse()
        return tuple(blocks)


def discover_native_modules(parsed: ParsedInterfaces) -> List[NativeModuleConfig]:
    """Native module configs for every interface extending TigerModule.

    Used when the manifest declares no native modules; the interface name is
    both registration name and class name.
    """
    discovered = [
        NativeModuleConfig(name=info.name, class_name=info.name)
        for info in parsed.module_interfaces()
    ]
    if discovered:
        logger.info(
            "Discovered %d native module(s): %s",
            len(discovered),
            ", ".join(m.class_name for m in discovered),
        )
    else:
        logger.info(
            "No native modules found (no interfaces extending %s)",
            MODULE_BASE_INTERFACE,
        )
    return discovered
