"""
WGSL storage-buffer layout for host-shareable structs.

Field types are tokenized into a small tree and classified into a closed set of
shapes; sizes and alignments come from the shape table, never from substring
tests on the declaration text. Only 32-bit scalars (``f32``, ``i32``, ``u32``),
their vectors, atomics and fixed-size arrays of those are understood.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union

logger = logging.getLogger("wgsl_game")

SCALAR_TYPES = ("f32", "i32", "u32")
MIN_STRUCT_ALIGNMENT = 4


def round_up(value: int, multiple: int) -> int:
    return -(-value // multiple) * multiple


class VectorShape(Enum):
    """Component count with its WGSL (size, align) in bytes."""

    SCALAR = (1, 4, 4)
    VEC2 = (2, 8, 8)
    VEC3 = (3, 12, 16)
    VEC4 = (4, 16, 16)

    def __init__(self, components: int, size: int, align: int):
        self.components = components
        self.size = size
        self.align = align

    @property
    def array_stride(self) -> int:
        # vec3 elements are padded to 16 bytes inside arrays.
        return round_up(self.size, self.align)

    @classmethod
    def from_components(cls, count: int) -> "VectorShape":
        for shape in cls:
            if shape.components == count:
                return shape
        raise ValueError(f"no vector shape with {count} components")


@dataclass(frozen=True)
class FieldType:
    shape: VectorShape
    scalar: str
    count: Optional[int] = None  # element count when the field is an array

    @property
    def is_array(self) -> bool:
        return self.count is not None

    @property
    def size(self) -> int:
        if self.count is None:
            return self.shape.size
        return self.shape.array_stride * self.count

    @property
    def align(self) -> int:
        return self.shape.align


@dataclass(frozen=True)
class FieldLayout:
    name: str
    offset: int
    size: int
    align: int
    type: Optional[FieldType] = None


@dataclass(frozen=True)
class StructLayout:
    name: str
    fields: Tuple[FieldLayout, ...]
    size: int
    alignment: int

    def offset_of(self, name: str) -> int:
        for field in self.fields:
            if field.name == name:
                return field.offset
        raise KeyError(name)


# ---- type grammar --------------------------------------------------------------
_TOKEN_RE = re.compile(r"\s*(?:(?P<ident>[A-Za-z_]\w*)|(?P<number>\d+)[iu]?|(?P<punct>[<>,]))")
_VECTOR_ALIAS_RE = re.compile(r"^vec([234])([fiu])$")
_VECTOR_GENERIC_RE = re.compile(r"^vec([234])$")
_ALIAS_SCALARS = {"f": "f32", "i": "i32", "u": "u32"}

TypeNode = Tuple[str, Tuple[Union["TypeNode", int], ...]]


def _tokenize(text: str) -> List[Union[str, int]]:
    tokens: List[Union[str, int]] = []
    pos = 0
    text = text.strip()
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if match is None or match.end() == pos:
            raise ValueError(f"unexpected character in type {text!r} at {pos}")
        if match.group("number") is not None:
            tokens.append(int(match.group("number")))
        else:
            tokens.append(match.group("ident") or match.group("punct"))
        pos = match.end()
    return tokens


def parse_type_tree(text: str) -> TypeNode:
    """Parse ``array<vec3<f32>, 4>`` into ``("array", (("vec3", (("f32", ()),)), 4))``."""
    tokens = _tokenize(text)
    node, pos = _parse_node(tokens, 0)
    if pos != len(tokens):
        raise ValueError(f"trailing tokens in type {text!r}")
    return node


def _parse_node(tokens: Sequence[Union[str, int]], pos: int) -> Tuple[TypeNode, int]:
    if pos >= len(tokens) or not isinstance(tokens[pos], str) or tokens[pos] in "<>,":
        raise ValueError("expected a type name")
    name = tokens[pos]
    pos += 1
    params: List[Union[TypeNode, int]] = []
    if pos < len(tokens) and tokens[pos] == "<":
        pos += 1
        while True:
            if pos < len(tokens) and isinstance(tokens[pos], int):
                params.append(tokens[pos])
                pos += 1
            else:
                child, pos = _parse_node(tokens, pos)
                params.append(child)
            if pos < len(tokens) and tokens[pos] == ",":
                pos += 1
                # WGSL allows a trailing comma before '>'
                if pos < len(tokens) and tokens[pos] == ">":
                    pos += 1
                    break
                continue
            if pos < len(tokens) and tokens[pos] == ">":
                pos += 1
                break
            raise ValueError("unterminated template list")
    return (name, tuple(params)), pos


def _classify_element(node: TypeNode) -> Optional[Tuple[VectorShape, str]]:
    name, params = node
    if name in SCALAR_TYPES and not params:
        return VectorShape.SCALAR, name
    if name == "atomic" and len(params) == 1 and isinstance(params[0], tuple):
        inner = params[0]
        if inner[0] in ("i32", "u32") and not inner[1]:
            return VectorShape.SCALAR, inner[0]
        return None
    alias = _VECTOR_ALIAS_RE.match(name)
    if alias and not params:
        return VectorShape.from_components(int(alias.group(1))), _ALIAS_SCALARS[alias.group(2)]
    generic = _VECTOR_GENERIC_RE.match(name)
    if generic and len(params) == 1 and isinstance(params[0], tuple):
        inner = params[0]
        if inner[0] in SCALAR_TYPES and not inner[1]:
            return VectorShape.from_components(int(generic.group(1))), inner[0]
    return None


def classify_type(text: str) -> Optional[FieldType]:
    """Map a field type declaration to a :class:`FieldType`, or None if unsupported."""
    try:
        node = parse_type_tree(text)
    except ValueError:
        return None
    name, params = node
    if name == "array":
        if len(params) != 2 or not isinstance(params[0], tuple) or not isinstance(params[1], int):
            # runtime-sized arrays cannot live inside the state struct
            return None
        element = _classify_element(params[0])
        if element is None or params[1] <= 0:
            return None
        return FieldType(shape=element[0], scalar=element[1], count=params[1])
    element = _classify_element(node)
    if element is None:
        return None
    return FieldType(shape=element[0], scalar=element[1])


# ---- struct declarations ---------------------------------------------------------
_LINE_COMMENT_RE = re.compile(r"//[^\n]*")
_BLOCK_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_ATTRIBUTE_RE = re.compile(r"@\w+(?:\s*\([^)]*\))?")
_FIELD_RE = re.compile(r"^\s*([A-Za-z_]\w*)\s*:\s*(.+?)\s*$", re.DOTALL)


@dataclass(frozen=True)
class StructDecl:
    name: str
    text: str
    span: Tuple[int, int]
    fields: Tuple[Tuple[str, str], ...]


def struct_pattern(name: str) -> "re.Pattern[str]":
    return re.compile(r"\bstruct\s+" + re.escape(name) + r"\s*\{[^}]*\}")


def find_struct(source: str, name: str) -> Optional[StructDecl]:
    """Locate the first ``struct <name> { ... }`` declaration in ``source``."""
    match = struct_pattern(name).search(source)
    if match is None:
        return None
    text = match.group(0)
    body = text[text.index("{") + 1 : -1]
    return StructDecl(name=name, text=text, span=match.span(), fields=tuple(split_fields(body)))


def split_fields(body: str) -> List[Tuple[str, str]]:
    """Split a struct body into ``(name, type)`` pairs.

    Separators are ``,``, ``;`` and newlines outside template brackets.
    Member attributes such as ``@align(16)`` are dropped.
    """
    body = _BLOCK_COMMENT_RE.sub(" ", _LINE_COMMENT_RE.sub("", body))
    body = _ATTRIBUTE_RE.sub(" ", body)
    pieces: List[str] = []
    depth = 0
    current: List[str] = []
    for ch in body:
        if ch == "<":
            depth += 1
        elif ch == ">":
            depth = max(0, depth - 1)
        if depth == 0 and ch in ",;\n":
            pieces.append("".join(current))
            current = []
            continue
        current.append(ch)
    pieces.append("".join(current))

    fields = []
    for piece in pieces:
        if not piece.strip():
            continue
        match = _FIELD_RE.match(piece)
        if match:
            fields.append((match.group(1), " ".join(match.group(2).split())))
    return fields


def layout_members(name: str, members: Sequence[Tuple[str, int, int]]) -> StructLayout:
    """Place ``(name, size, align)`` members in order using WGSL struct rules."""
    offset = 0
    alignment = MIN_STRUCT_ALIGNMENT
    placed = []
    for member_name, size, align in members:
        offset = round_up(offset, align)
        placed.append(FieldLayout(name=member_name, offset=offset, size=size, align=align))
        offset += size
        alignment = max(alignment, align)
    return StructLayout(name=name, fields=tuple(placed), size=round_up(offset, alignment), alignment=alignment)


def analyze_struct(decl: StructDecl) -> StructLayout:
    members = []
    types = []
    for field_name, type_text in decl.fields:
        field_type = classify_type(type_text)
        if field_type is None:
            logger.warning("%s.%s: unsupported type %r ignored for layout", decl.name, field_name, type_text)
            continue
        members.append((field_name, field_type.size, field_type.align))
        types.append(field_type)
    layout = layout_members(decl.name, members)
    fields = tuple(replace(field, type=field_type) for field, field_type in zip(layout.fields, types))
    return replace(layout, fields=fields)


def struct_layout(source: str, name: str) -> Optional[StructLayout]:
    decl = find_struct(source, name)
    return analyze_struct(decl) if decl is not None else None
