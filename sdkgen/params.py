"""Parameter list parsing.

A raw parameter string is normalized once (Java spellings are converted to
Rust ones) and tokenized once into a :class:`ParameterList`. Every list a
template needs (signatures, call arguments, struct fields, test values) is a
projection over that single sequence, so they always agree on count, order
and naming.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from sdkgen import logging as sdkgen_logging
from sdkgen.naming import java_to_snake_case
from sdkgen.type_mapping import java_type_to_rust_type

logger = sdkgen_logging.get_logger(__name__)

STR_REF = "&str"
OWNED_STRING = "String"

CONV_TYPE_NAME = "conv_type"
CONV_TYPES = frozenset({"ConversationType", "DbConversationType"})

_CALLBACK_PREFIXES = ("cb:", "cb :")
_OPENERS = "<([{"
_CLOSERS = ">)]}"

_INTEGER_TYPES = frozenset({
    "i8", "i16", "i32", "i64", "isize",
    "u8", "u16", "u32", "u64", "usize",
})
_FLOAT_TYPES = frozenset({"f32", "f64"})


def split_top_level(text: str, sep: str = ",") -> list[str]:
    """Split ``text`` on ``sep`` outside of any ``<>``/``()``/``[]``/``{}`` nesting.

    ``HashMap<String, i32>`` therefore stays a single segment. The ``>`` of a
    ``->`` arrow does not close a bracket.
    """
    segments: list[str] = []
    depth = 0
    start = 0
    prev = ""
    for idx, ch in enumerate(text):
        if ch in _OPENERS:
            depth += 1
        elif ch in _CLOSERS and not (ch == ">" and prev == "-"):
            depth = max(depth - 1, 0)
        elif ch == sep and depth == 0:
            segments.append(text[start:idx])
            start = idx + 1
        prev = ch
    segments.append(text[start:])
    return segments


def is_java_style(raw: str) -> bool:
    """Return True when ``raw`` looks like a Java parameter list.

    Rust parameters always carry a ``:``, so any ``Type name`` segment without
    one, or the ``final`` keyword anywhere, marks the whole string as Java.
    """
    if "final " in raw:
        return True
    for segment in split_top_level(raw):
        trimmed = segment.strip()
        if len(trimmed.split()) >= 2 and ":" not in trimmed:
            return True
    return False


def convert_java_params(raw: str) -> str:
    converted: list[str] = []
    for segment in split_top_level(raw):
        trimmed = segment.strip().rstrip(",").strip()
        if not trimmed:
            continue
        tokens = trimmed.replace("final ", "").split()
        if len(tokens) < 2:
            logger.debug("Dropping Java parameter without a type: %r", trimmed)
            continue
        var_name = tokens[-1].rstrip(",")
        # "String []" and "String[]" must end up as the same token
        java_type = "".join(tokens[:-1])
        converted.append(
            f"{java_to_snake_case(var_name)}: {java_type_to_rust_type(java_type)}"
        )
    return ", ".join(converted)


def normalize_params(raw: str) -> str:
    """Return the Rust spelling of a raw parameter string.

    Rust-style input is returned untouched.
    """
    if is_java_style(raw):
        converted = convert_java_params(raw)
        logger.debug("Converted Java-style parameters %r -> %r", raw, converted)
        return converted
    return raw


def normalize_param_name(name: str, param_type: str) -> str:
    if param_type in CONV_TYPES:
        return CONV_TYPE_NAME
    return name


def default_test_value(rust_type: str) -> str:
    """Return a literal of ``rust_type`` suitable for a skeleton test."""
    if rust_type == STR_REF:
        return '"test"'
    if rust_type == OWNED_STRING:
        return '"test".to_string()'
    if rust_type in _INTEGER_TYPES:
        return "0"
    if rust_type in _FLOAT_TYPES:
        return "0.0"
    if rust_type == "bool":
        return "false"
    if rust_type.startswith("Vec<"):
        return "vec![]"
    if rust_type.startswith("Option<"):
        return "None"
    return "Default::default()"


@dataclass(frozen=True)
class ParameterSpec:
    name: str
    type: str

    @property
    def is_str_ref(self) -> bool:
        return self.type == STR_REF

    @property
    def borrowed_type(self) -> str:
        """The type as a by-reference signature takes it."""
        return STR_REF if self.type == OWNED_STRING else self.type

    @property
    def owned_type(self) -> str:
        """The type as a struct stores it."""
        return OWNED_STRING if self.type == STR_REF else self.type

    @property
    def declaration(self) -> str:
        return f"{self.name}: {self.type}"


@dataclass(frozen=True)
class ParameterList:
    """Canonical, ordered parameters of one generated function.

    The trailing ``cb: CB`` callback is never part of the list; each template
    places it itself.
    """

    params: tuple[ParameterSpec, ...] = ()

    @classmethod
    def from_specs(cls, specs: Iterable[ParameterSpec]) -> "ParameterList":
        return cls(params=tuple(specs))

    def __iter__(self) -> Iterator[ParameterSpec]:
        return iter(self.params)

    def __len__(self) -> int:
        return len(self.params)

    def __bool__(self) -> bool:
        return bool(self.params)

    def canonical(self) -> str:
        return ", ".join(self.declarations())

    def declarations(self) -> list[str]:
        return [param.declaration for param in self.params]

    def borrowed_declarations(self) -> list[str]:
        return [f"{param.name}: {param.borrowed_type}" for param in self.params]

    def names(self) -> list[str]:
        return [param.name for param in self.params]

    def engine_call_args(self) -> list[str]:
        # The sync wrapper re-binds &str params as owned Strings, so the call
        # has to borrow them again.
        return [f"&{param.name}" if param.is_str_ref else param.name for param in self.params]

    def db_worker_call_args(self) -> list[str]:
        return [f"{param.name}.as_str()" if param.is_str_ref else param.name for param in self.params]

    def struct_fields(self) -> list[str]:
        return [f"{param.name}: {param.owned_type}," for param in self.params]

    def constructor_params(self) -> list[str]:
        return self.declarations()

    def field_inits(self) -> list[str]:
        return [
            f"{param.name}: {param.name}.to_string()" if param.is_str_ref else param.name
            for param in self.params
        ]

    def owned_rebindings(self) -> list[str]:
        return [
            f"let {param.name} = {param.name}.to_string();"
            for param in self.params
            if param.is_str_ref
        ]

    def trace_pairs(self) -> list[str]:
        return [f'"{param.name}": {param.name}' for param in self.params]

    def test_definitions(self) -> list[str]:
        return [
            f"let {param.name}: {param.type} = {default_test_value(param.type)};"
            for param in self.params
        ]


def parse_params(params: str) -> ParameterList:
    """Tokenize a Rust-style parameter string into a :class:`ParameterList`.

    Segments without a ``name: Type`` shape are dropped, as is any ``cb``
    callback parameter. Only the first ``:`` separates name from type, so
    path types such as ``crate::Foo`` survive.
    """
    cleaned = params.strip().rstrip(",").strip()
    specs: list[ParameterSpec] = []
    for segment in split_top_level(cleaned):
        trimmed = segment.strip()
        if not trimmed or trimmed.startswith(_CALLBACK_PREFIXES):
            continue
        name, sep, param_type = trimmed.partition(":")
        name = name.strip()
        param_type = param_type.strip().rstrip(",").strip()
        if not sep or not name or not param_type:
            logger.debug("Dropping parameter segment without a type: %r", trimmed)
            continue
        specs.append(ParameterSpec(normalize_param_name(name, param_type), param_type))
    return ParameterList.from_specs(specs)


def request_builder_declarations(params: ParameterList) -> list[str]:
    """Signature entries for a request builder.

    Builders never take owned strings, so ``String`` is borrowed here even
    though the declared list keeps it.
    """
    declarations: list[str] = []
    for param in params:
        param_type = STR_REF if param.type == OWNED_STRING else param.type
        declarations.append(f"{normalize_param_name(param.name, param_type)}: {param_type}")
    return declarations
