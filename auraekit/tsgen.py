"""Generate TypeScript client classes for the operations a runtime exposes.

An operations spec names a module followed by its services, each with the
RPCs it offers::

    runtime,
    {
        CellService,
        allocate(CellServiceAllocateRequest) -> CellServiceAllocateResponse,
    },

A single service may also be written without braces::

    runtime, CellService, allocate(Request) -> Response

For every service a ``<Service>Client`` class is appended to the TypeScript
that the protobuf compiler wrote to ``<gen>/v0/<module>.ts``; the result goes
to ``<gen>/<module>.ts``.
"""

from __future__ import annotations

import argparse
import os
import re
import sys
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from auraekit.casing import to_lower_camel_case, to_snake_case

__all__ = [
    "RUNTIME_MODULE",
    "FunctionSpec",
    "ServiceSpec",
    "parse_ops_spec",
    "runtime_services",
    "op_name",
    "typescript_service",
    "generate_typescript",
    "copy_helpers",
    "main",
]

RUNTIME_MODULE = "runtime"

_METHOD_TEMPLATE = (
    "\n{fn_name}(request: {arg}): Promise<{returns}> {{\n"
    "    // @ts-ignore\n"
    "    return Deno.core.ops.{op_name}(request);\n"
    "}}      \n"
    "        "
)


@dataclass(frozen=True)
class FunctionSpec:
    """One RPC: its name, request type and response type."""

    name: str
    arg: str
    returns: str

    @property
    def method_name(self) -> str:
        """The snake-case name of the client method."""
        return to_snake_case(self.name)


@dataclass(frozen=True)
class ServiceSpec:
    """A service and the RPCs it offers, in declaration order."""

    name: str
    functions: tuple[FunctionSpec, ...] = ()

    @property
    def client_name(self) -> str:
        return f"{self.name}Client"


_LEXEME = re.compile(r"->|::|[A-Za-z_][A-Za-z0-9_]*|[{}(),]")
_IDENT = re.compile(r"[A-Za-z_][A-Za-z0-9_]*\Z")


def _lex(text: str) -> list[str]:
    lexemes: list[str] = []
    position = 0
    while position < len(text):
        if text[position].isspace():
            position += 1
            continue
        match = _LEXEME.match(text, position)
        if match is None:
            raise ValueError(
                f"unexpected character {text[position]!r} at offset {position}"
            )
        lexemes.append(match.group())
        position = match.end()
    return lexemes


class _Parser:
    def __init__(self, lexemes: list[str]) -> None:
        self._lexemes = lexemes
        self._position = 0

    def peek(self) -> str | None:
        if self._position < len(self._lexemes):
            return self._lexemes[self._position]
        return None

    def at_end(self) -> bool:
        return self._position >= len(self._lexemes)

    def take(self) -> str:
        item = self.peek()
        if item is None:
            raise ValueError("unexpected end of input")
        self._position += 1
        return item

    def expect(self, expected: str) -> None:
        item = self.take()
        if item != expected:
            raise ValueError(f"expected {expected!r}, found {item!r}")

    def ident(self) -> str:
        item = self.take()
        if not _IDENT.match(item):
            raise ValueError(f"expected identifier, found {item!r}")
        return item

    def type_path(self) -> str:
        parts = [self.ident()]
        while self.peek() == "::":
            self.take()
            parts.append(self.ident())
        return "::".join(parts)

    def function(self) -> FunctionSpec:
        name = self.ident()
        self.expect("(")
        arg = self.type_path()
        self.expect(")")
        self.expect("->")
        returns = self.type_path()
        return FunctionSpec(name, arg, returns)

    def functions(self, closing: str | None) -> tuple[FunctionSpec, ...]:
        found: list[FunctionSpec] = []
        while self.peek() != closing:
            found.append(self.function())
            if self.peek() == closing:
                break
            self.expect(",")
        return tuple(found)

    def service_braced(self) -> ServiceSpec:
        self.expect("{")
        name = self.ident()
        self.expect(",")
        functions = self.functions("}")
        self.expect("}")
        return ServiceSpec(name, functions)


def parse_ops_spec(text: str) -> tuple[str, tuple[ServiceSpec, ...]]:
    """Parse an operations spec into its module name and services.

    Raises :class:`ValueError` on malformed input.
    """
    parser = _Parser(_lex(text))
    module = parser.ident()
    parser.expect(",")

    if parser.peek() is not None and parser.peek() != "{":
        name = parser.ident()
        parser.expect(",")
        functions = parser.functions(None)
        return module, (ServiceSpec(name, functions),)

    services: list[ServiceSpec] = []
    while not parser.at_end():
        services.append(parser.service_braced())
        if parser.at_end():
            break
        parser.expect(",")
    return module, tuple(services)


def _lifecycle(service: str) -> ServiceSpec:
    return ServiceSpec(
        service,
        tuple(
            FunctionSpec(
                verb,
                f"{service}{verb.capitalize()}Request",
                f"{service}{verb.capitalize()}Response",
            )
            for verb in ("allocate", "free", "start", "stop")
        ),
    )


def runtime_services() -> tuple[ServiceSpec, ...]:
    """The services of the runtime module: cells and pods."""
    return (_lifecycle("CellService"), _lifecycle("PodService"))


def op_name(module: str, service: str, function: str) -> str:
    """The name under which an RPC is registered as a runtime op."""
    return "ae__{}__{}__{}".format(
        to_snake_case(module), to_snake_case(service), to_snake_case(function)
    )


def typescript_service(module: str, service: ServiceSpec) -> str:
    """Render the TypeScript client class for ``service``."""
    methods = "".join(
        _METHOD_TEMPLATE.format(
            fn_name=to_lower_camel_case(function.name),
            arg=function.arg,
            returns=function.returns,
            op_name=op_name(module, service.name, function.name),
        )
        for function in service.functions
    )
    return f"export class {service.client_name} implements {service.name} {{{methods}}}"


def generate_typescript(
    module: str, services: Iterable[ServiceSpec], gen_dir: str | os.PathLike[str]
) -> Path:
    """Append client classes to ``<gen_dir>/v0/<module>.ts``, writing ``<gen_dir>/<module>.ts``.

    Raises :class:`FileNotFoundError` when the protobuf output is missing and
    :class:`ValueError` when it is empty.
    """
    gen = Path(gen_dir)
    source = gen / "v0" / f"{module}.ts"
    try:
        contents = source.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise FileNotFoundError(f"protoc output should generate {source}") from None
    if not contents:
        raise ValueError(f"{source} is empty")

    classes = "\n\n".join(typescript_service(module, service) for service in services)
    target = gen / f"{module}.ts"
    target.write_text(contents + classes, encoding="utf-8")
    return target


def copy_helpers(
    helpers_path: str | os.PathLike[str], gen_dir: str | os.PathLike[str]
) -> Path:
    """Copy the helpers script into ``<gen_dir>/helpers.ts``, replacing any old copy."""
    contents = Path(helpers_path).read_text(encoding="utf-8")
    target = Path(gen_dir) / "helpers.ts"
    target.write_text(contents, encoding="utf-8")
    return target


def _default_gen_dir() -> Path:
    manifest = os.environ.get("CARGO_MANIFEST_DIR")
    return Path(manifest) / "gen" if manifest else Path("gen")


def main(argv: Sequence[str] | None = None) -> int:
    """Generate the TypeScript clients; returns the process exit status."""
    parser = argparse.ArgumentParser(
        prog="auraekit-tsgen",
        description="Generate TypeScript client classes for runtime operations.",
    )
    parser.add_argument(
        "--gen-dir", type=Path, default=None, help="directory holding generated code"
    )
    parser.add_argument(
        "--spec", type=Path, default=None, help="operations spec (default: runtime)"
    )
    parser.add_argument(
        "--helpers", type=Path, default=None, help="helpers script to copy into gen"
    )
    args = parser.parse_args(argv)
    gen_dir = args.gen_dir if args.gen_dir is not None else _default_gen_dir()

    try:
        if args.spec is not None:
            module, services = parse_ops_spec(args.spec.read_text(encoding="utf-8"))
        else:
            module, services = RUNTIME_MODULE, runtime_services()
        if args.helpers is not None:
            print(copy_helpers(args.helpers, gen_dir))
        print(generate_typescript(module, services, gen_dir))
    except (OSError, ValueError) as error:
        print(f"error: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())