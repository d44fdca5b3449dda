"""Command-line interface."""
from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Optional, Sequence

from matrixeditor.config import APP_VERSION, JSON_EXTENSION
from matrixeditor.logging_config import setup_logging
from matrixeditor.model.errors import MatrixError
from matrixeditor.model.io import IOManager
from matrixeditor.model.matrix import Scalar, ScalarKind
from matrixeditor.model.state import MatrixData


def format_value(value: Scalar) -> str:
    if isinstance(value, bool):
        return "x" if value else "-"
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


def render_triangle(data: MatrixData) -> str:
    """
    Renders the editable triangle of the matrix as text.

    Columns are labelled in reverse element order and row x shows only the
    first N - x cells, the same layout as a physics collision matrix.
    """
    n = data.dimension
    labels = data.column_labels()
    cells = {cell: format_value(data.read(*cell)) for cell in data.triangle_cells()}

    row_width = max((len(name) for name in data.elements.names()), default=0)
    widths = [
        max([len(labels[y])] + [len(cells[(x, y)]) for x in range(n - y)])
        for y in range(n)
    ]

    lines = [f"{data.name} ({data.scalar_kind.value}, {n}x{n})"]
    if n == 0:
        return lines[0]

    lines.append((" " * row_width + "".join(f"  {label:>{w}}" for label, w in zip(labels, widths))).rstrip())
    for x in range(n):
        row = "".join(f"  {cells[(x, y)]:>{widths[y]}}" for y in range(n - x))
        lines.append(f"{data.element_name(x):>{row_width}}{row}".rstrip())
    return "\n".join(lines)


def _cmd_new(args: argparse.Namespace) -> int:
    data = MatrixData(scalar_kind=ScalarKind(args.kind), element_names=args.elements, name=args.name)
    path = IOManager.save(data, args.path)
    print(render_triangle(data))
    print(f"Saved to {path}")
    return 0


def _cmd_show(args: argparse.Namespace) -> int:
    data = IOManager.load(args.path) if args.path else IOManager.load_example()
    print(render_triangle(data))
    return 0


def _cmd_set(args: argparse.Namespace) -> int:
    data = IOManager.load(args.path)
    value = data.scalar_kind.parse(args.value)
    data.update_value(data.scalar_kind, args.a, args.b, value)
    IOManager.save(data, args.path)
    print(render_triangle(data))
    return 0


def _cmd_add(args: argparse.Namespace) -> int:
    data = IOManager.load(args.path)
    for name in args.names:
        data.elements.append(name)
    IOManager.save(data, args.path)
    print(render_triangle(data))
    return 0


def _cmd_remove(args: argparse.Namespace) -> int:
    data = IOManager.load(args.path)
    data.elements.remove(args.index)
    IOManager.save(data, args.path)
    print(render_triangle(data))
    return 0


def _cmd_rename(args: argparse.Namespace) -> int:
    data = IOManager.load(args.path)
    data.elements.rename(args.index, args.name)
    IOManager.save(data, args.path)
    print(render_triangle(data))
    return 0


def _require_json(path: str, role: str) -> None:
    if os.path.splitext(path)[1].lower() != JSON_EXTENSION:
        raise ValueError(f"The {role} must be a {JSON_EXTENSION} file, got '{path}'.")


def _cmd_export(args: argparse.Namespace) -> int:
    _require_json(args.destination, "export destination")
    IOManager.export_json(IOManager.load_matrix(args.source), args.destination)
    return 0


def _cmd_import(args: argparse.Namespace) -> int:
    _require_json(args.source, "import source")
    IOManager.save(IOManager.import_json(args.source), args.destination)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="matrixeditor",
        description="Create, inspect and edit symmetric element matrices.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging.")
    parser.add_argument("--log-file", default=None, help="Also write the log to this file.")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("new", help="Create a matrix file.")
    p.add_argument("path")
    p.add_argument("elements", nargs="*", help="Element names, in order.")
    p.add_argument("--kind", choices=[k.value for k in ScalarKind], default=ScalarKind.BOOL.value)
    p.add_argument("--name", default="Untitled Matrix")
    p.set_defaults(func=_cmd_new)

    p = sub.add_parser("show", help="Print the matrix triangle.")
    p.add_argument("path", nargs="?", help="Matrix file; the bundled example when omitted.")
    p.set_defaults(func=_cmd_show)

    p = sub.add_parser("set", help="Write a cell and its mirror.")
    p.add_argument("path")
    p.add_argument("a", type=int)
    p.add_argument("b", type=int)
    p.add_argument("value")
    p.set_defaults(func=_cmd_set)

    p = sub.add_parser("add", help="Append elements.")
    p.add_argument("path")
    p.add_argument("names", nargs="+")
    p.set_defaults(func=_cmd_add)

    p = sub.add_parser("remove", help="Remove the element at an index.")
    p.add_argument("path")
    p.add_argument("index", type=int)
    p.set_defaults(func=_cmd_remove)

    p = sub.add_parser("rename", help="Rename the element at an index.")
    p.add_argument("path")
    p.add_argument("index", type=int)
    p.add_argument("name")
    p.set_defaults(func=_cmd_rename)

    p = sub.add_parser("export", help="Export an HDF5 matrix file to JSON.")
    p.add_argument("source")
    p.add_argument("destination", help="Target .json file.")
    p.set_defaults(func=_cmd_export)

    p = sub.add_parser("import", help="Import a JSON matrix into a matrix file.")
    p.add_argument("source", help="Source .json file.")
    p.add_argument("destination")
    p.set_defaults(func=_cmd_import)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=logging.DEBUG if args.verbose else logging.WARNING, log_file=args.log_file)

    try:
        return args.func(args)
    except (MatrixError, IndexError, ValueError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
