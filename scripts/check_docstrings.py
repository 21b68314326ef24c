"""Check that all code blocks in docstrings are properly closed."""

import ast
import re
from pathlib import Path
from typing import NamedTuple, TypeIs

import rich
import rich.table
import rich.text

import seqchain as sc

SRC_DIR = Path().joinpath("src", "seqchain")
CODE_BLOCK_PATTERN = re.compile(r"^```(\w*)", re.MULTILINE)
SKIP_DECORATORS = frozenset({"overload", "override", "property", "wraps"})


class DocstringError(NamedTuple):
    """Error found in a docstring."""

    file_path: Path
    func_name: str
    line_no: int
    errors: tuple[str, ...]


class ErrorDetail(NamedTuple):
    """Detail of an error with its line number."""

    line_no: int
    message: str


class State(NamedTuple):
    """State during code block traversal."""

    errors: tuple[ErrorDetail, ...]
    stack: tuple[tuple[int, str], ...]

    def to_blocks(self, start_line: int) -> sc.Stream[ErrorDetail]:
        """Convert unclosed blocks in the stack to error details."""
        return sc.Stream(self.errors).chain(
            sc.Stream(self.stack).map(
                lambda block: ErrorDetail(
                    line_no=start_line + block[0] - 1,
                    message=f"Unclosed ```{block[1]} block",
                )
            )
        )


def _is_documentable(node: ast.AST) -> TypeIs[ast.FunctionDef | ast.AsyncFunctionDef]:
    return isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef))


def _is_public(node: ast.FunctionDef | ast.AsyncFunctionDef) -> bool:
    return not node.name.startswith("_") and not node.name.istitle()


def _has_skip_decorator(node: ast.FunctionDef | ast.AsyncFunctionDef) -> bool:
    """Check if function has a decorator that should skip docstring check."""
    return (
        sc.Stream(node.decorator_list)
        .filter(
            lambda d: (isinstance(d, ast.Name) and d.id in SKIP_DECORATORS)
            or (isinstance(d, ast.Attribute) and d.attr in SKIP_DECORATORS)
        )
        .first()
        .has_value()
    )


def _check_file(file_path: Path) -> sc.Stream[DocstringError]:
    try:
        tree = ast.parse(file_path.read_text(encoding="utf-8"))
    except SyntaxError:
        return sc.Stream.empty()

    return (
        sc.Stream.from_(ast.walk(tree))
        .filter(_is_documentable)
        .filter(lambda node: not _has_skip_decorator(node))
        .map(lambda node: _process_node(file_path, node))
        .filter(lambda step: step.has_value())
        .map(lambda step: step.unwrap())
    )


def _process_node(
    file_path: Path, node: ast.FunctionDef | ast.AsyncFunctionDef
) -> sc.Step[DocstringError]:
    docstring = ast.get_docstring(node)
    if docstring is None:
        if _is_public(node):
            return sc.Yielded(
                DocstringError(file_path, node.name, node.lineno, ("Missing docstring",))
            )
        return sc.DONE

    match _check_code_blocks(docstring, node):
        case sc.Err(errors):
            return sc.Yielded(
                DocstringError(
                    file_path,
                    node.name,
                    errors[0].line_no,
                    tuple(e.message for e in errors),
                )
            )
        case _:
            return sc.DONE


def _check_code_blocks(
    docstring: str, node: ast.FunctionDef | ast.AsyncFunctionDef
) -> sc.Result[None, tuple[ErrorDetail, ...]]:
    """Check that all code blocks in docstring are properly closed and that public functions hold a python block."""
    start_line = node.lineno

    def _process_line(state: State, line: sc.Enumerated[str]) -> State:
        marker = "```"
        match = CODE_BLOCK_PATTERN.search(line.value.strip())
        if not match:
            return state
        if line.value.strip() == marker:
            if state.stack:
                return State(state.errors, state.stack[:-1])
            orphan = ErrorDetail(
                start_line + line.idx, "Closing block ``` without matching opening"
            )
            return State((*state.errors, orphan), state.stack)
        language = match.group(1) or "plaintext"
        return State(state.errors, (*state.stack, (line.idx + 1, language)))

    lines = sc.Stream(docstring.split("\n"))
    errors = (
        lines.enumerate()
        .fold(State(errors=(), stack=()), _process_line)
        .to_blocks(start_line)
        .collect()
    )
    has_python_block = (
        lines.filter(lambda line: line.strip().startswith("```python"))
        .first()
        .has_value()
    )
    if _is_public(node) and not has_python_block:
        errors = (
            *errors,
            ErrorDetail(start_line, "Missing doctest: No ```python block found in docstring"),
        )
    if errors:
        return sc.Err(errors)
    return sc.Ok(None)


def main() -> None:
    """Check all docstrings in the project."""
    rich.print(
        rich.text.Text(
            "Checking docstrings for properly closed code blocks...", style="cyan bold"
        )
    )
    files = sc.Stream.from_(SRC_DIR.rglob("*.py")).inspect(
        lambda s: rich.print(f"Checking {s.length()} py files...")
    )
    all_errors = files.flat_map(_check_file).collect()

    if not all_errors:
        rich.print(rich.text.Text("[OK] No issues found!", style="green"))
        return

    table = rich.table.Table(title="Issues Found", show_header=True)
    table.add_column("File", style="cyan")
    table.add_column("Function", style="magenta")
    table.add_column("Error", style="red")
    sc.Stream(all_errors).for_each(
        lambda error: table.add_row(
            f"{error.file_path.relative_to(Path())}:{error.line_no}",
            error.func_name,
            "\n".join(error.errors),
        )
    )
    rich.print(table)
    rich.print(
        rich.text.Text(f"\n[FAILED] Found {len(all_errors)} issue(s)", style="red")
    )


if __name__ == "__main__":
    main()
