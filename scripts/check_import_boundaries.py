#!/usr/bin/env python3
"""Import boundary checker.

core/ must not import from entities/ or surfaces/; entities/ must not import
from surfaces/.
"""

import ast
import sys
from pathlib import Path

PACKAGE = "discord_entities"

FORBIDDEN: dict[str, tuple[str, ...]] = {
    "core": ("entities", "surfaces"),
    "entities": ("surfaces",),
}


def find_imports(file_path: Path) -> set[str]:
    """Return imported modules as absolute dotted names."""
    imports: set[str] = set()
    try:
        tree = ast.parse(file_path.read_text(encoding="utf-8"), filename=str(file_path))
    except (OSError, SyntaxError):
        return imports

    type_checking_blocks = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.If):
            if isinstance(node.test, ast.Name) and node.test.id == "TYPE_CHECKING":
                for sub_node in ast.walk(node):
                    if isinstance(sub_node, (ast.ImportFrom, ast.Import)):
                        type_checking_blocks.add(sub_node)

    for node in ast.walk(tree):
        if node in type_checking_blocks:
            continue
        if isinstance(node, ast.ImportFrom):
            imports.add(_absolute_module(file_path, node.module or "", node.level))
        elif isinstance(node, ast.Import):
            for alias in node.names:
                imports.add(alias.name)
    return imports


def _absolute_module(file_path: Path, module: str, level: int) -> str:
    if level == 0:
        return module
    parts = list(file_path.with_suffix("").parts)
    start = len(parts) - 1 - parts[::-1].index(PACKAGE)
    anchor = parts[start:]
    base = anchor[: len(anchor) - level]
    return ".".join(base + ([module] if module else []))


def check_boundaries(root_dir: Path) -> list[tuple[str, str]]:
    violations = []
    package_dir = root_dir / "src" / PACKAGE
    for layer, forbidden in FORBIDDEN.items():
        layer_dir = package_dir / layer
        if not layer_dir.exists():
            continue
        prefixes = tuple(f"{PACKAGE}.{name}" for name in forbidden)
        for py_file in sorted(layer_dir.rglob("*.py")):
            for imp in sorted(find_imports(py_file)):
                if imp in prefixes or imp.startswith(tuple(p + "." for p in prefixes)):
                    violations.append((str(py_file.relative_to(root_dir)), imp))
    return violations


def main():
    root_dir = Path(__file__).parent.parent
    violations = check_boundaries(root_dir)

    if violations:
        print("Import boundary violations detected:")
        for file_path, imp in violations:
            print(f"  {file_path} imports {imp}")
        print("\ncore/ must not import entities/ or surfaces/; entities/ must not import surfaces/")
        sys.exit(1)
    else:
        print("Import boundary check passed")
        sys.exit(0)


if __name__ == "__main__":
    main()
