import importlib.util
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]


def _load_checker():
    script = REPO_ROOT / "scripts" / "check_import_boundaries.py"
    spec = importlib.util.spec_from_file_location("check_import_boundaries", script)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_package_respects_layer_boundaries() -> None:
    checker = _load_checker()
    violations = checker.check_boundaries(REPO_ROOT)
    assert not violations, f"layer boundary violations: {violations}"


def test_checker_flags_relative_imports(tmp_path: Path) -> None:
    checker = _load_checker()
    core = tmp_path / "src" / "discord_entities" / "core"
    core.mkdir(parents=True)
    (core / "bad.py").write_text(
        "from ..entities import channel\nfrom .errors import EntityError\n",
        encoding="utf-8",
    )
    violations = checker.check_boundaries(tmp_path)
    assert violations == [
        (str(Path("src/discord_entities/core/bad.py")), "discord_entities.entities")
    ]
