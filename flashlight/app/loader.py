from __future__ import annotations
import importlib.util
from pathlib import Path
import yaml
from typing import Dict, Any

STAGES_DIR = Path(__file__).resolve().parents[2] / "stages"


def load_stage_manifest(stage_root: Path) -> Dict[str, Any]:
    manifest = stage_root / "manifest.yaml"
    if not manifest.exists():
        raise FileNotFoundError(f"Missing manifest.yaml in {stage_root}")
    with open(manifest, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_stage_module(stage_root: Path):
    """
    Loads stages/<id>/main.py module and returns the module object.
    The file must define a get_stage() -> Stage factory.
    """
    main_py = stage_root / "main.py"
    if not main_py.exists():
        raise FileNotFoundError(f"Missing main.py in {stage_root}")
    spec = importlib.util.spec_from_file_location(f"stages.{stage_root.name}.main", main_py)
    assert spec and spec.loader
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)  # type: ignore[attr-defined]
    if not hasattr(module, "get_stage"):
        raise AttributeError("Stage module must define get_stage()")
    return module
