import ast
from pathlib import Path

import pytest

CONFIG_DIR = Path(__file__).resolve().parents[1] / "config"


def _default_settings_module(path: Path) -> str:
    """os.environ.setdefault("DJANGO_SETTINGS_MODULE", ...) 의 기본값 (import 없이 읽는다)"""
    for node in ast.walk(ast.parse(path.read_text(encoding="utf-8"))):
        if (
            isinstance(node, ast.Call)
            and isinstance(node.func, ast.Attribute)
            and node.func.attr == "setdefault"
            and len(node.args) == 2
            and isinstance(node.args[0], ast.Constant)
            and node.args[0].value == "DJANGO_SETTINGS_MODULE"
        ):
            return node.args[1].value
    raise AssertionError(f"no DJANGO_SETTINGS_MODULE default in {path.name}")


@pytest.mark.parametrize("entrypoint", ["wsgi.py", "asgi.py"])
def test_server_entrypoints_default_to_prod_settings(entrypoint):
    assert _default_settings_module(CONFIG_DIR / entrypoint) == "apps.api.config.settings.prod"


def test_manage_py_defaults_to_dev_settings():
    manage_py = CONFIG_DIR.parents[2] / "manage.py"
    assert _default_settings_module(manage_py) == "apps.api.config.settings.dev"
