import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from carver import create_app  # noqa: E402


@pytest.fixture()
def test_app(tmp_path):
    app = create_app({"TESTING": True, "MAX_MAP_AREA": 40_000})
    app.instance_path = str(tmp_path)
    return app


@pytest.fixture()
def client(test_app):
    return test_app.test_client()
