import logging

from carver import create_app
from carver.server import configure_logging


def test_configure_logging_is_idempotent(tmp_path, monkeypatch):
    app = create_app()
    monkeypatch.setattr(app, "instance_path", str(tmp_path))
    root = logging.getLogger()
    saved = list(root.handlers)
    try:
        # Run logging config twice to ensure handlers are replaced, not stacked
        path = configure_logging(app)
        configure_logging(app)
        assert len(root.handlers) == 2
        logging.getLogger("carver.test").info("hello")
        assert (tmp_path / "carver.log").exists()
        assert path == str(tmp_path / "carver.log")
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved:
            root.addHandler(h)


def test_create_app_reads_env(monkeypatch):
    monkeypatch.setenv("CARVER_MAX_MAP_AREA", "1234")
    monkeypatch.setenv("CARVER_DEFAULT_ALGORITHM", "cave")
    monkeypatch.setenv("CARVER_MAX_ITERATIONS", "500")
    app = create_app()
    assert app.config["MAX_MAP_AREA"] == 1234
    assert app.config["DEFAULT_ALGORITHM"] == "cave"
    assert app.config["MAX_ITERATIONS"] == 500
    assert create_app({"MAX_MAP_AREA": 10}).config["MAX_MAP_AREA"] == 10
