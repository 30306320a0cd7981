from flask import Flask


def register_blueprints(app: Flask) -> None:
    from .map_api import bp_maps

    app.register_blueprint(bp_maps)


__all__ = ["register_blueprints"]
