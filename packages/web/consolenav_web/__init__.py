"""consolenav web: FastAPI backend for the navigation catalog."""

__version__ = "0.1.0"


def __getattr__(name: str):
    if name == "create_app":
        from consolenav_web.app import create_app

        return create_app
    raise AttributeError(f"module 'consolenav_web' has no attribute {name!r}")
