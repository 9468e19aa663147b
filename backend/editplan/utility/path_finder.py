"""Resolve backend-relative locations for the env file, templates and logs."""

from pathlib import Path


class PathResolver:
    """
    Maps logical names to absolute paths.
    Folders are created on first lookup, files are returned as-is.
    """

    # utility -> editplan -> backend
    BACKEND_ROOT = Path(__file__).resolve().parents[2]
    PACKAGE_ROOT = Path(__file__).resolve().parents[1]

    DIR_MAP = {
        "env": BACKEND_ROOT / ".env",
        "logs": BACKEND_ROOT / "data" / "logs",
        "templates": PACKAGE_ROOT / "config" / "templates.yml",
    }

    @classmethod
    def get(cls, name: str) -> Path:
        """Return the absolute path for ``name``, creating it when it is a folder."""
        if name not in cls.DIR_MAP:
            raise KeyError(
                f"Unknown directory key: '{name}'. Valid keys: {list(cls.DIR_MAP.keys())}"
            )

        path = cls.DIR_MAP[name]
        if path.suffix == "" and not path.name.startswith("."):
            path.mkdir(parents=True, exist_ok=True)
        return path


class Finder:
    """Instance facade over PathResolver for services that hold a finder."""

    def get_directory(self, name: str) -> Path:
        return PathResolver.get(name)
