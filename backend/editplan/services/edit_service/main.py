"""Service factory for obtaining image editors."""

from typing import Callable

from editplan.config.settings import Settings
from editplan.services.edit_service.editor import ImageEditor


class ImageEditing:
    """Factory wrapper exposing editor builders to FastAPI dependencies."""

    @staticmethod
    def get_editor_factory() -> Callable[[], ImageEditor]:
        """Provide a callable that builds an editor from the environment."""
        return lambda: ImageEditor(Settings.from_env())
