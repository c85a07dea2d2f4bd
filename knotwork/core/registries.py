from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from .knot_editors import KnotEditorComponent

knot_editor_registry: dict[str, type["KnotEditorComponent"]] = {}


def register_knot_editor(name: str):
    def _decorator(cls: type["KnotEditorComponent"]) -> type["KnotEditorComponent"]:
        if not name or name in knot_editor_registry:
            raise ValueError(f"Invalid or duplicate knot editor name '{name}'")
        knot_editor_registry[name] = cls
        return cls
    return _decorator
