"""Component storage exports."""

from .component_set import (
    ComponentError,
    ComponentSet,
    load_component_file,
    save_component_file,
)
from .container_shapes import (
    ContainerShapeError,
    from_component_array,
    normalize_component_container,
    to_component_array,
)

__all__ = [
    "ComponentError",
    "ComponentSet",
    "ContainerShapeError",
    "from_component_array",
    "load_component_file",
    "normalize_component_container",
    "save_component_file",
    "to_component_array",
]
