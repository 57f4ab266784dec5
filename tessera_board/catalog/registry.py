"""
ShapeCatalog - ordered, id-unique collection of shape definitions.

Catalog file format:
    {"shapes": [{"id": "circle_d30", "type": "circle", "d": 30}, ...]}
"""

from typing import Any, Dict, Iterator, List, Mapping, Optional

from tessera_board.errors import MalformedDefinition, UnknownShapeReference

from .shapes import ShapeDef, shape_def_from_dict


class ShapeCatalog:
    """
    Shapes keyed by id, iteration in declaration order.

    Example:
        catalog = ShapeCatalog.from_dict({"shapes": [...]})
        shape = catalog.get("circle_d30")
    """

    def __init__(self, shapes: Optional[List[ShapeDef]] = None):
        self._shapes: Dict[str, ShapeDef] = {}
        for shape in shapes or []:
            self.add(shape)

    def add(self, shape: ShapeDef) -> None:
        if not shape.id:
            raise MalformedDefinition("Catalog shapes must have an id")
        if shape.id in self._shapes:
            raise MalformedDefinition(f"Duplicate shape id '{shape.id}' in catalog")
        self._shapes[shape.id] = shape

    def get(self, shape_id: str) -> ShapeDef:
        """
        Raises:
            UnknownShapeReference: id not in the catalog
        """
        try:
            return self._shapes[shape_id]
        except KeyError:
            raise UnknownShapeReference(shape_id) from None

    def __contains__(self, shape_id: object) -> bool:
        return shape_id in self._shapes

    def __iter__(self) -> Iterator[ShapeDef]:
        return iter(self._shapes.values())

    def __len__(self) -> int:
        return len(self._shapes)

    @property
    def ids(self) -> List[str]:
        return list(self._shapes)

    def to_dict(self) -> Dict[str, Any]:
        return {"shapes": [shape.to_dict() for shape in self]}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ShapeCatalog":
        if not isinstance(data, Mapping) or not isinstance(data.get("shapes"), list):
            raise MalformedDefinition('Catalog must be an object with a "shapes" list')
        return cls([shape_def_from_dict(entry) for entry in data["shapes"]])
