"""Ordered, read-only catalog of course modules."""

from typing import Iterable, Optional

from triz_course.course_content import COURSE_MODULES
from triz_course.schemas.course import Module, Question


class Catalog:
    """Modules in course order, looked up by identifier."""

    def __init__(self, modules: Iterable[Module]):
        self._modules = tuple(modules)
        self._index = {m.id: i for i, m in enumerate(self._modules)}
        if len(self._index) != len(self._modules):
            raise ValueError("Module identifiers must be unique")

    @classmethod
    def from_content(cls, content: list[dict]) -> "Catalog":
        return cls(Module.model_validate(item) for item in content)

    @property
    def modules(self) -> tuple[Module, ...]:
        return self._modules

    def __iter__(self):
        return iter(self._modules)

    def __len__(self) -> int:
        return len(self._modules)

    def get(self, module_id: str) -> Optional[Module]:
        idx = self._index.get(module_id)
        return None if idx is None else self._modules[idx]

    def index_of(self, module_id: str) -> int:
        """Position of the module in course order, or -1 when unknown."""
        return self._index.get(module_id, -1)

    def next_module_id(self, module_id: str) -> Optional[str]:
        idx = self.index_of(module_id)
        if idx == -1 or idx + 1 >= len(self._modules):
            return None
        return self._modules[idx + 1].id

    def test_questions(self, module: Module) -> list[Question]:
        return [q for s in module.test_sections for q in s.questions]

    def practice_questions(
        self, module: Module, section_id: Optional[str] = None
    ) -> list[Question]:
        """Questions of one practice section, or of all of them.

        Raises ``KeyError`` when ``section_id`` does not belong to the module.
        """
        if section_id is None:
            return [q for s in module.practice_sections for q in s.questions]
        for section in module.practice_sections:
            if section.id == section_id:
                return list(section.questions)
        raise KeyError(section_id)


default_catalog = Catalog.from_content(COURSE_MODULES)
