import pathlib
import sys

import pytest
from pydantic import ValidationError

# Allow importing the triz_course package
sys.path.append(str(pathlib.Path(__file__).resolve().parents[2]))

from triz_course.catalog import Catalog, default_catalog
from triz_course.schemas import FreeFormQuestion, Module, MultipleChoiceQuestion


def test_default_catalog_loads_in_order():
    ids = [m.id for m in default_catalog]
    assert ids == ["module-1", "module-2", "module-3", "module-4"]
    assert default_catalog.get("module-4").coming_soon
    assert default_catalog.get("missing") is None
    assert default_catalog.index_of("module-2") == 1
    assert default_catalog.index_of("missing") == -1


def test_questions_are_parsed_by_kind():
    module = default_catalog.get("module-1")
    kinds = [type(q) for q in default_catalog.test_questions(module)]
    assert kinds == [MultipleChoiceQuestion, FreeFormQuestion, MultipleChoiceQuestion]


def test_multiple_choice_requires_correct_answer_among_options():
    with pytest.raises(ValidationError):
        MultipleChoiceQuestion(
            id="q",
            text="?",
            options=[{"id": "a", "label": "A"}],
            correct_answer="z",
        )
    with pytest.raises(ValidationError):
        MultipleChoiceQuestion(id="q", text="?", options=[], correct_answer="a")


def test_next_module_and_practice_sections():
    assert default_catalog.next_module_id("module-1") == "module-2"
    assert default_catalog.next_module_id("module-4") is None
    assert default_catalog.next_module_id("missing") is None

    module = default_catalog.get("module-2")
    assert len(default_catalog.practice_questions(module)) == 3
    assert [q.id for q in default_catalog.practice_questions(module, "p-2-2")] == [
        "p-2-2-q1"
    ]
    with pytest.raises(KeyError):
        default_catalog.practice_questions(module, "nope")


def test_duplicate_module_ids_rejected():
    module = Module(id="m", title="M", pass_criteria={"threshold": 0, "total_questions": 0})
    with pytest.raises(ValueError):
        Catalog([module, module])
