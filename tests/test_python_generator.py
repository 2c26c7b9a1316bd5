"""
Tests for the Python generator.
"""

import asyncio

import pytest

from sobject_codegen.codegen import GeneratorConfig, ObjectConfig, SObjectGenerator
from sobject_codegen.codegen.languages.python import (
    PythonGenerator,
    python_property_name,
)

from conftest import FakeFetcher, make_describe, make_field


def render(documents, names, **options):
    generator = PythonGenerator(GeneratorConfig(language="python", **options))
    configs = [ObjectConfig(name) for name in names]
    pipeline = SObjectGenerator(generator, FakeFetcher(documents), configs)
    return asyncio.run(pipeline.generate())


@pytest.fixture
def parent_child_code(parent_child_documents):
    return render(parent_child_documents, ["Parent", "Child"]).code


class TestPythonModule:
    """Tests for the generated module header."""

    def test_runtime_imports(self, parent_child_code):
        assert (
            "from sobject_runtime import (\n"
            "    RestObject,\n"
            "    SalesforceFieldType,\n"
            "    sfield,\n"
            "    SFieldProperties,\n"
            "    SObject,\n"
            "    UNSET,\n"
            ")"
        ) in parent_child_code

    def test_typing_imports(self, parent_child_code):
        assert "from __future__ import annotations" in parent_child_code
        assert "from typing import ClassVar, Literal, TypedDict" in parent_child_code
        assert "from typing_extensions import ReadOnly" in parent_child_code

    def test_datetime_only_when_used(self, parent_child_code):
        assert "from datetime import datetime" not in parent_child_code

        documents = {"Event": make_describe("Event", fields=[make_field("StartDateTime", "datetime")])}
        code = render(documents, ["Event"]).code
        assert "from datetime import datetime" in code
        assert "    startDateTime: datetime = sfield(" in code

    def test_location_imported_when_used(self):
        documents = {"Site__c": make_describe("Site__c", fields=[make_field("Geo__c", "location")])}
        code = render(documents, ["Site__c"]).code
        assert "    SFLocation,\n" in code
        assert "    geo: SFLocation = sfield(" in code

    def test_custom_runtime_module(self, parent_child_documents):
        code = render(parent_child_documents, ["Parent"], runtime_module="my_runtime").code
        assert "from my_runtime import (" in code


class TestPythonDeclaration:
    """Tests for one contract/class pair."""

    def test_contract(self, parent_child_code):
        assert "class ParentFields(TypedDict, total=False):" in parent_child_code
        assert "    _TYPE_: ReadOnly[Literal['Parent']]" in parent_child_code
        assert "    children: ReadOnly[list[ChildFields]]" in parent_child_code
        assert "    amount: ReadOnly[float]" in parent_child_code
        assert "    parent: ReadOnly[ParentFields]" in parent_child_code

    def test_class(self, parent_child_code):
        assert "class Child(RestObject):" in parent_child_code
        assert '    """Generated class for Child"""' in parent_child_code
        assert (
            "    API_NAME: ClassVar[Literal['Child']] = 'Child'" in parent_child_code
        )

    def test_child_relationship_field(self, parent_child_code):
        assert (
            "    children: list[Child] = sfield(api_name='Children', "
            "createable=False, updateable=False, required=False, "
            "reference=lambda: Child, child_relationship=True, "
            "salesforce_type=SalesforceFieldType.REFERENCE, "
            "salesforce_label='Children', external_id=False)"
        ) in parent_child_code

    def test_lookup_relationship_precedes_scalar(self, parent_child_code):
        relationship = parent_child_code.index("    parent: Parent = sfield(")
        scalar = parent_child_code.index("    parentId: str = sfield(")
        assert relationship < scalar

    def test_required_scalar(self, parent_child_code):
        assert (
            "    parentId: str = sfield(api_name='ParentId', createable=True, "
            "updateable=True, required=True, reference=None, "
            "child_relationship=False, "
            "salesforce_type=SalesforceFieldType.REFERENCE, "
            "salesforce_label='Parent', external_id=False)"
        ) in parent_child_code

    def test_help_text_docstring(self, parent_child_code):
        assert '    """Shown on the layout"""' in parent_child_code

    def test_help_text_omitted_without_comments(self, parent_child_documents):
        code = render(parent_child_documents, ["Parent"], add_comments=False).code
        assert "Shown on the layout" not in code

    def test_init(self, parent_child_code):
        assert (
            "    def __init__(self, fields: ChildFields | None = None) -> None:"
            in parent_child_code
        )
        assert "        super().__init__('Child')" in parent_child_code
        assert "        self.parent = UNSET" in parent_child_code

    def test_helpers(self, parent_child_code):
        assert "    def FIELDS(cls) -> dict[str, SFieldProperties]:" in parent_child_code
        assert (
            "    async def retrieve(cls, qry: str) -> list[Parent]:" in parent_child_code
        )
        assert (
            "    def from_sf_object(cls, sob: SObject) -> Child:" in parent_child_code
        )


class TestPropertyEscaping:
    """Property names that collide with keywords or generated members."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("from", "from_"),
            ("class", "class_"),
            ("retrieve", "retrieve_"),
            ("FIELDS", "FIELDS_"),
            ("someField", "someField"),
        ],
    )
    def test_python_property_name(self, name, expected):
        assert python_property_name(name) == expected

    def test_escaped_property_warns(self):
        documents = {
            "Route__c": make_describe("Route__c", fields=[make_field("From__c")])
        }
        result = render(documents, ["Route__c"])

        assert "    from_: str = sfield(api_name='From__c'" in result.code
        assert "    from_: ReadOnly[str]" in result.code
        assert "Property Route.from renamed to from_" in result.warnings


def test_polymorphic_lookup_imports_name():
    documents = {
        "Task": make_describe(
            "Task",
            fields=[
                make_field(
                    "WhoId",
                    "reference",
                    referenceTo=["Contact", "Lead"],
                    relationshipName="Who",
                )
            ],
        ),
        "Lead": make_describe("Lead", fields=[make_field("Company")]),
    }
    code = render(documents, ["Task", "Lead"]).code

    assert "    Name,\n" in code
    assert "    who: Name = sfield(" in code
    assert "reference=lambda: Name" in code


def test_contract_and_class_declare_each_property_once(parent_child_documents):
    generator = PythonGenerator(GeneratorConfig(language="python"))
    configs = [ObjectConfig("Parent"), ObjectConfig("Child")]
    pipeline = SObjectGenerator(generator, FakeFetcher(parent_child_documents), configs)
    declarations = asyncio.run(pipeline.build_declarations())
    code = generator.generate(declarations, pipeline.index)

    for declaration in declarations:
        begin = code.index(f"class {declaration.contract_name}(TypedDict")
        contract = code[begin:code.index(f"class {declaration.class_name}(RestObject)")]
        begin = code.index(f"class {declaration.class_name}(RestObject)")
        cls = code[begin:code.index("    def __init__", begin)]

        contract_lines = [line for line in contract.splitlines() if "ReadOnly[" in line]
        field_lines = [line for line in cls.splitlines() if "= sfield(" in line]
        assert len(contract_lines) == len(declaration.properties) + 1
        assert len(field_lines) == len(declaration.properties)

        for prop in declaration.properties:
            name = python_property_name(prop.target_name)
            assert sum(line.startswith(f"    {name}: ReadOnly[") for line in contract_lines) == 1
            assert sum(line.startswith(f"    {name}: ") for line in field_lines) == 1


@pytest.mark.parametrize("language_options", [{}, {"add_comments": False}])
def test_generated_module_compiles(parent_child_documents, language_options):
    documents = dict(parent_child_documents)
    documents["Event"] = make_describe(
        "Event",
        fields=[
            make_field("StartDateTime", "datetime", inlineHelpText='Say """hi"""'),
            make_field("From__c"),
            make_field("Geo__c", "location"),
        ],
    )
    code = render(documents, ["Parent", "Child", "Event"], **language_options).code

    compile(code, "<generated>", "exec")
