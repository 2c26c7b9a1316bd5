"""
Tests for the TypeScript generator.
"""

import asyncio

import pytest

from sobject_codegen.codegen import GeneratorConfig, ObjectConfig, SObjectGenerator
from sobject_codegen.codegen.core.mapper import FieldMetadata
from sobject_codegen.codegen.core.schema import SchemaType
from sobject_codegen.codegen.languages.typescript import TypeScriptGenerator
from sobject_codegen.codegen.languages.typescript.generator import ts_string

from conftest import FakeFetcher, make_describe, make_field


def render(documents, names, **options):
    generator = TypeScriptGenerator(GeneratorConfig(**options))
    configs = [ObjectConfig(name) for name in names]
    pipeline = SObjectGenerator(generator, FakeFetcher(documents), configs)
    return asyncio.run(pipeline.generate())


@pytest.fixture
def parent_child_code(parent_child_documents):
    return render(parent_child_documents, ["Parent", "Child"]).code


class TestTypeScriptFile:
    """Tests for the generated module."""

    def test_runtime_import(self, parent_child_code):
        assert parent_child_code.splitlines()[1] == (
            "import { RestObject, SObject, sField, SalesforceFieldType, "
            "SFLocation, SFieldProperties } from 'ts-force';"
        )

    def test_custom_runtime_module(self, parent_child_documents):
        code = render(
            parent_child_documents, ["Parent"], runtime_module="@my/ts-force"
        ).code
        assert "from '@my/ts-force';" in code

    def test_declarations_in_configuration_order(self, parent_child_code):
        assert parent_child_code.index("class Parent ") < parent_child_code.index(
            "class Child "
        )

    def test_ends_with_single_newline(self, parent_child_code):
        assert parent_child_code.endswith("}\n")
        assert not parent_child_code.endswith("\n\n")


class TestTypeScriptDeclaration:
    """Tests for one interface/class pair."""

    def test_interface(self, parent_child_code):
        assert "export interface ParentFields {" in parent_child_code
        assert "    readonly _TYPE_?: 'Parent';" in parent_child_code
        assert "    readonly children?: ChildFields[];" in parent_child_code
        assert "    readonly someField?: string;" in parent_child_code
        assert "    readonly parent?: ParentFields;" in parent_child_code

    def test_class_header(self, parent_child_code):
        assert (
            "export class Child extends RestObject implements ChildFields {"
            in parent_child_code
        )
        assert "    public static API_NAME: 'Child' = 'Child';" in parent_child_code
        assert "    public readonly _TYPE_: 'Child' = 'Child';" in parent_child_code

    def test_scalar_properties(self, parent_child_code):
        assert "    public someField: string;" in parent_child_code
        assert "    public amount: number;" in parent_child_code
        assert "    public parentId: string;" in parent_child_code

    def test_child_relationship_property(self, parent_child_code):
        assert (
            "    @sField({ apiName: 'Children', createable: false, updateable: false, "
            "required: false, reference: () => { return Child; }, "
            "childRelationship: true, salesforceType: SalesforceFieldType.REFERENCE, "
            "salesforceLabel: 'Children', externalId: false })\n"
            "    public children: Child[];"
        ) in parent_child_code

    def test_lookup_relationship_precedes_scalar(self, parent_child_code):
        relationship = parent_child_code.index("    public parent: Parent;")
        scalar = parent_child_code.index("    public parentId: string;")
        assert relationship < scalar

    def test_required_lookup_scalar(self, parent_child_code):
        assert (
            "@sField({ apiName: 'ParentId', createable: true, updateable: true, "
            "required: true, reference: undefined, childRelationship: false, "
            "salesforceType: SalesforceFieldType.REFERENCE, "
            "salesforceLabel: 'Parent', externalId: false })"
        ) in parent_child_code

    def test_help_text_comment(self, parent_child_code):
        assert (
            "    /**\n"
            "     * Shown on the layout\n"
            "     */\n"
            "    @sField({ apiName: 'Some_Field__c'"
        ) in parent_child_code

    def test_help_text_omitted_without_comments(self, parent_child_documents):
        code = render(
            parent_child_documents, ["Parent"], add_comments=False
        ).code
        assert "Shown on the layout" not in code

    def test_constructor(self, parent_child_code):
        assert "    constructor(fields?: ChildFields) {" in parent_child_code
        assert "        super('Child');" in parent_child_code
        assert "        this.parent = void 0;" in parent_child_code
        assert "        Object.assign(this, fields);" in parent_child_code

    def test_static_helpers(self, parent_child_code):
        assert (
            "Parent.getPropertiesMeta<ParentFields, Parent>(Parent);"
            in parent_child_code
        )
        assert (
            "    public static async retrieve(qry: string): Promise<Child[]> {"
            in parent_child_code
        )
        assert (
            "    public static fromSFObject(sob: SObject): Child {" in parent_child_code
        )


class TestPolymorphicLookup:
    """Lookups to several objects are typed with Name."""

    @pytest.fixture
    def result(self):
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
            "Contact": make_describe("Contact", fields=[make_field("Name")]),
        }
        return render(documents, ["Task", "Contact"])

    def test_typed_as_name(self, result):
        assert "    public who: Name;" in result.code
        assert "    readonly who?: Name;" in result.code
        assert "reference: () => { return Name; }" in result.code

    def test_name_imported(self, result):
        assert "SFieldProperties, Name } from 'ts-force';" in result.code


def test_ts_string_escapes_quotes():
    assert ts_string("Owner's Name") == "'Owner\\'s Name'"
    assert ts_string("a\\b") == "'a\\\\b'"


def test_decorator_location_type():
    meta = FieldMetadata(
        api_name="Geo__c",
        createable=True,
        updateable=False,
        required=False,
        external_id=True,
        is_child_relationship=False,
        salesforce_type=SchemaType.LOCATION,
        label="Geo",
    )
    arguments = TypeScriptGenerator().decorator_arguments(meta)

    assert "salesforceType: SalesforceFieldType.LOCATION" in arguments
    assert "externalId: true" in arguments
    assert "updateable: false" in arguments


def section(code, start, end="\n}\n"):
    begin = code.index(start)
    return code[begin:code.index(end, begin)]


def test_contract_and_class_declare_each_property_once(parent_child_documents):
    generator = TypeScriptGenerator(GeneratorConfig())
    configs = [ObjectConfig("Parent"), ObjectConfig("Child")]
    pipeline = SObjectGenerator(generator, FakeFetcher(parent_child_documents), configs)
    declarations = asyncio.run(pipeline.build_declarations())
    code = generator.generate(declarations, pipeline.index)

    for declaration in declarations:
        contract = section(code, f"export interface {declaration.contract_name} {{")
        cls = section(code, f"export class {declaration.class_name} extends")
        for prop in declaration.properties:
            assert contract.count(f"\n    readonly {prop.target_name}?: ") == 1
            assert cls.count(f"\n    public {prop.target_name}: ") == 1
        assert contract.count("\n    readonly ") == len(declaration.properties) + 1
