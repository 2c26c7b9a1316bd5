"""Shared fixtures: describe documents and an in-memory fetcher."""

import pytest

from sobject_codegen.codegen.core.schema import DescribeMetadata, describe_from_dict


def make_field(name, type="string", **overrides):
    """Describe field entry with org-like defaults."""
    field = {
        "name": name,
        "label": name.replace("__c", "").replace("_", " "),
        "type": type,
        "createable": True,
        "updateable": True,
        "nillable": True,
        "externalId": False,
        "referenceTo": [],
        "relationshipName": None,
        "inlineHelpText": None,
    }
    field.update(overrides)
    return field


def make_describe(name, fields=(), children=()):
    return {
        "name": name,
        "fields": list(fields),
        "childRelationships": list(children),
    }


def make_child(child, relationship_name, deprecated=False):
    return {
        "childSObject": child,
        "relationshipName": relationship_name,
        "deprecatedAndHidden": deprecated,
    }


class FakeFetcher:
    """Serves describe documents from a dict and records call order."""

    def __init__(self, documents):
        self.documents = documents
        self.calls = []

    async def describe(self, api_name: str) -> DescribeMetadata:
        self.calls.append(api_name)
        try:
            return describe_from_dict(self.documents[api_name])
        except KeyError:
            raise LookupError(f"NOT_FOUND: {api_name}") from None


@pytest.fixture
def parent_child_documents():
    """Parent with a child relationship to Child; Child looks up Parent."""
    parent = make_describe(
        "Parent",
        fields=[
            make_field("Id", "id", createable=False, updateable=False, nillable=False),
            make_field("Some_Field__c", inlineHelpText="Shown on the layout"),
            make_field("Amount__c", "currency"),
        ],
        children=[
            make_child("Child", "Children"),
            make_child("Parent", "SubParents"),
        ],
    )
    child = make_describe(
        "Child",
        fields=[
            make_field("Id", "id", createable=False, updateable=False, nillable=False),
            make_field(
                "ParentId",
                "reference",
                nillable=False,
                referenceTo=["Parent"],
                relationshipName="Parent",
                label="Parent",
            ),
        ],
    )
    return {"Parent": parent, "Child": child}


@pytest.fixture
def fake_fetcher(parent_child_documents):
    return FakeFetcher(parent_child_documents)
