"""Pytest configuration and shared descriptor fixtures."""

import pytest

from fieldschema.models import FieldDescriptor, FieldKind, SchemaVersion, TypeDescriptor
from webapp_models import (
    DISPLAY_NAME_DESCRIPTION,
    INIT_PARAMS_DESCRIPTION,
    MAPPED_NAME_DESCRIPTION,
    MAPPINGS_DESCRIPTION,
    SERVLET_CLASS,
    SERVLET_CLASS_DESCRIPTION,
    SERVLET_NAME_DESCRIPTION,
    SERVLETS_DESCRIPTION,
    URL_PATTERN_DESCRIPTION,
    WEB_APP_DESCRIPTION,
    WEB_APP_TITLE,
)


@pytest.fixture
def servlet_definition():
    """Servlet definition type with two defaults and a map example."""
    return TypeDescriptor(
        name="ServletDefinition",
        fields=(
            FieldDescriptor(
                name="servlet-name",
                description=SERVLET_NAME_DESCRIPTION,
                examples=("HelloWorldServlet",),
                default_value="HelloWorld",
                required=True,
            ),
            FieldDescriptor(
                name="servlet-class",
                description=SERVLET_CLASS_DESCRIPTION,
                examples=("com.example.HelloWorldServlet",),
                default_value=SERVLET_CLASS,
                required=True,
            ),
            FieldDescriptor(
                name="init-params",
                description=INIT_PARAMS_DESCRIPTION,
                examples=('{"greeting": "Hello"}',),
                kind=FieldKind.MAP,
            ),
        ),
    )


@pytest.fixture
def servlet_mapping():
    """Servlet mapping type with a URL pattern constraint."""
    return TypeDescriptor(
        name="ServletMapping",
        fields=(
            FieldDescriptor(
                name="servlet-name",
                description=MAPPED_NAME_DESCRIPTION,
                examples=("HelloWorldServlet",),
                default_value="HelloWorld",
                required=True,
            ),
            FieldDescriptor(
                name="url-pattern",
                description=URL_PATTERN_DESCRIPTION,
                examples=("/hello",),
                default_value="/hello",
                pattern="^/.*",
                required=True,
            ),
        ),
    )


@pytest.fixture
def web_app():
    """Root web application type referencing both servlet types."""
    return TypeDescriptor(
        name="WebAppConfiguration",
        version=SchemaVersion.DRAFT_07,
        title=WEB_APP_TITLE,
        description=WEB_APP_DESCRIPTION,
        fields=(
            FieldDescriptor(
                name="display-name",
                description=DISPLAY_NAME_DESCRIPTION,
                examples=("My Awesome App",),
                default_value="Demo Application",
            ),
            FieldDescriptor(
                name="servlets",
                description=SERVLETS_DESCRIPTION,
                kind=FieldKind.ARRAY,
                item_type_override="ServletDefinition",
            ),
            FieldDescriptor(
                name="servlet-mappings",
                description=MAPPINGS_DESCRIPTION,
                kind=FieldKind.ARRAY,
                item_type="ServletMapping",
            ),
        ),
    )


@pytest.fixture
def web_app_types(servlet_definition, servlet_mapping):
    """Registry of the nested servlet types."""
    return {
        servlet_definition.name: servlet_definition,
        servlet_mapping.name: servlet_mapping,
    }


@pytest.fixture
def tree_node():
    """Self-referencing type: a node holding an array of nodes."""
    return TypeDescriptor(
        name="Node",
        version=SchemaVersion.DRAFT_07,
        title="Tree",
        fields=(
            FieldDescriptor(name="label", default_value="root", required=True),
            FieldDescriptor(name="children", kind=FieldKind.ARRAY, item_type="Node"),
        ),
    )
