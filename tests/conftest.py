"""Shared fixtures for the sdl-summarizer test suite."""

from textwrap import dedent

import pytest
from graphql import build_schema, get_introspection_query, graphql_sync

SAMPLE_SDL = dedent(
    '''
    """A thing in the catalog"""
    type Widget {
      id: ID!
      name: String
      tags: [String!]!
    }

    # Anything with an id
    interface Node {
      id: ID!
    }

    enum Color { RED GREEN BLUE }

    scalar DateTime

    union SearchResult = Widget | Gadget

    input WidgetInput {
      name: String!
    }

    type Query {
      """Fetches a widget by id"""
      widget(id: ID!): Widget
      # Lists widgets
      widgets(first: Int, after: String): [Widget!]!

      color: Color
    }

    type Mutation {
      createWidget(input: WidgetInput!): Widget!
    }

    type Subscription {
      ping: Boolean
    }
    '''
)

# Valid schema for graphql-core round trips
VALID_SDL = dedent(
    '''
    type Widget {
      id: ID!
      name: String
    }

    type Query {
      """Fetches a widget by id"""
      widget(id: ID!): Widget
      widgets: [Widget!]!
    }

    type Mutation {
      renameWidget(id: ID!, name: String!): Widget
    }
    '''
)


@pytest.fixture
def sample_sdl():
    """Schema exercising every definition kind."""
    return SAMPLE_SDL


@pytest.fixture
def introspection_data():
    """Introspection result ({"__schema": ...}) for VALID_SDL."""
    result = graphql_sync(build_schema(VALID_SDL), get_introspection_query(descriptions=True))
    assert not result.errors
    return result.data


@pytest.fixture
def home(tmp_path, monkeypatch):
    """Isolated home directory so default config and cache paths stay in tmp."""
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code=200, payload=None, text=None, url="https://api.example.com/graphql"):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else ""
        self.url = url
        self.headers = {"Content-Type": "application/json" if payload is not None else "text/html"}

    def json(self):
        if self._payload is None:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload
