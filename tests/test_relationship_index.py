"""Tests for typed links: idempotency, mirroring and cascades."""

import pytest

from taskgraph.errors import NotFoundError
from taskgraph.graph.relations import (
    CATEGORY_PROJECTS,
    CATEGORY_TODOS,
    PROJECT_CATEGORIES,
    TASKS,
    TASKS_OF,
    TODO_CATEGORIES,
)
from taskgraph.graph.types import EntityKind


@pytest.fixture
def project(entities):
    return entities.create(EntityKind.PROJECT, {"title": "Office Work"})


@pytest.fixture
def todo(entities):
    return entities.create(EntityKind.TODO, {"title": "scan paperwork"})


@pytest.fixture
def category(entities):
    return entities.create(EntityKind.CATEGORY, {"title": "Office"})


class TestLink:
    def test_link_returns_true_when_new(self, relationships, project, todo):
        assert relationships.link(TASKS, project.id, todo.id) is True
        assert relationships.linked_ids(TASKS, project.id) == [todo.id]

    def test_link_is_idempotent(self, relationships, graph, project, todo):
        relationships.link(TASKS, project.id, todo.id)
        assert relationships.link(TASKS, project.id, todo.id) is False
        assert relationships.link(TASKS_OF, todo.id, project.id) is False
        assert len(graph.edges) == 2

    def test_link_accepts_wire_ids(self, relationships, project, todo):
        relationships.link(TASKS, str(project.id), str(todo.id))
        assert relationships.has_any(TASKS, project.id)

    def test_link_missing_source(self, relationships, todo):
        with pytest.raises(NotFoundError, match="projects/7"):
            relationships.link(TASKS, 7, todo.id)

    def test_link_missing_target(self, relationships, graph, project):
        with pytest.raises(NotFoundError, match="todos/7"):
            relationships.link(TASKS, project.id, 7)
        assert graph.edges == {}

    def test_target_kind_is_checked(self, relationships, project, category):
        # category 1 exists, but there is no todo 1
        with pytest.raises(NotFoundError):
            relationships.link(TASKS, project.id, category.id)


class TestMirroring:
    def test_tasks_writes_tasksof(self, relationships, project, todo):
        relationships.link(TASKS, project.id, todo.id)
        assert relationships.linked_ids(TASKS_OF, todo.id) == [project.id]

    def test_tasksof_writes_tasks(self, relationships, project, todo):
        relationships.link(TASKS_OF, todo.id, project.id)
        assert relationships.linked_ids(TASKS, project.id) == [todo.id]

    def test_unlink_removes_both_sides(self, relationships, project, todo):
        relationships.link(TASKS, project.id, todo.id)
        relationships.unlink(TASKS_OF, todo.id, project.id)
        assert relationships.linked_ids(TASKS, project.id) == []
        assert relationships.linked_ids(TASKS_OF, todo.id) == []

    def test_repairs_half_written_pair(self, relationships, graph, project, todo):
        from taskgraph.graph.graph import make_edge

        graph.add_edge(
            make_edge(TASKS.edge_type, (EntityKind.PROJECT, project.id), (EntityKind.TODO, todo.id))
        )
        assert relationships.link(TASKS, project.id, todo.id) is True
        assert relationships.linked_ids(TASKS_OF, todo.id) == [project.id]


class TestIndependentRelations:
    def test_todo_categories_not_mirrored(self, relationships, todo, category):
        relationships.link(TODO_CATEGORIES, todo.id, category.id)
        assert relationships.linked_ids(TODO_CATEGORIES, todo.id) == [category.id]
        assert relationships.linked_ids(CATEGORY_TODOS, category.id) == []

    def test_category_projects_not_mirrored(self, relationships, project, category):
        relationships.link(CATEGORY_PROJECTS, category.id, project.id)
        assert relationships.linked_ids(PROJECT_CATEGORIES, project.id) == []

    def test_unlink_one_direction_keeps_other(self, relationships, todo, category):
        relationships.link(TODO_CATEGORIES, todo.id, category.id)
        relationships.link(CATEGORY_TODOS, category.id, todo.id)

        relationships.unlink(CATEGORY_TODOS, category.id, todo.id)

        assert relationships.linked_ids(TODO_CATEGORIES, todo.id) == [category.id]


class TestUnlink:
    def test_unlink_missing_edge(self, relationships, project, todo):
        with pytest.raises(NotFoundError, match="Could not find any instances"):
            relationships.unlink(TASKS, project.id, todo.id)

    def test_unlink_missing_source(self, relationships):
        with pytest.raises(NotFoundError):
            relationships.unlink(TASKS, 3, 1)

    def test_unlink_non_numeric_target(self, relationships, project):
        with pytest.raises(NotFoundError):
            relationships.unlink(TASKS, project.id, "abc")


class TestListing:
    def test_list_linked_in_link_order(self, entities, relationships, project):
        first = entities.create(EntityKind.TODO, {"title": "one"})
        second = entities.create(EntityKind.TODO, {"title": "two"})
        relationships.link(TASKS, project.id, second.id)
        relationships.link(TASKS, project.id, first.id)

        titles = [e.title for e in relationships.list_linked(TASKS, project.id)]
        assert titles == ["two", "one"]

    def test_list_linked_unknown_source(self, relationships):
        with pytest.raises(NotFoundError):
            relationships.list_linked(TASKS, 1)

    def test_has_any(self, relationships, project, todo):
        assert not relationships.has_any(TASKS, project.id)
        relationships.link(TASKS, project.id, todo.id)
        assert relationships.has_any(TASKS, project.id)


class TestCascade:
    def test_delete_project_clears_tasksof(self, entities, relationships, project, todo):
        relationships.link(TASKS, project.id, todo.id)
        entities.delete(EntityKind.PROJECT, project.id)
        assert relationships.linked_ids(TASKS_OF, todo.id) == []

    def test_delete_category_clears_every_relation(
        self, entities, relationships, graph, project, todo, category
    ):
        relationships.link(TODO_CATEGORIES, todo.id, category.id)
        relationships.link(PROJECT_CATEGORIES, project.id, category.id)
        relationships.link(CATEGORY_TODOS, category.id, todo.id)

        entities.delete(EntityKind.CATEGORY, category.id)

        assert relationships.linked_ids(TODO_CATEGORIES, todo.id) == []
        assert relationships.linked_ids(PROJECT_CATEGORIES, project.id) == []
        assert graph.edges == {}

    def test_remove_entity_returns_count(self, relationships, project, todo):
        relationships.link(TASKS, project.id, todo.id)
        assert relationships.remove_entity(EntityKind.TODO, todo.id) == 2
