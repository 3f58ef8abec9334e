"""Tests for the async store facade."""

import asyncio

import pytest

from taskgraph.errors import NotFoundError
from taskgraph.graph.relations import TASKS, TASKS_OF, TODO_CATEGORIES
from taskgraph.graph.types import EntityKind
from taskgraph.store import create_task_store


class TestTaskStore:
    @pytest.mark.asyncio
    async def test_create_returns_view_with_links(self, store):
        view = await store.create(EntityKind.PROJECT, {"title": "p"})
        assert view.entry.title == "p"
        assert [r.name for r, _ in view.links] == ["tasks", "categories"]
        assert all(ids == [] for _, ids in view.links)

    @pytest.mark.asyncio
    async def test_view_is_a_snapshot(self, store):
        view = await store.create(EntityKind.TODO, {"title": "before"})
        await store.update(EntityKind.TODO, view.entry.id, {"title": "after"})
        assert view.entry.title == "before"
        fresh = await store.get(EntityKind.TODO, view.entry.id)
        assert fresh.entry.title == "after"

    @pytest.mark.asyncio
    async def test_view_reports_linked_ids(self, store):
        project = await store.create(EntityKind.PROJECT, {"title": "p"})
        todo = await store.create(EntityKind.TODO, {"title": "t"})
        await store.link(TASKS, project.entry.id, todo.entry.id)

        view = await store.get(EntityKind.TODO, todo.entry.id)
        links = {r.name: ids for r, ids in view.links}
        assert links == {"tasksof": [project.entry.id], "categories": []}

    @pytest.mark.asyncio
    async def test_list_and_delete(self, store):
        todo = await store.create(EntityKind.TODO, {"title": "t"})
        assert len(await store.list(EntityKind.TODO)) == 1
        await store.delete(EntityKind.TODO, todo.entry.id)
        assert await store.list(EntityKind.TODO) == []
        with pytest.raises(NotFoundError):
            await store.get(EntityKind.TODO, todo.entry.id)

    @pytest.mark.asyncio
    async def test_unlink_and_list_linked(self, store):
        todo = await store.create(EntityKind.TODO, {"title": "t"})
        category = await store.create(EntityKind.CATEGORY, {"title": "c"})
        await store.link(TODO_CATEGORIES, todo.entry.id, category.entry.id)

        linked = await store.list_linked(TODO_CATEGORIES, todo.entry.id)
        assert [c.title for c in linked] == ["c"]
        assert await store.has_any(TODO_CATEGORIES, todo.entry.id)

        await store.unlink(TODO_CATEGORIES, todo.entry.id, category.entry.id)
        assert not await store.has_any(TODO_CATEGORIES, todo.entry.id)


class TestConcurrency:
    @pytest.mark.asyncio
    async def test_concurrent_links_do_not_duplicate(self, store):
        project = await store.create(EntityKind.PROJECT, {"title": "p"})
        todo = await store.create(EntityKind.TODO, {"title": "t"})

        results = await asyncio.gather(
            *[store.link(TASKS, project.entry.id, todo.entry.id) for _ in range(10)],
            *[store.link(TASKS_OF, todo.entry.id, project.entry.id) for _ in range(10)],
        )

        assert results.count(True) == 1
        assert len(store.graph.edges) == 2

    @pytest.mark.asyncio
    async def test_concurrent_creates_get_distinct_ids(self, store):
        views = await asyncio.gather(
            *[store.create(EntityKind.TODO, {"title": f"t{i}"}) for i in range(20)]
        )
        assert len({v.entry.id for v in views}) == 20

    @pytest.mark.asyncio
    async def test_link_racing_delete_leaves_no_dangling_edge(self, store):
        project = await store.create(EntityKind.PROJECT, {"title": "p"})
        todo = await store.create(EntityKind.TODO, {"title": "t"})

        results = await asyncio.gather(
            store.delete(EntityKind.TODO, todo.entry.id),
            store.link(TASKS, project.entry.id, todo.entry.id),
            return_exceptions=True,
        )

        assert isinstance(results[1], NotFoundError)
        assert store.graph.edges == {}


class TestSeed:
    @pytest.mark.asyncio
    async def test_demo_data(self):
        store = create_task_store(seed_demo_data=True)
        todos = await store.list(EntityKind.TODO)
        assert [t.entry.title for t in todos] == ["scan paperwork", "file paperwork"]

        project = (await store.list(EntityKind.PROJECT))[0]
        tasks = await store.list_linked(TASKS, project.entry.id)
        assert len(tasks) == 2

    def test_empty_by_default(self):
        store = create_task_store()
        assert store.graph.edges == {}
