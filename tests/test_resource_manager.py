"""
Integration tests for ResourceManager: the list path and the write path share one collection.
"""

import unittest
from unittest.mock import AsyncMock, Mock

from resource_manager import (
    ExtractionResult,
    FetchSnapshot,
    MissingCapabilityError,
    MutationState,
    RemoteCrud,
    ResourceManager,
)
from resource_manager.http.response import HttpResponse
from resource_manager.http.rest import RestResource


def users_page(records, page=1, total_pages=1):
    return {"data": records, "pagination": {"total": len(records), "currentPage": page, "totalPages": total_pages}}


class TestResourceManager(unittest.IsolatedAsyncioTestCase):

    async def test_added_item_lands_in_collection(self):
        created = {"id": 1, "name": "x"}
        manager = ResourceManager(
            service_fn=AsyncMock(return_value=users_page([])),
            remote=RemoteCrud(insert_fn=AsyncMock(return_value=created)),
        )
        await manager.start()
        self.assertFalse(manager.crud.is_adding)

        await manager.crud.add_item({"name": "x"})

        self.assertIs(manager.state.data[0], created)
        self.assertFalse(manager.crud.is_adding)

    async def test_update_and_delete_patch_fetched_collection(self):
        manager = ResourceManager(
            service_fn=AsyncMock(return_value=users_page([{"id": 1, "name": "a"}, {"id": 2, "name": "b"}])),
            remote=RemoteCrud(
                update_fn=AsyncMock(return_value={"id": 1, "name": "A"}),
                delete_fn=AsyncMock(return_value=None),
            ),
        )
        await manager.queries.fetch_data()

        await manager.crud.update_item(1, {"name": "A"})
        await manager.crud.delete_item(2)

        self.assertEqual(manager.state.data, [{"id": 1, "name": "A"}])

    async def test_update_with_empty_response_body_keeps_record(self):
        client = Mock()
        client.send.side_effect = [
            HttpResponse(200, {"Content-Type": "application/json"}, "", users_page([{"id": 1, "name": "a"}])),
            HttpResponse(204, {}, "", None),
        ]
        rest = RestResource(client, "https://api.example.com/users")
        manager = ResourceManager(service_fn=rest.list_page, remote=rest.remote())
        await manager.start()

        await manager.crud.update_item(1, {"name": "b"})

        self.assertEqual(manager.state.data, [{"id": 1, "name": "b"}])
        self.assertFalse(manager.crud.is_updating)

    async def test_custom_id_key(self):
        manager = ResourceManager(
            service_fn=AsyncMock(return_value=users_page([{"uuid": "u1"}, {"uuid": "u2"}])),
            remote=RemoteCrud(delete_fn=AsyncMock()),
            id_key="uuid",
        )
        await manager.start()
        await manager.crud.delete_item("u1")
        self.assertEqual(manager.state.data, [{"uuid": "u2"}])

    async def test_custom_data_key_with_default_extractor(self):
        manager = ResourceManager(
            service_fn=AsyncMock(return_value={"items": [{"id": 1}]}),
            data_key="items",
        )
        await manager.start()
        self.assertEqual(manager.state.data, [{"id": 1}])
        self.assertIsNone(manager.state.total_pages)

    async def test_custom_extractor_takes_precedence(self):
        def extractor(response):
            return ExtractionResult(records=response["users"], total_pages=response["pages"])

        manager = ResourceManager(
            service_fn=AsyncMock(return_value={"users": [{"id": 1}], "pages": 2}),
            data_extractor=extractor,
        )
        await manager.start()
        self.assertEqual(manager.state.data, [{"id": 1}])
        self.assertTrue(manager.state.has_next_page)

    async def test_start_respects_should_fetch(self):
        service = AsyncMock(return_value=users_page([]))
        manager = ResourceManager(service_fn=service, should_fetch=False)
        await manager.start()
        service.assert_not_awaited()

    async def test_update_without_remote_raises_add_without_remote_does_not(self):
        manager = ResourceManager(service_fn=AsyncMock(return_value=users_page([{"id": 1}])))
        await manager.start()

        with self.assertRaises(MissingCapabilityError):
            await manager.crud.update_item(1, {"name": "y"})

        with self.assertLogs("resource_manager.mutation", level="WARNING"):
            await manager.crud.add_item({"name": "z"})
        self.assertEqual(manager.state.data, [{"id": 1}])

    async def test_fetch_error_reaches_callback(self):
        on_error = Mock()
        manager = ResourceManager(service_fn=AsyncMock(side_effect=RuntimeError("offline")), on_error=on_error)
        with self.assertLogs("resource_manager.fetch", level="WARNING"):
            await manager.start()
        on_error.assert_called_once_with("offline")
        self.assertEqual(manager.state.error, "offline")

    async def test_subscribe_covers_state_and_crud(self):
        manager = ResourceManager(
            service_fn=AsyncMock(return_value=users_page([])),
            remote=RemoteCrud(insert_fn=AsyncMock(return_value={"id": 1})),
        )
        seen = []
        unsubscribe = manager.subscribe(seen.append)

        await manager.crud.add_item({"name": "x"})
        unsubscribe()
        await manager.start()

        kinds = {type(s) for s in seen}
        self.assertEqual(kinds, {FetchSnapshot, MutationState})
        self.assertEqual(len(seen), 3)


if __name__ == "__main__":
    unittest.main()
