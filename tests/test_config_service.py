"""Tests for ConfigService."""

import asyncio
import json

import pytest

from config.constants import STORAGE_KEYS
from database import InMemoryKeyValueStore, SQLiteKeyValueStore
from services import ConfigService


class TestConfigService:

    @pytest.mark.asyncio
    async def test_defaults_when_nothing_stored(self, config_service):
        config = await config_service.get_config()
        assert config["name"] == "ConnectAI Chatbot"
        assert config["leadGeneration"]["captureAfterMessages"] == 2
        assert len(config["responses"]["autoResponses"]) == 3

    @pytest.mark.asyncio
    async def test_get_config_returns_copy(self, config_service):
        config = await config_service.get_config()
        config["name"] = "Changed"
        assert (await config_service.get_config())["name"] == "ConnectAI Chatbot"

    @pytest.mark.asyncio
    async def test_update_section_persists(self, store, config_service):
        appearance = {"primaryColor": "#000000", "position": "bottom-left"}
        assert await config_service.update_config("appearance", appearance)

        fresh = ConfigService(store)
        assert (await fresh.get_config())["appearance"] == appearance

    @pytest.mark.asyncio
    async def test_update_unknown_section_fails(self, config_service):
        assert not await config_service.update_config("secrets", {})

    @pytest.mark.asyncio
    async def test_write_refreshes_last_updated(self, config_service):
        before = (await config_service.get_config())["lastUpdated"]
        await config_service.update_config("name", "Support Bot")
        assert (await config_service.get_config())["lastUpdated"] >= before

    @pytest.mark.asyncio
    async def test_auto_responses(self, config_service):
        assert await config_service.add_auto_response("keyword", "refund", "Refunds take 5 days.")
        responses = (await config_service.get_config())["responses"]["autoResponses"]
        added = responses[-1]
        assert added["trigger"] == "refund"
        assert added["active"] is True

        assert await config_service.remove_auto_response(added["id"])
        responses = (await config_service.get_config())["responses"]["autoResponses"]
        assert added["id"] not in [r["id"] for r in responses]

    @pytest.mark.asyncio
    async def test_auto_response_trigger_type_is_checked(self, config_service):
        assert not await config_service.add_auto_response("regex", ".*", "nope")

    @pytest.mark.asyncio
    async def test_knowledge_sources(self, config_service):
        assert await config_service.add_knowledge_source("Blog", "url", "https://blog.example.com")
        sources = (await config_service.get_config())["knowledgeBase"]["sources"]
        assert sources[-1]["name"] == "Blog"

        assert await config_service.remove_knowledge_source(sources[-1]["id"])
        assert len((await config_service.get_config())["knowledgeBase"]["sources"]) == 2

        assert not await config_service.add_knowledge_source("Video", "youtube", "...")

    @pytest.mark.asyncio
    async def test_export_import_round_trip(self, config_service):
        await config_service.update_config("name", "Exported Bot")
        exported = await config_service.export_config()

        other = ConfigService(InMemoryKeyValueStore())
        assert await other.import_config(exported)
        assert (await other.get_config())["name"] == "Exported Bot"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", [
        "{broken",
        json.dumps({"appearance": {}}),
        json.dumps({"responses": {"welcomeMessage": "hi"}}),
        json.dumps(["responses", "appearance"]),
    ])
    async def test_invalid_import_is_rejected(self, store, config_service, raw):
        before = await config_service.get_config()
        assert not await config_service.import_config(raw)
        assert await config_service.get_config() == before
        assert await store.get(STORAGE_KEYS['config']) is None

    @pytest.mark.asyncio
    async def test_reset(self, config_service):
        await config_service.update_config("name", "Temp")
        config = await config_service.reset_config()
        assert config["name"] == "ConnectAI Chatbot"

    @pytest.mark.asyncio
    async def test_corrupt_document_falls_back_to_defaults(self):
        store = InMemoryKeyValueStore({STORAGE_KEYS['config']: "not json"})
        config = await ConfigService(store).get_config()
        assert config["name"] == "ConnectAI Chatbot"


class TestConfigShape:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("stored", ["[]", '"text"', json.dumps({"responses": {}, "appearance": {}})])
    async def test_malformed_stored_document_uses_defaults(self, stored):
        store = InMemoryKeyValueStore({STORAGE_KEYS['config']: stored})
        config = await ConfigService(store).get_config()
        assert config["responses"]["welcomeMessage"]
        assert config["responses"]["fallbackMessage"]

    @pytest.mark.asyncio
    async def test_import_requires_bot_messages(self, config_service):
        document = json.loads(await config_service.export_config())
        del document["responses"]["fallbackMessage"]

        assert not await config_service.import_config(json.dumps(document))
        assert (await config_service.get_config())["responses"]["fallbackMessage"]

    @pytest.mark.asyncio
    async def test_update_cannot_drop_required_messages(self, config_service):
        assert not await config_service.update_config("responses", {"welcomeMessage": "Hi"})
        assert not await config_service.update_config("appearance", None)

    @pytest.mark.asyncio
    async def test_chat_session_survives_rejected_import(self, chat_service, config_service):
        await config_service.import_config(json.dumps({"responses": {"autoResponses": []}, "appearance": {}}))
        messages = await chat_service.start_session()
        assert messages[0].content == (await config_service.get_config())["responses"]["welcomeMessage"]


class TestConcurrentConfigWrites:

    @pytest.mark.asyncio
    async def test_parallel_writes_on_sqlite_keep_both(self, tmp_path):
        store = SQLiteKeyValueStore(str(tmp_path / "config.db"))
        service = ConfigService(store)

        results = await asyncio.gather(
            service.add_auto_response("keyword", "refund", "Refunds take 5 days."),
            service.add_knowledge_source("Blog", "url", "https://blog.example.com"),
            service.update_config("name", "Support Bot"),
        )

        assert all(results)
        config = await ConfigService(store).get_config()
        assert config["name"] == "Support Bot"
        assert config["responses"]["autoResponses"][-1]["trigger"] == "refund"
        assert config["knowledgeBase"]["sources"][-1]["name"] == "Blog"
