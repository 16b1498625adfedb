#!/usr/bin/env python3
"""
Unit tests for loading the knowledge test definition.
"""

import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import AsyncMock, patch

from pydantic import ValidationError

from core.knowledge_test import TestDefinition as KnowledgeTestDefinition, load_test_definition


class TestLoadTestDefinition(unittest.TestCase):

    def setUp(self):
        self.tmp_dir = tempfile.TemporaryDirectory()
        self.path = Path(self.tmp_dir.name) / "knowledge-test-config.json"

    def tearDown(self):
        self.tmp_dir.cleanup()

    def _write(self, content):
        self.path.write_text(content if isinstance(content, str) else json.dumps(content))

    def test_loads_valid_file(self):
        cards = [{"id": "A", "label": "Goggles"}, {"id": "b", "label": "put on"}]
        self._write({"cardpool": cards, "correctAnswer": "AbCd"})

        definition = load_test_definition(self.path)

        self.assertIsNotNone(definition)
        self.assertEqual(definition.card_pool, cards)
        self.assertEqual(definition.correct_answer, "AbCd")

    def test_accepts_camel_case_card_pool(self):
        self._write({"cardPool": [1, 2], "correctAnswer": "Ab"})
        definition = load_test_definition(self.path)
        self.assertEqual(definition.card_pool, [1, 2])

    def test_correct_tokens_derived_on_load(self):
        self._write({"cardpool": [], "correctAnswer": "AbCdE"})
        definition = load_test_definition(self.path)
        self.assertEqual(definition.correct_objects, ("A", "C", "E"))
        self.assertEqual(definition.correct_verbs, ("b", "d"))

    def test_missing_file_returns_none(self):
        self.assertIsNone(load_test_definition(self.path))

    def test_invalid_json_returns_none(self):
        self._write("{not json")
        with self.assertLogs("core.knowledge_test", level="ERROR"):
            self.assertIsNone(load_test_definition(self.path))

    def test_missing_correct_answer_returns_none(self):
        self._write({"cardpool": []})
        self.assertIsNone(load_test_definition(self.path))

    def test_non_object_document_returns_none(self):
        self._write([1, 2, 3])
        self.assertIsNone(load_test_definition(self.path))

    def test_non_utf8_file_returns_none(self):
        content = '{"correctAnswer": "AbCd", "cardpool": [{"label": "Schutzbrille ä"}]}'
        self.path.write_bytes(content.encode("latin-1"))
        with self.assertLogs("core.knowledge_test", level="ERROR"):
            self.assertIsNone(load_test_definition(self.path))

    def test_directory_path_returns_none(self):
        self.assertIsNone(load_test_definition(Path(self.tmp_dir.name)))


class TestStartupWithBrokenConfig(unittest.TestCase):
    """The app must come up and keep serving when the definition cannot be loaded."""

    def test_app_serves_without_definition(self):
        from fastapi.testclient import TestClient
        from main import app, settings

        with tempfile.TemporaryDirectory() as tmp_dir:
            broken = Path(tmp_dir) / "knowledge-test-config.json"
            broken.write_bytes('{"correctAnswer": "ä"}'.encode("latin-1"))

            with patch.object(settings, "knowledge_test_config_path", broken), \
                    patch("main.create_indexes", new_callable=AsyncMock), \
                    patch("main.close_client", new_callable=AsyncMock):
                with TestClient(app) as client:
                    self.assertIsNone(app.state.scoring_engine)
                    self.assertEqual(client.get("/health").status_code, 200)

                    response = client.get("/knowledge-test-config")
                    self.assertEqual(response.status_code, 503)
                    self.assertEqual(response.json()["errorCode"], "CONFIG_NOT_LOADED")

                    response = client.post("/knowledge-test-answer", json={"user_id": "u1", "answer": "AbCd"})
                    self.assertEqual(response.status_code, 503)


class TestTestDefinitionModel(unittest.TestCase):

    def test_definition_is_frozen(self):
        definition = KnowledgeTestDefinition(cardpool=[], correctAnswer="AbCd")
        with self.assertRaises(ValidationError):
            definition.correct_answer = "XyZw"
        self.assertEqual(definition.correct_objects, ("A", "C"))

    def test_empty_correct_answer(self):
        definition = KnowledgeTestDefinition(cardpool=[], correctAnswer="")
        self.assertEqual(definition.correct_objects, ())
        self.assertEqual(definition.correct_verbs, ())


if __name__ == '__main__':
    unittest.main()
