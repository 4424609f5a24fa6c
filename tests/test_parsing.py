"""Tests for aether.utils.parsing: strip_fences, response_text."""

from unittest.mock import MagicMock

from aether.utils.parsing import response_text, strip_fences


# --- strip_fences ---

class TestStripFences:
    def test_strip_json_fences(self):
        text = '```json\n{"key": "value"}\n```'
        assert strip_fences(text) == '{"key": "value"}'

    def test_strip_plain_fences(self):
        text = '```\n{"key": "value"}\n```'
        assert strip_fences(text) == '{"key": "value"}'

    def test_no_fences_returns_stripped(self):
        text = '  {"key": "value"}  '
        assert strip_fences(text) == '{"key": "value"}'

    def test_plain_json_unchanged(self):
        text = '{"logic": "const a = 1;"}'
        assert strip_fences(text) == text


# --- response_text ---

class TestResponseText:
    def _response(self, content):
        response = MagicMock()
        response.content = content
        return response

    def test_string_content(self):
        assert response_text(self._response('{"a": 1}')) == '{"a": 1}'

    def test_list_of_text_parts(self):
        parts = [{"type": "text", "text": '{"a": '}, {"type": "text", "text": "1}"}]
        assert response_text(self._response(parts)) == '{"a": 1}'

    def test_list_of_strings(self):
        assert response_text(self._response(["ab", "cd"])) == "abcd"

    def test_non_text_parts_ignored(self):
        parts = [{"type": "image_url", "image_url": "x"}, {"type": "text", "text": "ok"}]
        assert response_text(self._response(parts)) == "ok"

    def test_none_content_is_empty(self):
        assert response_text(self._response(None)) == ""

    def test_object_without_content(self):
        assert response_text(object()) == ""
