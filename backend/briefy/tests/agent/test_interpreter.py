import unittest

from briefy.agent.errors import (
    InterpretationError,
    MalformedJsonError,
    NoJsonFoundError,
    UnsupportedContentTypeError,
)
from briefy.agent.interpreter import brace_span, extract_json_text, fenced_object, interpret


class InterpreterTests(unittest.TestCase):
    def test_fenced_flowchart_is_parsed(self):
        raw = (
            "Here you go:\n```json\n"
            '{"nodes":[{"id":"a","type":"input","label":"Start","position":{"x":1,"y":1}}],"edges":[]}'
            "\n```"
        )

        result = interpret("flowchart", raw)

        self.assertEqual(result["edges"], [])
        self.assertEqual(len(result["nodes"]), 1)
        self.assertEqual(result["nodes"][0]["id"], "a")
        self.assertEqual(result["nodes"][0]["position"], {"x": 1, "y": 1})

    def test_unfenced_object_surrounded_by_prose(self):
        raw = 'Claro! Seguem as tasks: {"epics": [], "tasks": [{"title": "Login"}]} Espero ter ajudado.'

        result = interpret("tasks", raw)

        self.assertEqual(result, {"epics": [], "tasks": [{"title": "Login"}]})

    def test_pr_is_trimmed_text(self):
        self.assertEqual(interpret("pr", "\n  # Documento Técnico\n\nTexto  \n"), "# Documento Técnico\n\nTexto")

    def test_pr_never_parses_json(self):
        self.assertEqual(interpret("pr", '{"a": 1}'), '{"a": 1}')

    def test_no_braces_raises_no_json_found(self):
        with self.assertRaises(NoJsonFoundError) as ctx:
            interpret("flowchart", "Desculpe, não consegui gerar.")

        self.assertEqual(str(ctx.exception), "Resposta da IA não contém JSON válido")
        self.assertEqual(ctx.exception.raw_text, "Desculpe, não consegui gerar.")

    def test_malformed_json_mentions_type_and_offending_text(self):
        with self.assertRaises(MalformedJsonError) as ctx:
            interpret("tasks", '{"epics": [,]}')

        message = str(ctx.exception)
        self.assertTrue(message.startswith("JSON tasks inválido"))
        self.assertIn('{"epics": [,]}', message)

    def test_offending_text_is_truncated(self):
        raw = "{" + '"a": ' + "x" * 1000 + "}"

        with self.assertRaises(MalformedJsonError) as ctx:
            interpret("flowchart", raw)

        self.assertTrue(str(ctx.exception).endswith("..."))
        self.assertLess(len(str(ctx.exception)), 500)

    def test_control_characters_inside_strings_are_tolerated(self):
        result = interpret("tasks", '{"tasks": [{"title": "linha1\nlinha2"}]}')

        self.assertEqual(result["tasks"][0]["title"], "linha1\nlinha2")

    def test_unsupported_type(self):
        with self.assertRaises(UnsupportedContentTypeError):
            interpret("diagram", "{}")

    def test_errors_are_value_errors(self):
        self.assertTrue(issubclass(InterpretationError, ValueError))

    def test_interpret_is_deterministic(self):
        raw = '```json\n{"nodes": [{"id": "n1"}], "edges": []}\n```'

        self.assertEqual(interpret("flowchart", raw), interpret("flowchart", raw))


class ExtractorTests(unittest.TestCase):
    def test_fence_wins_over_outer_braces(self):
        raw = 'prefix {not json} ```json\n{"a": 1}\n``` suffix'

        self.assertEqual(extract_json_text(raw), '{"a": 1}')

    def test_fence_without_language_tag(self):
        self.assertEqual(fenced_object('```\n{"a": 1}\n```'), '{"a": 1}')

    def test_brace_span_is_greedy(self):
        self.assertEqual(brace_span('x {"a": {"b": 1}} y'), '{"a": {"b": 1}}')

    def test_nothing_found(self):
        self.assertIsNone(extract_json_text("sem json"))
