from django.test import SimpleTestCase

from sqspoller.exceptions import InvalidEventError
from sqspoller.parsers import JSONParser, ParseError


class JSONParserTests(SimpleTestCase):
    def test_parse_str(self):
        self.assertEqual(JSONParser.parse('{"a": 1}'), {"a": 1})

    def test_parse_bytes(self):
        self.assertEqual(JSONParser.parse(b'{"a": 1}'), {"a": 1})
        self.assertEqual(JSONParser.parse(bytearray(b"[1, 2]")), [1, 2])

    def test_parse_empty_stream(self):
        with self.assertRaisesMessage(ParseError, "message body cannot be empty"):
            JSONParser.parse("")

    def test_parse_unsupported_type(self):
        with self.assertRaisesMessage(ParseError, "unsupported stream type: int"):
            JSONParser.parse(42)

    def test_parse_invalid_json(self):
        with self.assertRaises(ParseError) as ctx:
            JSONParser.parse("{not json")

        self.assertIsInstance(ctx.exception, InvalidEventError)
        self.assertEqual(ctx.exception.event, "parse")
        self.assertTrue(str(ctx.exception).startswith("[Invalid Event: parse] JSON parse error - "))

    def test_parse_invalid_encoding(self):
        with self.assertRaises(ParseError):
            JSONParser.parse(b"\xff\xfe")
