import json

from .base_parser import BaseParser
from .exceptions import ParseError


class JSONParser(BaseParser):
    @staticmethod
    def parse(stream, encoding="utf-8"):
        """
        Decodes a message body as JSON.

        SQS bodies arrive as strings; bytes-like streams are decoded first.
        """
        if not stream:
            raise ParseError("JSON parse error - message body cannot be empty")

        if isinstance(stream, (bytes, bytearray, memoryview)):
            try:
                stream = bytes(stream).decode(encoding)
            except UnicodeDecodeError as exc:
                raise ParseError(f"JSON parse error - body is not valid {encoding}: {exc}")
        elif not isinstance(stream, str):
            raise ParseError(f"JSON parse error - unsupported stream type: {type(stream).__name__}")

        try:
            return json.loads(stream)
        except json.JSONDecodeError as exc:
            raise ParseError(f"JSON parse error - {exc.msg} at line {exc.lineno} column {exc.colno}")
