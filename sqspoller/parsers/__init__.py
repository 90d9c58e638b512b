from .exceptions import ParseError  # noqa: F401
from .json_parser import JSONParser  # noqa: F401
