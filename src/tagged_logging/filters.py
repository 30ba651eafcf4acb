"""Expose a TaggedLogger's current tags to handlers.

For code that logs straight through ``logging`` or loguru instead of the
TaggedLogger, these inject the calling context's tags into each record so a
handler format can place them.
"""

import logging
from typing import Callable

from .tagged_logger import TaggedLogger


class TagFilter(logging.Filter):
    """Inject ``record.tags`` (formatted prefix) and ``record.tag_list``.

    Use ``%(tags)s%(message)s`` in a formatter to print them.
    """

    def __init__(self, tagged_logger: TaggedLogger, name: str = ""):
        super().__init__(name)
        self.tagged_logger = tagged_logger

    def filter(self, record):
        record.tags = self.tagged_logger.format_tags()
        record.tag_list = list(self.tagged_logger.current_tags)
        return True


def tag_patcher(tagged_logger: TaggedLogger) -> Callable[[dict], None]:
    """Loguru patcher setting ``extra["tags"]`` and ``extra["tag_list"]``.

    Usage:
        logger = logger.patch(tag_patcher(tagged))
        logger.add(sys.stderr, format="{extra[tags]}{message}")
    """
    def patch(record):
        record["extra"]["tags"] = tagged_logger.format_tags()
        record["extra"]["tag_list"] = list(tagged_logger.current_tags)
    return patch
