"""Page join backend: inventory, validation and assembly of uploaded PDFs."""

import json
import logging
from typing import Dict, Any, List, Tuple

from .base import Backend
from ..config import get_config
from ..converters.assembler import assemble
from ..converters.join_list import load_join_list
from ..converters.validator import validate
from ..documents import inventory
from ..exceptions import InvalidJoinList

logger = logging.getLogger(__name__)


class PageJoinBackend(Backend):
    """Backend for listing, validating and joining PDF pages."""

    SUPPORTED_OPERATIONS = ["list", "validate", "join"]

    def supports(self, operation: str) -> bool:
        return operation in self.SUPPORTED_OPERATIONS

    def process(
        self,
        documents: List[Tuple[str, bytes]],
        operation: str,
        options: Dict[str, str]
    ) -> Tuple[bytes, str, Dict[str, Any]]:
        if not self.supports(operation):
            raise ValueError(f"Operation '{operation}' not supported")

        if operation == "list":
            infos = inventory(documents)
            result = {"documents": [info.to_dict() for info in infos]}
            metadata = {
                "documents": str(len(infos)),
                "total_pages": str(sum(info.total_pages for info in infos)),
            }
            return json.dumps(result, indent=2).encode("utf-8"), "json", metadata

        join_text = options.get("join", "")
        if not join_text.strip():
            raise InvalidJoinList("Missing 'join' option")
        join_format = options.get("join_format") or get_config().join.default_join_format
        items = load_join_list(join_text, join_format)

        if operation == "validate":
            result = validate(documents, items)
            metadata = {
                "entries": str(len(items)),
                "errors": str(len(result.errors)),
            }
            return json.dumps(result.to_dict(), indent=2).encode("utf-8"), "json", metadata

        output = assemble(documents, items)
        metadata = {
            "entries": str(len(items)),
            "size": str(len(output)),
        }
        return output, "pdf", metadata
