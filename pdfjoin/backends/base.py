"""Base backend interface for PDF join operations."""

from abc import ABC, abstractmethod
from typing import Dict, Any, List, Tuple


class Backend(ABC):
    """Abstract base class for PDF join backends."""

    @abstractmethod
    def supports(self, operation: str) -> bool:
        """
        Check if this backend can handle the specified operation.

        Args:
            operation: The operation name (e.g., "list", "validate", "join")

        Returns:
            True if this backend supports the operation, False otherwise
        """
        pass

    @abstractmethod
    def process(
        self,
        documents: List[Tuple[str, bytes]],
        operation: str,
        options: Dict[str, str]
    ) -> Tuple[bytes, str, Dict[str, Any]]:
        """
        Run an operation over a set of source PDFs.

        Args:
            documents: (name, raw PDF bytes) pairs in source index order
            operation: Operation to perform
            options: Operation-specific options (e.g. "join", "join_format")

        Returns:
            Tuple of (output_data, format, metadata)
            - output_data: Processed output bytes
            - format: Output format ("json" or "pdf")
            - metadata: Additional information about the processing

        Raises:
            JoinError: If the documents or the join list are invalid
        """
        pass
