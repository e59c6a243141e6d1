"""
Domain Exceptions

Errors raised while acquiring images, calling the oracle, or looking up ground truth.
"""


class EvaluationError(Exception):
    """Base class for evaluation errors"""
    pass


class OracleError(EvaluationError):
    """The prediction call failed, timed out, or returned an unreadable reply"""
    pass


class ImageUnavailableError(EvaluationError):
    """No local or remote image could be retrieved for an item"""
    pass


class CorpusLookupError(EvaluationError, KeyError):
    """An item id is not present in the ground-truth corpus"""

    def __init__(self, item_id: str):
        self.item_id = item_id
        super().__init__(f"Item not found: {item_id}")

    def __str__(self) -> str:
        return f"Item not found: {self.item_id}"
