"""
Oracle base class

Defines the abstract base class inherited by every prediction oracle. An oracle
turns one image into a structured PredictionOutput; how it does so is opaque
to the evaluation core.
"""

from abc import ABC, abstractmethod

from vintage_eval_core.domain.value_objects import ImagePayload, PredictionOutput


class Oracle(ABC):
    """Abstract base class for prediction oracles"""

    model_name: str = ""

    @abstractmethod
    def predict(self, image: ImagePayload) -> PredictionOutput:
        """
        Identify the object in an image

        Raises:
            OracleError: If the call fails, times out, or the reply cannot be parsed
        """
        pass
