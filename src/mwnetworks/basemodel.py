"""Custom overload of pydantic BaseModel."""

from __future__ import annotations

from pydantic import BaseModel as PydanticBaseModel


class BaseModel(PydanticBaseModel):
    """
    Overridden pydantic BaseModel.

    This class extends the pydantic BaseModel to exclude serializing optional arguments by default.
    """

    def model_dump(
        self, exclude_none: bool = True, mode: str = "json", **kwargs
    ) -> dict:
        """
        Override the model_dump method to customize serialization.

        Args:
            exclude_none (bool): Whether to exclude fields that are None. Defaults to True.
            mode (str): The serialization mode. Defaults to "json".
            **kwargs: Additional keyword arguments for customization.

        Returns:
            dict: The serialized representation of the model.
        """
        return super().model_dump(exclude_none=exclude_none, mode=mode, **kwargs)
