from typing import Annotated

from pydantic import BaseModel, ConfigDict, StringConstraints

NonEmptyString = Annotated[str, StringConstraints(min_length=1)]
"""Type alias for non-empty strings with minimum length of 1."""


class FrozenModel(BaseModel):
    """Immutable model with the attribute docstrings being extracted to the model JSON schema.

    Frozen models are hashable and can be used as dict keys or in sets.
    """

    model_config = ConfigDict(frozen=True, use_attribute_docstrings=True)
