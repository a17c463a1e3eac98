"""Shared pydantic base for camelCase JSON bodies."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class APIModel(BaseModel):
	"""Snake_case in Python, camelCase on the wire; accepts either on input."""

	model_config = ConfigDict(
		alias_generator=to_camel,
		populate_by_name=True,
		from_attributes=True,
	)
