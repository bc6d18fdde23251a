from pydantic import AliasChoices, Field


def camel_field(name: str, alias: str, **kwargs):
	"""Field read under either spelling and written out in camelCase."""
	return Field(validation_alias=AliasChoices(name, alias), serialization_alias=alias, **kwargs)
