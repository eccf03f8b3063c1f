from typing import Annotated, Literal, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


SELECT_OPTION_RESOURCE_TYPE = "nt:unstructured"
TEXT_FIELD_RESOURCE_TYPE = "granite/ui/components/coral/foundation/form/textfield"


class LanguageEntry(BaseModel):
    """One row of the master language catalog, as listed by the content repository."""

    code: str = Field(
        ...,
        validation_alias=AliasChoices("code", "value"),
        description="Language/country code, e.g. en_US.",
    )
    label: str = Field(
        ...,
        validation_alias=AliasChoices("label", "text"),
        description="Localized display name of the language.",
    )


class SelectOption(BaseModel):
    kind: Literal["select_option"] = "select_option"
    resource_type: Literal["nt:unstructured"] = Field(
        SELECT_OPTION_RESOURCE_TYPE, description="Resource type consumed by select fields."
    )
    value: str = Field(..., description="Language/country code submitted by the select field.")
    text: str = Field(..., description="Option text, formatted as 'label (code)'.")

    @property
    def code(self) -> str:
        return self.value

    @property
    def display_text(self) -> str:
        return self.text


class FieldDescriptor(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    kind: Literal["field_descriptor"] = "field_descriptor"
    resource_type: Literal["granite/ui/components/coral/foundation/form/textfield"] = Field(
        TEXT_FIELD_RESOURCE_TYPE, description="Resource type of the emitted text field."
    )
    name: str = Field(..., description="Language/country code used as the text field name.")
    field_label: str = Field(
        ...,
        alias="fieldLabel",
        description="Text field label, formatted as 'label (code)'.",
    )

    @property
    def code(self) -> str:
        return self.name

    @property
    def display_text(self) -> str:
        return self.field_label


ProjectedItem = Annotated[Union[SelectOption, FieldDescriptor], Field(discriminator="kind")]


class DictionaryLanguagesResponse(BaseModel):
    dictionary_path: str = Field(
        ...,
        description="Path of the dictionary the languages were reconciled against.",
        examples=["/content/dictionaries/site/i18n"],
    )
    locale: str = Field(
        ...,
        description="Resolved locale used for display labels and collation.",
        examples=["en"],
    )
    hide_non_dictionary_languages: bool = Field(
        ...,
        description=(
            "True when only languages already in the dictionary are listed; "
            "false when only languages not yet in the dictionary are listed."
        ),
    )
    emit_text_field_resources: bool = Field(
        ..., description="True when items are text field descriptors instead of select options."
    )
    items: list[ProjectedItem] = Field(
        default_factory=list,
        description="Language items ordered by locale-aware collation of their display text.",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "dictionary_path": "/content/dictionaries/site/i18n",
                "locale": "en",
                "hide_non_dictionary_languages": False,
                "emit_text_field_resources": False,
                "items": [
                    {
                        "kind": "select_option",
                        "resource_type": "nt:unstructured",
                        "value": "en_US",
                        "text": "English (United States) (en_US)",
                    }
                ],
            }
        },
    )
