from typing import List, Mapping

from ..dtos.language_dto import FieldDescriptor, ProjectedItem, SelectOption


def display_text(code: str, label: str) -> str:
    return f"{label} ({code})"


def project_language(code: str, label: str, emit_field_descriptor: bool) -> ProjectedItem:
    """
    Builds the UI resource for one language: a text field descriptor when
    emit_field_descriptor is set, a select option otherwise.
    """
    text = display_text(code, label)
    if emit_field_descriptor:
        return FieldDescriptor(name=code, field_label=text)
    return SelectOption(value=code, text=text)


def project_languages(
    candidates: Mapping[str, str], emit_field_descriptor: bool
) -> List[ProjectedItem]:
    return [
        project_language(code, label, emit_field_descriptor)
        for code, label in candidates.items()
    ]
