"""
Resume YAML loading.

Builds ResumeDocument instances from YAML files shaped like
default_resume.yaml. This is how a session gets its starting document; the
session itself never writes back to disk.
"""

from pathlib import Path
from typing import Any, Dict, Union

from omegaconf import OmegaConf

from quill.contexts.editing.document import (
    ITEM_FIELDS,
    PERSONAL_FIELDS,
    PersonalInfo,
    ResumeDocument,
    Section,
    SectionItem,
)
from quill.contexts.editing.exceptions import InvalidResumeYAMLError

DEFAULT_RESUME_PATH = Path(__file__).resolve().parent / "default_resume.yaml"

OPTIONAL_PERSONAL_FIELDS = ("linkedin", "photo_url")


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _personal_info_from_dict(data: Dict[str, Any]) -> PersonalInfo:
    unknown = set(data) - set(PERSONAL_FIELDS)
    if unknown:
        raise InvalidResumeYAMLError(f"Unknown personal_info fields: {sorted(unknown)}")

    values = {}
    for name in PERSONAL_FIELDS:
        raw = data.get(name)
        if name in OPTIONAL_PERSONAL_FIELDS:
            values[name] = None if raw in (None, "") else str(raw)
        else:
            values[name] = _text(raw)
    return PersonalInfo(**values)


def _section_from_dict(data: Dict[str, Any]) -> Section:
    if "id" not in data:
        raise InvalidResumeYAMLError(f"Section without id: {data.get('title', '<untitled>')}")

    items = []
    for item_data in data.get("items") or []:
        if "id" not in item_data:
            raise InvalidResumeYAMLError(f"Item without id in section {data['id']!r}")
        fields = {name: _text(item_data.get(name)) for name in ITEM_FIELDS}
        items.append(SectionItem(id=str(item_data["id"]), **fields))

    return Section(
        id=str(data["id"]),
        title=_text(data.get("title")),
        type=data.get("type", "experience"),
        items=tuple(items),
        is_visible=bool(data.get("is_visible", True)),
    )


def document_from_dict(data: Dict[str, Any]) -> ResumeDocument:
    """
    Build a ResumeDocument from a plain dict (the 'document' mapping).

    Raises:
        InvalidResumeYAMLError: If required structure is missing
        InvalidTemplateError: If the template is unknown
    """
    if "personal_info" not in data:
        raise InvalidResumeYAMLError("Missing 'personal_info'")

    kwargs = {
        "personal_info": _personal_info_from_dict(data["personal_info"] or {}),
        "sections": tuple(_section_from_dict(s) for s in data.get("sections") or []),
    }
    for key in ("template", "primary_color", "content_scale"):
        if data.get(key) is not None:
            kwargs[key] = data[key]

    return ResumeDocument(**kwargs)


def load_document(yaml_path: Union[str, Path]) -> ResumeDocument:
    """
    Load a resume document from YAML.

    Raises:
        FileNotFoundError: If yaml_path does not exist
        InvalidResumeYAMLError: If the YAML structure is invalid
    """
    yaml_path = Path(yaml_path)
    if not yaml_path.exists():
        raise FileNotFoundError(f"YAML file not found: {yaml_path}")

    yaml_dict = OmegaConf.to_container(OmegaConf.load(yaml_path), resolve=True)

    if not isinstance(yaml_dict, dict) or "document" not in yaml_dict:
        raise InvalidResumeYAMLError(f"Invalid YAML structure: missing 'document' key in {yaml_path}")

    if not isinstance(yaml_dict["document"], dict):
        raise InvalidResumeYAMLError(f"Invalid YAML structure: 'document' must be a mapping in {yaml_path}")

    return document_from_dict(yaml_dict["document"])


def default_document() -> ResumeDocument:
    """The seed document new sessions start from."""
    return load_document(DEFAULT_RESUME_PATH)
