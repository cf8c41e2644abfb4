import copy
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from portfolio.domain.exceptions import ValidationError
from portfolio.utils.media import check_upload, unique_filename

logger = logging.getLogger(__name__)

Form = Dict[str, Any]


@dataclass(frozen=True)
class UploadTarget:
    bucket: str
    prefix: str
    field: str


def is_blank(value) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


def split_list(value) -> List[str]:
    """Accept "a, b" or ["a", " b"] and return ["a", "b"]."""
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [str(item).strip() for item in value if str(item).strip()]


class CollectionScreen:
    """
    List + form controller over one collection.

    Lifecycle: load() -> blank_form()/edit_form() -> save() -> load().
    Subclasses declare the collection, its editable fields, the required
    subset, list ordering and form defaults; clean() is the hook for
    per-type coercion.
    """

    collection: str = ""
    entity: str = ""
    fields: tuple = ()
    required: tuple = ()
    order_by = "-created_at"
    defaults: Dict[str, Any] = {}
    upload: Optional[UploadTarget] = None

    def __init__(self, client):
        self.client = client

    def load(self) -> List[Dict[str, Any]]:
        return self.client.select(self.collection, order_by=self.order_by)

    def blank_form(self) -> Form:
        return {
            field: copy.deepcopy(self.defaults.get(field, ""))
            for field in self.fields
        }

    def edit_form(self, record_id) -> Form:
        record = self.client.get(self.collection, record_id)
        form = {field: record.get(field) for field in self.fields}
        form["id"] = record["id"]
        return form

    def clean(self, form: Form, *, partial: bool = False) -> Form:
        """
        Whitelist editable fields and check required ones.

        A partial (update) form only has to keep the required fields it
        carries non-empty.
        """
        data = {field: form[field] for field in self.fields if field in form}

        if partial:
            missing = [f for f in self.required if f in data and is_blank(data[f])]
        else:
            missing = [f for f in self.required if is_blank(data.get(f))]

        if missing:
            raise ValidationError(
                f"Missing required field(s): {', '.join(missing)}",
                fields=missing
            )
        return data

    def save(self, form: Form, record_id=None) -> Dict[str, Any]:
        if record_id is None:
            data = {**self.blank_form(), **form}
            data = self.clean(data)
            return self.create(data)

        data = self.clean(form, partial=True)
        if not data:
            raise ValidationError("No valid fields provided for update")
        return self.client.update(self.collection, record_id, data)

    def create(self, data: Form) -> Dict[str, Any]:
        return self.client.insert(self.collection, data)

    def delete(self, record_id) -> None:
        self.client.delete(self.collection, record_id)

    def attach_file(self, form: Form, filename: str, data: bytes) -> Form:
        """
        Upload a file and put its public URL on the pending form.
        Nothing is persisted until the form is saved.
        """
        if self.upload is None:
            raise ValidationError(f"{self.entity or self.collection} does not accept uploads")

        target = self.upload
        check_upload(filename, target.bucket)

        path = unique_filename(target.prefix, filename)
        self.client.upload(target.bucket, path, data)
        url = self.client.get_public_url(target.bucket, path)

        logger.info("Uploaded %s for %s -> %s", filename, self.collection, url)
        return {**form, target.field: url}
